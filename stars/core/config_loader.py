# stars/core/config_loader.py

from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    OPENAI_API_KEY: str = ""
    JWT_SECRET_KEY: str = "supersecret"

    gpt_model: str = "gpt-4o"
    llm_temperature: float = 0.7
    llm_max_tokens: int = 1500
    max_tool_rounds: int = 2

    session_cookie_name: str = "stars.sid"
    session_max_age_minutes: int = 7 * 24 * 60
    cookie_secure: bool = False

    storage_backend: str = "sqlite"   # sqlite | memory
    db_path: str = "data.sqlite3"

    cors_origins: List[str] = ["*"]
    environment: str = "development"
    log_dir: str = "logs"
    log_file: str = "app.log"
    log_level: str = "INFO"
    log_max_bytes: int = 5 * 1024 * 1024
    log_backup_count: int = 5

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )


settings = Settings()
