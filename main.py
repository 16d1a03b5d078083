import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from stars.api.routes_auth import router as auth_router
from stars.api.routes_bookings import router as bookings_router
from stars.api.routes_accommodations import router as accommodations_router
from stars.api.routes_catalog import router as catalog_router
from stars.api.routes_chat import router as chat_router

from stars.core.config_loader import settings
from stars.core.logger import logger


def create_app() -> FastAPI:
    app = FastAPI(
        title="Dubai to the Stars",
        description="Space tourism bookings with an AI travel advisor",
        version="1.0.0"
    )

    # -------------------------------------------------------------
    # CORS
    # -------------------------------------------------------------
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # -------------------------------------------------------------
    # ERRORS
    # -------------------------------------------------------------
    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        errors = [
            {"loc": list(err["loc"]), "msg": err["msg"], "type": err["type"]}
            for err in exc.errors()
        ]
        return JSONResponse(status_code=400, content={"detail": "Invalid request data", "errors": errors})

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception(f"Unhandled error on {request.method} {request.url.path}")
        return JSONResponse(status_code=500, content={"detail": "Internal server error"})

    # -------------------------------------------------------------
    # ROUTES
    # -------------------------------------------------------------
    app.include_router(auth_router)
    app.include_router(bookings_router)
    app.include_router(accommodations_router)
    app.include_router(catalog_router)
    app.include_router(chat_router)

    # -------------------------------------------------------------
    # ROOT ENDPOINT
    # -------------------------------------------------------------
    @app.get("/")
    def root():
        return {
            "status": "ok",
            "message": "Dubai to the Stars backend is running",
            "env": settings.environment
        }

    return app


app = create_app()


# -------------------------------------------------------------
# RUN LOCAL
# -------------------------------------------------------------
if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=8000,
        reload=True
    )
