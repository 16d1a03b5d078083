# stars/api/routes_accommodations.py

from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from stars.api.deps import get_store
from stars.db.storage import Storage
from stars.models.accommodation_models import AccommodationOut, PriceRange

router = APIRouter(prefix="/api/accommodations", tags=["accommodations"])


@router.get("", response_model=List[AccommodationOut])
def list_accommodations(
    location: Optional[str] = None,
    amenity: Optional[str] = None,
    price_range: Optional[PriceRange] = Query(default=None, alias="priceRange"),
    storage: Storage = Depends(get_store),
):
    """Public catalog, filtered by location / amenity substring and price bucket."""
    return storage.get_filtered_accommodations(location, amenity, price_range)
