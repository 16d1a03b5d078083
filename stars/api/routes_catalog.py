# stars/api/routes_catalog.py

from typing import List

from fastapi import APIRouter

from stars.models.catalog import DESTINATIONS, PACKAGES, Destination, TravelPackage

router = APIRouter(prefix="/api", tags=["catalog"])


@router.get("/destinations", response_model=List[Destination])
def list_destinations():
    return DESTINATIONS


@router.get("/packages", response_model=List[TravelPackage])
def list_packages():
    return PACKAGES
