# stars/api/routes_bookings.py

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response

from stars.api.deps import get_store, require_session
from stars.core.logger import logger
from stars.db.storage import Storage
from stars.models.booking_models import BookingCreate, BookingOut, BookingUpdate
from stars.models.user_models import SessionContext
from stars.services import booking_service
from stars.services.booking_service import BookingAccessDenied, BookingNotFound, InvalidBooking

router = APIRouter(prefix="/api/bookings", tags=["bookings"])


# --------------------------
# List own bookings
# --------------------------
@router.get("", response_model=List[BookingOut])
def list_bookings(ctx: SessionContext = Depends(require_session), storage: Storage = Depends(get_store)):
    return booking_service.list_bookings(storage, ctx)


# --------------------------
# Single booking
# --------------------------
@router.get("/{booking_id}", response_model=BookingOut)
def get_booking(
    booking_id: int,
    ctx: SessionContext = Depends(require_session),
    storage: Storage = Depends(get_store),
):
    try:
        return booking_service.get_owned_booking(storage, ctx, booking_id)
    except BookingNotFound:
        raise HTTPException(404, "Booking not found")
    except BookingAccessDenied:
        raise HTTPException(403, "Access denied")


# --------------------------
# Create
# --------------------------
@router.post("", response_model=BookingOut, status_code=201)
def create_booking(
    data: BookingCreate,
    ctx: SessionContext = Depends(require_session),
    storage: Storage = Depends(get_store),
):
    try:
        return booking_service.create_booking_from_form(storage, ctx, data)
    except InvalidBooking as e:
        raise HTTPException(400, str(e))
    except Exception:
        logger.exception("Booking creation failed")
        raise HTTPException(500, "Failed to create booking")


# --------------------------
# Update
# --------------------------
@router.patch("/{booking_id}", response_model=BookingOut)
def update_booking(
    booking_id: int,
    data: BookingUpdate,
    ctx: SessionContext = Depends(require_session),
    storage: Storage = Depends(get_store),
):
    try:
        return booking_service.update_booking(storage, ctx, booking_id, data)
    except BookingNotFound:
        raise HTTPException(404, "Booking not found")
    except BookingAccessDenied:
        raise HTTPException(403, "Access denied")
    except InvalidBooking as e:
        raise HTTPException(400, str(e))
    except Exception:
        logger.exception(f"Booking {booking_id} update failed")
        raise HTTPException(500, "Failed to update booking")


# --------------------------
# Delete
# --------------------------
@router.delete("/{booking_id}", status_code=204)
def delete_booking(
    booking_id: int,
    ctx: SessionContext = Depends(require_session),
    storage: Storage = Depends(get_store),
):
    try:
        booking_service.delete_booking(storage, ctx, booking_id)
    except BookingNotFound:
        raise HTTPException(404, "Booking not found")
    except BookingAccessDenied:
        raise HTTPException(403, "Access denied")

    return Response(status_code=204)
