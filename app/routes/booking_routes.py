import logging
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from database.init import get_db
from enums.role import Role
from schemas.booking_schema import BookingCreate, BookingStatusUpdate, BookingResponse
from services.booking_service import BookingService
from responses.success import data_response, created_response, paginated_response
from responses.error import internal_server_error, service_error_response
from utils.dependencies import Identity, authorize, get_current_identity
from utils.exceptions import ServiceError
from utils.pagination import PageParams, page_params, page_meta

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/bookings", tags=["Bookings"])
booking_service = BookingService()


@router.get("")
def list_bookings(
    page: PageParams = Depends(page_params),
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
):
    """
    Returns the bookings visible to the caller, newest first.

    Students see their own bookings, landlords see bookings on their
    properties and admins see every booking.
    """
    try:
        bookings, total = booking_service.list_bookings(db, identity, page)
        return paginated_response(
            [BookingResponse.model_validate(b) for b in bookings],
            page_meta(total, page),
        )
    except ServiceError as e:
        return service_error_response(e)
    except Exception:
        logger.exception("Failed to list bookings for user %s", identity.user_id)
        return internal_server_error("Failed to fetch bookings")


@router.post("", status_code=201)
def create_booking(
    booking_in: BookingCreate,
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
):
    try:
        authorize(identity, Role.STUDENT, message="Only students can create bookings")
        booking = booking_service.create_booking(db, identity, booking_in)
        return created_response(BookingResponse.model_validate(booking))
    except ServiceError as e:
        return service_error_response(e)
    except Exception:
        logger.exception("Failed to create booking for user %s", identity.user_id)
        return internal_server_error("Failed to create booking")


@router.patch("/{booking_id}")
def update_booking_status(
    booking_id: int,
    status_in: BookingStatusUpdate,
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
):
    """Approve or reject a pending booking on one of the landlord's properties."""
    try:
        authorize(identity, Role.LANDLORD, message="Only landlords can manage bookings")
        booking = booking_service.update_status(db, identity, booking_id, status_in.status)
        return data_response(BookingResponse.model_validate(booking))
    except ServiceError as e:
        return service_error_response(e)
    except Exception:
        logger.exception("Failed to update booking %s", booking_id)
        return internal_server_error("Failed to update booking")
