import logging
from sqlalchemy import true
from sqlalchemy.orm import Session, joinedload
from typing import List, Optional, Tuple
from datetime import datetime

from database.models import Booking, Property
from enums.booking_status import BookingStatus, ACTIVE_BOOKING_STATUSES
from enums.role import Role
from schemas.booking_schema import BookingCreate
from utils.dependencies import Identity
from utils.exceptions import (
    ConflictError,
    ForbiddenError,
    NotFoundError,
    ValidationFailedError,
)
from utils.pagination import PageParams, paginate
from utils.time_utils import to_naive_utc

logger = logging.getLogger(__name__)


class BookingService:
    def visibility_filter(self, identity: Identity):
        """SQL predicate selecting the bookings ``identity`` may list."""
        if identity.role == Role.ADMIN:
            return true()
        if identity.role == Role.LANDLORD:
            return Booking.property.has(Property.landlord_id == identity.user_id)
        return Booking.student_id == identity.user_id

    def list_bookings(
        self, db: Session, identity: Identity, params: PageParams
    ) -> Tuple[List[Booking], int]:
        query = (
            db.query(Booking)
            .options(
                joinedload(Booking.student),
                joinedload(Booking.property),
                joinedload(Booking.lease),
            )
            .filter(self.visibility_filter(identity))
            .order_by(Booking.created_at.desc(), Booking.id.desc())
        )
        return paginate(query, params)

    def find_overlapping(
        self,
        db: Session,
        property_id: int,
        lease_start: datetime,
        lease_end: datetime,
    ) -> Optional[Booking]:
        """First PENDING or APPROVED booking on the property whose dates overlap."""
        return (
            db.query(Booking)
            .filter(
                Booking.property_id == property_id,
                Booking.status.in_(ACTIVE_BOOKING_STATUSES),
                Booking.lease_start < lease_end,
                Booking.lease_end > lease_start,
            )
            .first()
        )

    def create_booking(
        self, db: Session, identity: Identity, booking_in: BookingCreate
    ) -> Booking:
        """
        Create a PENDING booking for the calling student.

        The property row is locked for the rest of the transaction, so two
        requests for the same property run their overlap checks one after
        the other and cannot both insert.
        """
        lease_start = to_naive_utc(booking_in.lease_start)
        lease_end = to_naive_utc(booking_in.lease_end)
        if lease_end <= lease_start:
            raise ValidationFailedError("Lease end date must be after start date")

        try:
            property_obj = (
                db.query(Property)
                .filter(Property.id == booking_in.property_id)
                .with_for_update()
                .first()
            )
            if not property_obj:
                raise NotFoundError("Property not found")

            if self.find_overlapping(db, property_obj.id, lease_start, lease_end):
                raise ConflictError("Property is already booked for the selected dates")

            booking = Booking(
                student_id=identity.user_id,
                property_id=property_obj.id,
                lease_start=lease_start,
                lease_end=lease_end,
                status=BookingStatus.PENDING,
            )
            db.add(booking)
            db.commit()
        except Exception:
            db.rollback()
            raise

        db.refresh(booking)
        logger.info(
            "Student %s booked property %s (booking %s)",
            identity.user_id,
            booking.property_id,
            booking.id,
        )
        return booking

    def update_status(
        self,
        db: Session,
        identity: Identity,
        booking_id: int,
        new_status: BookingStatus,
    ) -> Booking:
        """
        Approve or reject a PENDING booking on one of the caller's properties.

        A decided booking is final: deciding it again is a conflict.
        """
        try:
            booking = (
                db.query(Booking)
                .filter(Booking.id == booking_id)
                .with_for_update()
                .first()
            )
            if not booking:
                raise NotFoundError("Booking not found")

            if booking.property.landlord_id != identity.user_id:
                raise ForbiddenError("You can only manage bookings for your own properties")

            if booking.status != BookingStatus.PENDING:
                raise ConflictError("Booking has already been processed")

            booking.status = new_status
            db.commit()
        except Exception:
            db.rollback()
            raise

        db.refresh(booking)
        logger.info(
            "Landlord %s set booking %s to %s",
            identity.user_id,
            booking.id,
            booking.status.value,
        )
        return booking
