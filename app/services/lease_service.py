import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from database.models import Booking, Lease
from enums.booking_status import BookingStatus
from schemas.lease_schema import LeaseCreate
from utils.dependencies import Identity
from utils.exceptions import ConflictError, ForbiddenError, NotFoundError

logger = logging.getLogger(__name__)


class LeaseService:
    def get_for_booking(self, db: Session, booking_id: int) -> Optional[Lease]:
        return db.query(Lease).filter(Lease.booking_id == booking_id).first()

    def create_lease(self, db: Session, identity: Identity, lease_in: LeaseCreate) -> Lease:
        """
        Attach a lease document to an approved booking.

        The booking row stays locked until commit; the unique booking_id
        column turns a concurrent second insert into a conflict.
        """
        try:
            booking = (
                db.query(Booking)
                .filter(Booking.id == lease_in.booking_id)
                .with_for_update()
                .first()
            )
            if not booking:
                raise NotFoundError("Booking not found")

            if booking.status != BookingStatus.APPROVED:
                raise ConflictError("Lease can only be created for approved bookings")

            if booking.property.landlord_id != identity.user_id:
                raise ForbiddenError("Only the property landlord can create leases")

            if self.get_for_booking(db, booking.id) is not None:
                raise ConflictError("Lease already exists for this booking")

            lease = Lease(booking_id=booking.id, document_url=str(lease_in.document_url))
            db.add(lease)
            db.commit()
        except IntegrityError:
            db.rollback()
            raise ConflictError("Lease already exists for this booking")
        except Exception:
            db.rollback()
            raise

        db.refresh(lease)
        logger.info("Landlord %s created lease %s for booking %s", identity.user_id, lease.id, lease.booking_id)
        return lease

    def can_view(self, lease: Lease, identity: Identity) -> bool:
        booking = lease.booking
        return (
            identity.is_admin
            or booking.student_id == identity.user_id
            or booking.property.landlord_id == identity.user_id
        )

    def get_lease(self, db: Session, identity: Identity, lease_id: int) -> Lease:
        """Fetch a lease for its student, its landlord or an admin.

        Anyone else gets NotFound so the lease's existence is not revealed.
        """
        lease = (
            db.query(Lease)
            .options(
                joinedload(Lease.booking).joinedload(Booking.student),
                joinedload(Lease.booking).joinedload(Booking.property),
            )
            .filter(Lease.id == lease_id)
            .first()
        )
        if not lease or not self.can_view(lease, identity):
            raise NotFoundError("Lease not found")
        return lease
