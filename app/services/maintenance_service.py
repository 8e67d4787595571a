import logging
from typing import List, Tuple

from sqlalchemy import true
from sqlalchemy.orm import Session, joinedload

from database.models import Booking, MaintenanceRequest, Property
from enums.booking_status import BookingStatus
from enums.maintenance_status import MaintenanceStatus
from enums.role import Role
from schemas.maintenance_schema import MaintenanceCreate
from utils.dependencies import Identity
from utils.exceptions import ForbiddenError, NotFoundError
from utils.pagination import PageParams, paginate

logger = logging.getLogger(__name__)


class MaintenanceService:
    def visibility_filter(self, identity: Identity):
        """SQL predicate selecting the requests ``identity`` may list."""
        if identity.role == Role.ADMIN:
            return true()
        if identity.role == Role.LANDLORD:
            return MaintenanceRequest.property.has(Property.landlord_id == identity.user_id)
        return MaintenanceRequest.student_id == identity.user_id

    def can_update(self, request: MaintenanceRequest, identity: Identity) -> bool:
        if identity.role == Role.ADMIN:
            return True
        if identity.role == Role.LANDLORD:
            return request.property.landlord_id == identity.user_id
        return False

    def list_requests(
        self, db: Session, identity: Identity, params: PageParams
    ) -> Tuple[List[MaintenanceRequest], int]:
        query = (
            db.query(MaintenanceRequest)
            .options(
                joinedload(MaintenanceRequest.student),
                joinedload(MaintenanceRequest.property),
            )
            .filter(self.visibility_filter(identity))
            .order_by(MaintenanceRequest.created_at.desc(), MaintenanceRequest.id.desc())
        )
        return paginate(query, params)

    def create_request(
        self, db: Session, identity: Identity, request_in: MaintenanceCreate
    ) -> MaintenanceRequest:
        property_obj = db.query(Property).filter(Property.id == request_in.property_id).first()
        if not property_obj:
            raise NotFoundError("Property not found")

        renting = (
            db.query(Booking.id)
            .filter(
                Booking.student_id == identity.user_id,
                Booking.property_id == property_obj.id,
                Booking.status == BookingStatus.APPROVED,
            )
            .first()
        )
        if renting is None:
            raise ForbiddenError(
                "You can only create maintenance requests for properties you are renting"
            )

        request = MaintenanceRequest(
            property_id=property_obj.id,
            student_id=identity.user_id,
            description=request_in.description,
            status=MaintenanceStatus.OPEN,
        )
        db.add(request)
        db.commit()
        db.refresh(request)
        logger.info("Student %s opened maintenance request %s", identity.user_id, request.id)
        return request

    def update_status(
        self,
        db: Session,
        identity: Identity,
        request_id: int,
        new_status: MaintenanceStatus,
    ) -> MaintenanceRequest:
        # Any status may follow any other
        request = db.query(MaintenanceRequest).filter(MaintenanceRequest.id == request_id).first()
        if not request:
            raise NotFoundError("Maintenance request not found")

        if not self.can_update(request, identity):
            raise ForbiddenError(
                "You can only manage maintenance requests for your own properties"
            )

        request.status = new_status
        db.commit()
        db.refresh(request)
        logger.info(
            "User %s set maintenance request %s to %s",
            identity.user_id,
            request.id,
            request.status.value,
        )
        return request
