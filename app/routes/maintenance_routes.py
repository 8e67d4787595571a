import logging
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from database.init import get_db
from enums.role import Role
from schemas.maintenance_schema import (
    MaintenanceCreate,
    MaintenanceUpdate,
    MaintenanceResponse,
)
from services.maintenance_service import MaintenanceService
from responses.success import data_response, created_response, paginated_response
from responses.error import internal_server_error, service_error_response
from utils.dependencies import Identity, authorize, get_current_identity
from utils.exceptions import ServiceError
from utils.pagination import PageParams, page_params, page_meta

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/maintenance", tags=["Maintenance"])
maintenance_service = MaintenanceService()


@router.get("")
def list_maintenance_requests(
    page: PageParams = Depends(page_params),
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
):
    try:
        requests, total = maintenance_service.list_requests(db, identity, page)
        return paginated_response(
            [MaintenanceResponse.model_validate(r) for r in requests],
            page_meta(total, page),
        )
    except ServiceError as e:
        return service_error_response(e)
    except Exception:
        logger.exception("Failed to list maintenance requests for user %s", identity.user_id)
        return internal_server_error("Failed to fetch maintenance requests")


@router.post("", status_code=201)
def create_maintenance_request(
    request_in: MaintenanceCreate,
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
):
    """Report an issue on a property the student holds an approved booking for."""
    try:
        authorize(
            identity,
            Role.STUDENT,
            message="Only students can create maintenance requests",
        )
        request = maintenance_service.create_request(db, identity, request_in)
        return created_response(MaintenanceResponse.model_validate(request))
    except ServiceError as e:
        return service_error_response(e)
    except Exception:
        logger.exception("Failed to create maintenance request for user %s", identity.user_id)
        return internal_server_error("Failed to create maintenance request")


@router.patch("/{request_id}")
def update_maintenance_status(
    request_id: int,
    update_in: MaintenanceUpdate,
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
):
    try:
        authorize(identity, Role.LANDLORD, Role.ADMIN)
        request = maintenance_service.update_status(db, identity, request_id, update_in.status)
        return data_response(MaintenanceResponse.model_validate(request))
    except ServiceError as e:
        return service_error_response(e)
    except Exception:
        logger.exception("Failed to update maintenance request %s", request_id)
        return internal_server_error("Failed to update maintenance request")
