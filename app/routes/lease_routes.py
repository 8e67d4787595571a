import logging
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from database.init import get_db
from enums.role import Role
from schemas.lease_schema import LeaseCreate, LeaseResponse
from services.lease_service import LeaseService
from responses.success import data_response, created_response
from responses.error import internal_server_error, service_error_response
from utils.dependencies import Identity, authorize, get_current_identity
from utils.exceptions import ServiceError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/leases", tags=["Leases"])
lease_service = LeaseService()


@router.post("", status_code=201)
def create_lease(
    lease_in: LeaseCreate,
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
):
    """Attach a signed lease document to an approved booking."""
    try:
        authorize(identity, Role.LANDLORD, message="Only landlords can create leases")
        lease = lease_service.create_lease(db, identity, lease_in)
        return created_response(LeaseResponse.model_validate(lease))
    except ServiceError as e:
        return service_error_response(e)
    except Exception:
        logger.exception("Failed to create lease for booking %s", lease_in.booking_id)
        return internal_server_error("Failed to create lease")


@router.get("/{lease_id}")
def get_lease(
    lease_id: int,
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
):
    try:
        lease = lease_service.get_lease(db, identity, lease_id)
        return data_response(LeaseResponse.model_validate(lease))
    except ServiceError as e:
        return service_error_response(e)
    except Exception:
        logger.exception("Failed to fetch lease %s", lease_id)
        return internal_server_error("Failed to fetch lease")
