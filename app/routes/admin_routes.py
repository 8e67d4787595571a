import logging
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import Optional

from database.init import get_db
from enums.role import Role
from schemas.auth_schema import AdminUserResponse
from schemas.property_schema import PropertyApprovalUpdate
from schemas.property_response import PropertyResponse
from schemas.report_schema import AnalyticsResponse
from services.property_service import PropertyService
from services.report_service import ReportService
from responses.success import data_response, paginated_response, message_response
from responses.error import internal_server_error, service_error_response
from utils.dependencies import Identity, authorize, get_current_identity
from utils.exceptions import ServiceError
from utils.pagination import PageParams, page_params, page_meta

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["Admin"])
property_service = PropertyService()


def format_admin_user(row: dict) -> AdminUserResponse:
    return AdminUserResponse.model_validate(row["user"]).model_copy(
        update={
            "property_count": row["property_count"],
            "booking_count": row["booking_count"],
            "review_count": row["review_count"],
        }
    )


@router.get("/users")
def list_users(
    role: Optional[Role] = Query(None),
    page: PageParams = Depends(page_params),
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
):
    try:
        authorize(identity, Role.ADMIN)
        users, total = ReportService(db).list_users(page, role=role)
        return paginated_response(
            [format_admin_user(row) for row in users],
            page_meta(total, page),
        )
    except ServiceError as e:
        return service_error_response(e)
    except Exception:
        logger.exception("Failed to list users")
        return internal_server_error("Failed to fetch users")


@router.get("/analytics")
def get_analytics(
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
):
    """
    Platform overview: totals, bookings in the last 30 days, estimated
    revenue, bookings by status, users by role and the top properties.
    """
    try:
        authorize(identity, Role.ADMIN)
        analytics = ReportService(db).get_analytics()
        return data_response(AnalyticsResponse.model_validate(analytics))
    except ServiceError as e:
        return service_error_response(e)
    except Exception:
        logger.exception("Failed to build analytics")
        return internal_server_error("Failed to fetch analytics")


@router.patch("/properties/{property_id}")
def set_property_approval(
    property_id: int,
    approval_in: PropertyApprovalUpdate,
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
):
    try:
        authorize(identity, Role.ADMIN)
        property_obj = property_service.set_approval(db, property_id, approval_in.approved)
        return data_response(PropertyResponse.model_validate(property_obj))
    except ServiceError as e:
        return service_error_response(e)
    except Exception:
        logger.exception("Failed to update approval of property %s", property_id)
        return internal_server_error("Failed to update property")


@router.delete("/properties/{property_id}")
def delete_property(
    property_id: int,
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
):
    try:
        authorize(identity, Role.ADMIN)
        property_service.delete_property(db, identity, property_id)
        return message_response("Property deleted successfully")
    except ServiceError as e:
        return service_error_response(e)
    except Exception:
        logger.exception("Failed to delete property %s", property_id)
        return internal_server_error("Failed to delete property")
