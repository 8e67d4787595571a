import logging
from fastapi import APIRouter, Depends, Query
from pydantic import ValidationError
from sqlalchemy.orm import Session
from typing import Optional

from database.init import get_db
from enums.role import Role
from services.property_service import PropertyService
from services.review_service import ReviewService
from schemas.property_schema import (
    PropertyCreate,
    PropertyUpdate,
    PropertySearchParams,
)
from schemas.property_response import (
    PropertyResponse,
    PropertyListItemResponse,
    PropertyDetailResponse,
)
from schemas.review_schema import ReviewResponse
from responses.error import (
    group_field_errors,
    internal_server_error,
    service_error_response,
)
from responses.success import (
    data_response,
    created_response,
    paginated_response,
    message_response,
)
from utils.dependencies import (
    Identity,
    authorize,
    get_current_identity,
    get_optional_identity,
)
from utils.exceptions import ServiceError, ValidationFailedError
from utils.pagination import PageParams, page_params, page_meta

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/properties", tags=["Properties"])

property_service = PropertyService()
review_service = ReviewService()


def search_params(
    min_price: Optional[str] = Query(None, alias="minPrice"),
    max_price: Optional[str] = Query(None, alias="maxPrice"),
    location: Optional[str] = Query(None),
    wifi: Optional[str] = Query(None),
    furnished: Optional[str] = Query(None),
    room_type: Optional[str] = Query(None, alias="roomType"),
    distance_from_campus: Optional[str] = Query(None, alias="distanceFromCampus"),
    min_rating: Optional[str] = Query(None, alias="minRating"),
) -> PropertySearchParams:
    """Parse the listing filters; blank values are ignored."""
    try:
        return PropertySearchParams(
            min_price=min_price,
            max_price=max_price,
            location=location,
            wifi=wifi,
            furnished=furnished,
            room_type=room_type,
            distance_from_campus=distance_from_campus,
            min_rating=min_rating,
        )
    except ValidationError as e:
        raise ValidationFailedError(errors=group_field_errors(e.errors()))


def format_rated_property(item: dict, response_model=PropertyListItemResponse):
    response = response_model.model_validate(item["property"])
    return response.model_copy(
        update={"avg_rating": item["avg_rating"], "review_count": item["review_count"]}
    )


@router.get("")
def list_properties(
    filters: PropertySearchParams = Depends(search_params),
    page: PageParams = Depends(page_params),
    db: Session = Depends(get_db),
):
    """
    Public listing of approved properties.

    Filters combine with AND: monthly price range, location substring
    (case-insensitive), wifi/furnished when true, room type, maximum
    distance from campus and minimum average rating.
    """
    try:
        items, total = property_service.search(db, filters, page)
        return paginated_response(
            [format_rated_property(item) for item in items],
            page_meta(total, page),
        )
    except ServiceError as e:
        return service_error_response(e)
    except Exception:
        logger.exception("Property search failed")
        return internal_server_error("Failed to fetch properties")


@router.post("", status_code=201)
def create_property(
    property_in: PropertyCreate,
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
):
    try:
        authorize(identity, Role.LANDLORD, message="Only landlords can create properties")
        property_obj = property_service.create_property(db, identity, property_in)
        return created_response(PropertyResponse.model_validate(property_obj))
    except ServiceError as e:
        return service_error_response(e)
    except Exception:
        logger.exception("Failed to create property for user %s", identity.user_id)
        return internal_server_error("Failed to create property")


@router.get("/{property_id}")
def get_property(
    property_id: int,
    db: Session = Depends(get_db),
    identity: Optional[Identity] = Depends(get_optional_identity),
):
    """Single property with landlord, reviews and average rating"""
    try:
        item = property_service.get_visible_property(db, property_id, identity)
        return data_response(format_rated_property(item, PropertyDetailResponse))
    except ServiceError as e:
        return service_error_response(e)
    except Exception:
        logger.exception("Failed to fetch property %s", property_id)
        return internal_server_error("Failed to fetch property")


@router.patch("/{property_id}")
def update_property(
    property_id: int,
    property_in: PropertyUpdate,
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
):
    try:
        authorize(identity, Role.LANDLORD)
        property_obj = property_service.update_property(db, identity, property_id, property_in)
        return data_response(PropertyResponse.model_validate(property_obj))
    except ServiceError as e:
        return service_error_response(e)
    except Exception:
        logger.exception("Failed to update property %s", property_id)
        return internal_server_error("Failed to update property")


@router.delete("/{property_id}")
def delete_property(
    property_id: int,
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
):
    """Owner landlords can delete their own listings; admins can delete any."""
    try:
        authorize(identity, Role.LANDLORD, Role.ADMIN)
        property_service.delete_property(db, identity, property_id)
        return message_response("Property deleted successfully")
    except ServiceError as e:
        return service_error_response(e)
    except Exception:
        logger.exception("Failed to delete property %s", property_id)
        return internal_server_error("Failed to delete property")


@router.get("/{property_id}/reviews")
def list_property_reviews(
    property_id: int,
    page: PageParams = Depends(page_params),
    db: Session = Depends(get_db),
):
    try:
        reviews, total = review_service.list_for_property(db, property_id, page)
        return paginated_response(
            [ReviewResponse.model_validate(r) for r in reviews],
            page_meta(total, page),
        )
    except ServiceError as e:
        return service_error_response(e)
    except Exception:
        logger.exception("Failed to fetch reviews for property %s", property_id)
        return internal_server_error("Failed to fetch reviews")
