import logging
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from database.init import get_db
from enums.role import Role
from schemas.review_schema import ReviewCreate, ReviewResponse
from services.review_service import ReviewService
from responses.success import created_response
from responses.error import internal_server_error, service_error_response
from utils.dependencies import Identity, authorize, get_current_identity
from utils.exceptions import ServiceError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/reviews", tags=["Reviews"])
review_service = ReviewService()


@router.post("", status_code=201)
def create_review(
    review_in: ReviewCreate,
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
):
    """
    Review a property. The student needs an approved booking on it and
    may review each property only once.
    """
    try:
        authorize(identity, Role.STUDENT, message="Only students can create reviews")
        review = review_service.create_review(db, identity, review_in)
        return created_response(ReviewResponse.model_validate(review))
    except ServiceError as e:
        return service_error_response(e)
    except Exception:
        logger.exception("Failed to create review for user %s", identity.user_id)
        return internal_server_error("Failed to create review")
