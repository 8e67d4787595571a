import logging
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Optional, Tuple, List

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from database.models import Booking, Property, Review
from enums.booking_status import BookingStatus
from schemas.review_schema import ReviewCreate
from utils.dependencies import Identity
from utils.exceptions import ConflictError, ForbiddenError, NotFoundError
from utils.pagination import PageParams, paginate

logger = logging.getLogger(__name__)

ONE_DECIMAL = Decimal("0.1")


def round_rating(value) -> float:
    """Round an average rating half-up to one decimal; None counts as 0."""
    if value is None:
        return 0.0
    return float(Decimal(str(value)).quantize(ONE_DECIMAL, rounding=ROUND_HALF_UP))


def average_rating(ratings: Iterable[int]) -> float:
    """Mean of ``ratings`` rounded to one decimal, 0 when there are none."""
    ratings = list(ratings)
    if not ratings:
        return 0.0
    mean = Decimal(sum(ratings)) / Decimal(len(ratings))
    return float(mean.quantize(ONE_DECIMAL, rounding=ROUND_HALF_UP))


class ReviewService:
    def get_for_pair(self, db: Session, student_id: int, property_id: int) -> Optional[Review]:
        return (
            db.query(Review)
            .filter(Review.student_id == student_id, Review.property_id == property_id)
            .first()
        )

    def has_approved_booking(self, db: Session, student_id: int, property_id: int) -> bool:
        return (
            db.query(Booking.id)
            .filter(
                Booking.student_id == student_id,
                Booking.property_id == property_id,
                Booking.status == BookingStatus.APPROVED,
            )
            .first()
            is not None
        )

    def create_review(self, db: Session, identity: Identity, review_in: ReviewCreate) -> Review:
        """
        Create a review for a property the student has an approved booking on.

        The pair (student, property) is unique: the pre-check gives the
        friendly error, the unique constraint catches a concurrent insert.
        """
        if not self.has_approved_booking(db, identity.user_id, review_in.property_id):
            raise ForbiddenError("You can only review properties you have booked")

        if self.get_for_pair(db, identity.user_id, review_in.property_id):
            raise ConflictError("You have already reviewed this property")

        review = Review(
            student_id=identity.user_id,
            property_id=review_in.property_id,
            rating=review_in.rating,
            comment=review_in.comment,
        )
        db.add(review)
        try:
            db.commit()
        except IntegrityError:
            db.rollback()
            raise ConflictError("You have already reviewed this property")
        db.refresh(review)

        logger.info(
            "Student %s reviewed property %s (rating %s)",
            identity.user_id,
            review.property_id,
            review.rating,
        )
        return review

    def list_for_property(
        self, db: Session, property_id: int, params: PageParams
    ) -> Tuple[List[Review], int]:
        if db.query(Property.id).filter(Property.id == property_id).first() is None:
            raise NotFoundError("Property not found")

        query = (
            db.query(Review)
            .options(joinedload(Review.student))
            .filter(Review.property_id == property_id)
            .order_by(Review.created_at.desc(), Review.id.desc())
        )
        return paginate(query, params)

