import logging
from typing import List, Optional, Tuple

from sqlalchemy import func, select
from sqlalchemy.orm import Session, joinedload

from database.models import Property as PropertyModel, Review
from enums.role import Role
from enums.room_type import RoomType
from schemas.property_schema import (
    PropertyCreate,
    PropertyUpdate,
    PropertySearchParams,
)
from services.base_service import BaseService
from services.review_service import average_rating, round_rating
from utils.dependencies import Identity
from utils.exceptions import ForbiddenError, NotFoundError
from utils.pagination import PageParams
from utils.time_utils import to_naive_utc

logger = logging.getLogger(__name__)


def build_filters(params: PropertySearchParams) -> list:
    """
    Translate search parameters into SQL predicates, combined with AND.

    Only approved listings are ever returned. Boolean amenities only
    narrow the search when they are true, and an unknown room type is
    ignored rather than matching nothing.
    """
    predicates = [PropertyModel.approved.is_(True)]

    if params.min_price is not None:
        predicates.append(PropertyModel.price_monthly >= params.min_price)
    if params.max_price is not None:
        predicates.append(PropertyModel.price_monthly <= params.max_price)

    if params.location:
        predicates.append(PropertyModel.location.icontains(params.location, autoescape=True))

    if params.wifi:
        predicates.append(PropertyModel.wifi.is_(True))
    if params.furnished:
        predicates.append(PropertyModel.furnished.is_(True))

    if params.room_type in RoomType.__members__:
        predicates.append(PropertyModel.room_type == RoomType[params.room_type])

    if params.distance_from_campus is not None:
        predicates.append(PropertyModel.distance_from_campus <= params.distance_from_campus)

    return predicates


def rating_summary():
    """Per-property average rating and review count, as a subquery."""
    return (
        select(
            Review.property_id.label("property_id"),
            func.avg(Review.rating).label("avg_rating"),
            func.count(Review.id).label("review_count"),
        )
        .group_by(Review.property_id)
        .subquery()
    )


class PropertyService(BaseService):
    def __init__(self):
        super().__init__(PropertyModel)

    def create_property(
        self, db: Session, identity: Identity, property_in: PropertyCreate
    ) -> PropertyModel:
        property_obj = PropertyModel(
            **property_in.model_dump(exclude={"available_from"}),
            available_from=to_naive_utc(property_in.available_from),
            landlord_id=identity.user_id,
        )
        property_obj = self.create(db, property_obj)
        logger.info("Landlord %s listed property %s", identity.user_id, property_obj.id)
        return property_obj

    def search(
        self, db: Session, params: PropertySearchParams, page: PageParams
    ) -> Tuple[List[dict], int]:
        """
        Return one page of approved properties matching ``params``.

        Each item is a dict of the property plus ``avg_rating`` and
        ``review_count``. The minimum rating is compared against the
        rounded average inside the query, before pagination, so the
        returned total counts exactly the matching listings.
        """
        ratings = rating_summary()
        rounded_avg = func.coalesce(func.round(ratings.c.avg_rating, 1), 0)

        query = (
            db.query(
                PropertyModel,
                ratings.c.avg_rating,
                func.coalesce(ratings.c.review_count, 0),
            )
            .outerjoin(ratings, ratings.c.property_id == PropertyModel.id)
            .filter(*build_filters(params))
        )
        if params.min_rating is not None:
            query = query.filter(rounded_avg >= params.min_rating)

        total = query.order_by(None).count()
        rows = (
            query.options(joinedload(PropertyModel.landlord))
            .order_by(PropertyModel.created_at.desc(), PropertyModel.id.desc())
            .offset(page.skip)
            .limit(page.limit)
            .all()
        )

        items = [
            {
                "property": property_obj,
                "avg_rating": round_rating(avg),
                "review_count": int(review_count),
            }
            for property_obj, avg, review_count in rows
        ]
        return items, total

    def get_visible_property(
        self, db: Session, property_id: int, identity: Optional[Identity]
    ) -> dict:
        """
        Fetch one property with its reviews and average rating.

        Unapproved listings are only shown to their landlord and to admins;
        anyone else gets NotFound.
        """
        property_obj = (
            db.query(PropertyModel)
            .options(
                joinedload(PropertyModel.landlord),
                joinedload(PropertyModel.reviews).joinedload(Review.student),
            )
            .filter(PropertyModel.id == property_id)
            .first()
        )
        if not property_obj or not self.can_view(property_obj, identity):
            raise NotFoundError("Property not found")

        return {
            "property": property_obj,
            "reviews": property_obj.reviews,
            "avg_rating": average_rating(r.rating for r in property_obj.reviews),
            "review_count": len(property_obj.reviews),
        }

    def can_view(self, property_obj: PropertyModel, identity: Optional[Identity]) -> bool:
        if property_obj.approved:
            return True
        if identity is None:
            return False
        return identity.is_admin or property_obj.landlord_id == identity.user_id

    def update_property(
        self, db: Session, identity: Identity, property_id: int, property_in: PropertyUpdate
    ) -> PropertyModel:
        property_obj = self.get_or_404(db, property_id, "Property not found")
        if property_obj.landlord_id != identity.user_id:
            raise ForbiddenError("You can only update your own properties")

        if property_in.available_from is not None:
            property_in.available_from = to_naive_utc(property_in.available_from)

        return self.update(db, property_obj, property_in)

    def delete_property(self, db: Session, identity: Identity, property_id: int) -> None:
        property_obj = self.get_or_404(db, property_id, "Property not found")
        if identity.role == Role.LANDLORD and property_obj.landlord_id != identity.user_id:
            raise ForbiddenError("You can only delete your own properties")

        self.delete(db, property_obj)
        logger.info("User %s deleted property %s", identity.user_id, property_id)

    def set_approval(self, db: Session, property_id: int, approved: bool) -> PropertyModel:
        property_obj = self.get_or_404(db, property_id, "Property not found")
        property_obj.approved = approved
        db.commit()
        db.refresh(property_obj)
        logger.info("Property %s approval set to %s", property_id, approved)
        return property_obj
