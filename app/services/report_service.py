from sqlalchemy.orm import Session
from sqlalchemy import func
from datetime import timedelta
from typing import Dict, Any, List, Optional, Tuple

from database.models import Booking, Property, Review, User
from enums.booking_status import BookingStatus
from enums.role import Role
from services.property_service import rating_summary
from services.review_service import round_rating
from utils.pagination import PageParams, paginate
from utils.time_utils import utc_now

RECENT_BOOKINGS_DAYS = 30
TOP_PROPERTIES_LIMIT = 5


class ReportService:
    def __init__(self, db: Session):
        self.db = db

    def get_analytics(self) -> Dict[str, Any]:
        """
        Platform-wide figures for the admin dashboard.

        Revenue is an estimate: the monthly price of every property, once
        per APPROVED booking on it.
        """
        recent_since = utc_now() - timedelta(days=RECENT_BOOKINGS_DAYS)

        total_revenue = (
            self.db.query(func.coalesce(func.sum(Property.price_monthly), 0))
            .join(Booking, Booking.property_id == Property.id)
            .filter(Booking.status == BookingStatus.APPROVED)
            .scalar()
        )

        return {
            "overview": {
                "total_users": self.db.query(User).count(),
                "total_properties": self.db.query(Property).count(),
                "total_bookings": self.db.query(Booking).count(),
                "recent_bookings": self.db.query(Booking)
                .filter(Booking.created_at >= recent_since)
                .count(),
                "total_revenue": round(float(total_revenue or 0), 2),
            },
            "bookings_by_status": self._bookings_by_status(),
            "users_by_role": self._users_by_role(),
            "top_properties_by_bookings": self._top_by_bookings(),
            "top_properties_by_rating": self._top_by_rating(),
        }

    def _bookings_by_status(self) -> List[Dict[str, Any]]:
        rows = (
            self.db.query(Booking.status, func.count(Booking.id))
            .group_by(Booking.status)
            .all()
        )
        return [{"status": status, "count": count} for status, count in rows]

    def _users_by_role(self) -> List[Dict[str, Any]]:
        rows = self.db.query(User.role, func.count(User.id)).group_by(User.role).all()
        return [{"role": role, "count": count} for role, count in rows]

    def _top_properties(self, order_by) -> List[Dict[str, Any]]:
        bookings = (
            self.db.query(
                Booking.property_id.label("property_id"),
                func.count(Booking.id).label("booking_count"),
            )
            .group_by(Booking.property_id)
            .subquery()
        )
        ratings = rating_summary()
        booking_count = func.coalesce(bookings.c.booking_count, 0)
        avg_rating = func.coalesce(ratings.c.avg_rating, 0)

        rows = (
            self.db.query(
                Property,
                booking_count,
                func.coalesce(ratings.c.review_count, 0),
                ratings.c.avg_rating,
            )
            .outerjoin(bookings, bookings.c.property_id == Property.id)
            .outerjoin(ratings, ratings.c.property_id == Property.id)
            .order_by(*order_by(booking_count, avg_rating), Property.id)
            .limit(TOP_PROPERTIES_LIMIT)
            .all()
        )
        return [
            {
                "id": prop.id,
                "title": prop.title,
                "location": prop.location,
                "price_monthly": prop.price_monthly,
                "booking_count": int(bookings_total),
                "review_count": int(reviews_total),
                "avg_rating": round_rating(avg),
            }
            for prop, bookings_total, reviews_total, avg in rows
        ]

    def _top_by_bookings(self) -> List[Dict[str, Any]]:
        return self._top_properties(lambda bookings, rating: (bookings.desc(),))

    def _top_by_rating(self) -> List[Dict[str, Any]]:
        return self._top_properties(lambda bookings, rating: (rating.desc(),))

    def list_users(
        self, params: PageParams, role: Optional[Role] = None
    ) -> Tuple[List[Dict[str, Any]], int]:
        """Users, newest first, each with how many properties, bookings and reviews they have."""

        def count_of(model, column):
            return (
                self.db.query(func.count(model.id))
                .filter(column == User.id)
                .correlate(User)
                .scalar_subquery()
            )

        query = self.db.query(
            User,
            count_of(Property, Property.landlord_id),
            count_of(Booking, Booking.student_id),
            count_of(Review, Review.student_id),
        )
        if role is not None:
            query = query.filter(User.role == role)
        query = query.order_by(User.created_at.desc(), User.id.desc())

        rows, total = paginate(query, params)
        users = [
            {
                "user": user,
                "property_count": property_count,
                "booking_count": booking_count,
                "review_count": review_count,
            }
            for user, property_count, booking_count, review_count in rows
        ]
        return users, total
