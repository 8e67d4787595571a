from .user_model import User
from .property_model import Property
from .booking_model import Booking
from .lease_model import Lease
from .review_model import Review
from .maintenance_model import MaintenanceRequest
from .message_model import Message
from .document_model import Document

__all__ = ["User", "Property", "Booking", "Lease", "Review", "MaintenanceRequest", "Message", "Document"]
