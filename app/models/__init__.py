"""Database models"""

from app.models.user import User, UserRole
from app.models.table import Table, Location, TableFeature, TableStatus
from app.models.timeslot import TimeSlot
from app.models.reservation import Reservation, ReservationStatus
from app.models.review import Review

__all__ = [
    "User",
    "UserRole",
    "Table",
    "Location",
    "TableFeature",
    "TableStatus",
    "TimeSlot",
    "Reservation",
    "ReservationStatus",
    "Review",
]
