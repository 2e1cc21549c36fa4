"""Pydantic schemas for request/response validation"""

from app.schemas.auth import (
    Token,
    RefreshRequest,
    UserCreate,
    UserResponse,
)
from app.schemas.table import (
    TableCreate,
    TableUpdate,
    TableResponse,
    TableSummary,
)
from app.schemas.timeslot import (
    TimeSlotCreate,
    TimeSlotUpdate,
    TimeSlotResponse,
    TimeSlotSummary,
    TimeSlotListResponse,
)
from app.schemas.reservation import (
    ReservationCreate,
    ReservationUpdate,
    ReservationResponse,
    ReservationListResponse,
    PriceSnapshot,
)
from app.schemas.review import (
    ReviewCreate,
    ReviewUpdate,
    ReviewResponse,
    ReviewListResponse,
    StaffResponseIn,
)

__all__ = [
    "Token",
    "RefreshRequest",
    "UserCreate",
    "UserResponse",
    "TableCreate",
    "TableUpdate",
    "TableResponse",
    "TableSummary",
    "TimeSlotCreate",
    "TimeSlotUpdate",
    "TimeSlotResponse",
    "TimeSlotSummary",
    "TimeSlotListResponse",
    "ReservationCreate",
    "ReservationUpdate",
    "ReservationResponse",
    "ReservationListResponse",
    "PriceSnapshot",
    "ReviewCreate",
    "ReviewUpdate",
    "ReviewResponse",
    "ReviewListResponse",
    "StaffResponseIn",
]
