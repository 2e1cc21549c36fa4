"""Reservation schemas"""

from datetime import date, datetime
from typing import Optional, List
from uuid import UUID
from pydantic import BaseModel, Field, field_validator

from app.models.reservation import ReservationStatus
from app.schemas.table import TableSummary
from app.schemas.timeslot import TimeSlotSummary
from app.services.times import normalize_time


class ReservationCreate(BaseModel):
    """Create reservation request"""
    time_slot_id: UUID
    table_id: UUID
    party_size: int = Field(..., ge=1, le=20)
    reservation_date: date
    start_time: str
    end_time: str
    special_requests: Optional[str] = Field(None, max_length=500)
    customer_notes: Optional[str] = Field(None, max_length=500)

    @field_validator("start_time", "end_time")
    @classmethod
    def check_time(cls, value: str) -> str:
        return normalize_time(value)

    @field_validator("special_requests", "customer_notes")
    @classmethod
    def strip_notes(cls, value: Optional[str]) -> Optional[str]:
        return value.strip() if value is not None else value


class ReservationUpdate(BaseModel):
    """Partial update; which fields an actor may send depends on their role"""
    status: Optional[ReservationStatus] = None
    special_requests: Optional[str] = Field(None, max_length=500)
    customer_notes: Optional[str] = Field(None, max_length=500)
    staff_notes: Optional[str] = Field(None, max_length=500)

    @field_validator("special_requests", "customer_notes", "staff_notes")
    @classmethod
    def strip_notes(cls, value: Optional[str]) -> Optional[str]:
        return value.strip() if value is not None else value


class PriceSnapshot(BaseModel):
    price_per_person_at_booking: Optional[float]
    total_price: Optional[float]


class ReservationResponse(BaseModel):
    """Reservation response"""
    id: UUID
    customer_id: UUID
    time_slot_id: Optional[UUID]
    table_id: Optional[UUID]
    party_size: int
    reservation_date: date
    start_time: str
    end_time: str
    status: ReservationStatus
    special_requests: Optional[str]
    customer_notes: Optional[str]
    staff_notes: Optional[str]
    is_walk_in: bool
    price_snapshot: PriceSnapshot
    time_slot: Optional[TimeSlotSummary] = None
    table: Optional[TableSummary] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class ReservationListResponse(BaseModel):
    """Paginated reservation list"""
    items: List[ReservationResponse]
    total: int
    page: int
    page_size: int
