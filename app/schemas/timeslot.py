"""Time slot schemas"""

from datetime import date as date_type, datetime
from typing import Optional, List
from uuid import UUID
from pydantic import BaseModel, Field, field_validator, model_validator

from app.models.table import Location
from app.services.times import normalize_time


class TimeSlotCreate(BaseModel):
    """Create time slot request"""
    date: date_type
    start_time: str
    end_time: str
    duration: int = Field(..., ge=30, le=240)
    max_party_size: int = Field(..., ge=1, le=20)
    location: Location
    area: str = Field(..., min_length=1, max_length=100)
    features: List[str] = []
    special_pricing: Optional[float] = Field(None, ge=0)
    special_notes: Optional[str] = Field(None, max_length=500)

    @field_validator("start_time", "end_time")
    @classmethod
    def check_time(cls, value: str) -> str:
        return normalize_time(value)

    @model_validator(mode="after")
    def check_window(self):
        if self.start_time >= self.end_time:
            raise ValueError("start_time must be before end_time")
        return self


class TimeSlotUpdate(BaseModel):
    """Update time slot request"""
    date: Optional[date_type] = None
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    duration: Optional[int] = Field(None, ge=30, le=240)
    max_party_size: Optional[int] = Field(None, ge=1, le=20)
    location: Optional[Location] = None
    area: Optional[str] = Field(None, min_length=1, max_length=100)
    features: Optional[List[str]] = None
    special_pricing: Optional[float] = Field(None, ge=0)
    special_notes: Optional[str] = Field(None, max_length=500)
    is_available: Optional[bool] = None

    @field_validator("start_time", "end_time")
    @classmethod
    def check_time(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value
        return normalize_time(value)


class TimeSlotResponse(BaseModel):
    """Time slot response"""
    id: UUID
    date: date_type
    start_time: str
    end_time: str
    duration: int
    max_party_size: int
    location: str
    area: str
    features: List[str] = []
    special_pricing: Optional[float]
    special_notes: Optional[str]
    is_available: bool
    created_by: Optional[UUID]
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class TimeSlotSummary(BaseModel):
    """Time slot fields embedded in reservations"""
    id: UUID
    date: date_type
    start_time: str
    end_time: str
    location: str
    area: str
    special_pricing: Optional[float]

    class Config:
        from_attributes = True


class TimeSlotListResponse(BaseModel):
    """Paginated time slot list"""
    items: List[TimeSlotResponse]
    total: int
    page: int
    page_size: int
