"""Table schemas"""

from datetime import datetime
from typing import Optional, List
from uuid import UUID
from pydantic import BaseModel, Field, field_validator

from app.models.table import Location, TableFeature, TableStatus


class TableCreate(BaseModel):
    """Create table request"""
    table_number: str = Field(..., min_length=1, max_length=20)
    capacity: int = Field(..., ge=1, le=20)
    location: Location
    area: str = Field(..., min_length=1, max_length=100)
    features: List[TableFeature] = []
    price_per_person: Optional[float] = Field(None, ge=0)

    @field_validator("table_number", "area")
    @classmethod
    def strip_text(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be blank")
        return value


class TableUpdate(BaseModel):
    """Update table request"""
    table_number: Optional[str] = Field(None, min_length=1, max_length=20)
    capacity: Optional[int] = Field(None, ge=1, le=20)
    location: Optional[Location] = None
    area: Optional[str] = Field(None, min_length=1, max_length=100)
    features: Optional[List[TableFeature]] = None
    price_per_person: Optional[float] = Field(None, ge=0)
    is_active: Optional[bool] = None
    current_status: Optional[TableStatus] = None


class TableResponse(BaseModel):
    """Table response"""
    id: UUID
    table_number: str
    capacity: int
    location: str
    area: str
    features: List[str] = []
    price_per_person: Optional[float]
    is_active: bool
    current_status: str
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class TableSummary(BaseModel):
    """Table fields embedded in reservations"""
    id: UUID
    table_number: str
    capacity: int
    location: str
    area: str
    features: List[str] = []

    class Config:
        from_attributes = True
