"""Review schemas"""

from datetime import datetime
from typing import Optional, List
from uuid import UUID
from pydantic import BaseModel, Field


class ReviewCreate(BaseModel):
    """Create review request"""
    reservation_id: UUID
    rating: int = Field(..., ge=1, le=5)
    food_rating: Optional[int] = Field(None, ge=1, le=5)
    service_rating: Optional[int] = Field(None, ge=1, le=5)
    ambiance_rating: Optional[int] = Field(None, ge=1, le=5)
    comment: str = Field(..., min_length=10, max_length=1000)


class StaffResponseIn(BaseModel):
    comment: str = Field(..., min_length=1, max_length=500)


class ReviewUpdate(BaseModel):
    """Owner edits ratings and comment; staff attach a response"""
    rating: Optional[int] = Field(None, ge=1, le=5)
    food_rating: Optional[int] = Field(None, ge=1, le=5)
    service_rating: Optional[int] = Field(None, ge=1, le=5)
    ambiance_rating: Optional[int] = Field(None, ge=1, le=5)
    comment: Optional[str] = Field(None, min_length=10, max_length=1000)
    staff_response: Optional[StaffResponseIn] = None


class ReviewResponse(BaseModel):
    """Review response"""
    id: UUID
    customer_id: UUID
    reservation_id: UUID
    rating: int
    food_rating: Optional[int]
    service_rating: Optional[int]
    ambiance_rating: Optional[int]
    comment: str
    is_verified: bool
    is_public: bool
    staff_response: Optional[str]
    responded_by: Optional[UUID]
    responded_at: Optional[datetime]
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class ReviewListResponse(BaseModel):
    """Paginated review list"""
    items: List[ReviewResponse]
    total: int
    page: int
    page_size: int
