"""Time slot API endpoints"""

from datetime import date
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.models.table import Location
from app.models.timeslot import TimeSlot
from app.models.user import User, UserRole
from app.schemas.timeslot import (
    TimeSlotCreate,
    TimeSlotUpdate,
    TimeSlotResponse,
    TimeSlotListResponse,
)
from app.api.auth import require_role
from app.api.dependencies import get_catalog
from app.exceptions import ValidationError
from app.services.catalog import AvailabilityCatalog
from app.services.times import normalize_time

router = APIRouter()


def _query_time(value: Optional[str], field: str) -> Optional[str]:
    if value is None:
        return None
    try:
        return normalize_time(value)
    except ValueError as e:
        raise ValidationError(str(e), field=field)


@router.get("", response_model=TimeSlotListResponse)
async def list_time_slots(
    date: Optional[date] = None,
    location: Optional[Location] = None,
    party_size: Optional[int] = Query(None, ge=1, le=20),
    area: Optional[str] = None,
    start_time: Optional[str] = None,
    end_time: Optional[str] = None,
    price_min: Optional[float] = Query(None, ge=0),
    price_max: Optional[float] = Query(None, ge=0),
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    db: AsyncSession = Depends(get_db),
):
    """List bookable time slots (public)"""
    filters = [TimeSlot.is_available == True]

    if date:
        filters.append(TimeSlot.date == date)
    if location:
        filters.append(TimeSlot.location == location.value)
    if area:
        filters.append(TimeSlot.area.ilike(f"%{area.strip()}%"))
    if party_size:
        filters.append(TimeSlot.max_party_size >= party_size)

    start_time = _query_time(start_time, "start_time")
    end_time = _query_time(end_time, "end_time")
    if start_time:
        filters.append(TimeSlot.start_time >= start_time)
    if end_time:
        filters.append(TimeSlot.end_time <= end_time)

    if price_min is not None:
        filters.append(TimeSlot.special_pricing >= price_min)
    if price_max is not None:
        filters.append(TimeSlot.special_pricing <= price_max)

    total_result = await db.execute(select(func.count(TimeSlot.id)).where(*filters))
    total = total_result.scalar()

    offset = (page - 1) * limit
    result = await db.execute(
        select(TimeSlot)
        .where(*filters)
        .order_by(TimeSlot.date, TimeSlot.start_time)
        .offset(offset)
        .limit(limit)
    )

    return TimeSlotListResponse(
        items=result.scalars().all(),
        total=total,
        page=page,
        page_size=limit,
    )


@router.get("/{slot_id}", response_model=TimeSlotResponse)
async def get_time_slot(
    slot_id: UUID,
    catalog: AvailabilityCatalog = Depends(get_catalog),
):
    """Get time slot details"""
    return await catalog.get_slot(slot_id)


@router.post("", response_model=TimeSlotResponse, status_code=status.HTTP_201_CREATED)
async def create_time_slot(
    slot_data: TimeSlotCreate,
    current_user: User = Depends(require_role(UserRole.STAFF)),
    catalog: AvailabilityCatalog = Depends(get_catalog),
):
    """Create a time slot (staff only)"""
    return await catalog.create_slot(slot_data, created_by=current_user.id)


@router.put("/{slot_id}", response_model=TimeSlotResponse)
async def update_time_slot(
    slot_id: UUID,
    slot_data: TimeSlotUpdate,
    current_user: User = Depends(require_role(UserRole.STAFF)),
    catalog: AvailabilityCatalog = Depends(get_catalog),
):
    """Update a time slot (staff only)"""
    return await catalog.update_slot(slot_id, slot_data)


@router.delete("/{slot_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_time_slot(
    slot_id: UUID,
    current_user: User = Depends(require_role(UserRole.STAFF)),
    catalog: AvailabilityCatalog = Depends(get_catalog),
):
    """Delete a time slot (staff only)"""
    await catalog.delete_slot(slot_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
