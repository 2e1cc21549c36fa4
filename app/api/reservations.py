"""Reservation management API endpoints"""

from datetime import date
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.database import get_db
from app.models.reservation import Reservation, ReservationStatus
from app.models.user import User, UserRole
from app.schemas.reservation import (
    ReservationCreate,
    ReservationUpdate,
    ReservationResponse,
    ReservationListResponse,
)
from app.api.auth import get_current_active_user, get_current_actor, require_role
from app.api.dependencies import get_booking_service, get_lifecycle
from app.services.actors import Actor
from app.services.booking import BookingService
from app.services.lifecycle import ReservationLifecycle

router = APIRouter()


@router.get("", response_model=ReservationListResponse)
async def list_reservations(
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    status: Optional[ReservationStatus] = None,
    date: Optional[date] = None,
    customer: Optional[UUID] = None,
    current_user: User = Depends(get_current_active_user),
    db: AsyncSession = Depends(get_db),
):
    """List reservations; customers only ever see their own"""
    filters = []

    if current_user.role == UserRole.CUSTOMER:
        filters.append(Reservation.customer_id == current_user.id)
    elif customer:
        filters.append(Reservation.customer_id == customer)

    if status:
        filters.append(Reservation.status == status.value)

    if date:
        filters.append(Reservation.reservation_date == date)

    # Get total
    total_result = await db.execute(select(func.count(Reservation.id)).where(*filters))
    total = total_result.scalar()

    # Get paginated results
    offset = (page - 1) * limit
    result = await db.execute(
        select(Reservation)
        .where(*filters)
        .options(selectinload(Reservation.time_slot), selectinload(Reservation.table))
        .order_by(Reservation.reservation_date.desc(), Reservation.start_time.desc())
        .offset(offset)
        .limit(limit)
    )
    reservations = result.scalars().all()

    return ReservationListResponse(
        items=reservations,
        total=total,
        page=page,
        page_size=limit,
    )


@router.post("", response_model=ReservationResponse, status_code=201)
async def create_reservation(
    reservation_data: ReservationCreate,
    current_user: User = Depends(require_role(UserRole.CUSTOMER)),
    booking: BookingService = Depends(get_booking_service),
):
    """Book a table against a time slot"""
    return await booking.create_reservation(current_user.id, reservation_data)


@router.get("/{reservation_id}", response_model=ReservationResponse)
async def get_reservation(
    reservation_id: UUID,
    actor: Actor = Depends(get_current_actor),
    lifecycle: ReservationLifecycle = Depends(get_lifecycle),
):
    """Get reservation details"""
    return await lifecycle.get(actor, reservation_id)


@router.put("/{reservation_id}", response_model=ReservationResponse)
async def update_reservation(
    reservation_id: UUID,
    reservation_data: ReservationUpdate,
    actor: Actor = Depends(get_current_actor),
    lifecycle: ReservationLifecycle = Depends(get_lifecycle),
):
    """Update status (staff) or request notes (owning customer)"""
    changes = reservation_data.model_dump(exclude_unset=True)
    return await lifecycle.update(actor, reservation_id, changes)


@router.delete("/{reservation_id}", status_code=204)
async def delete_reservation(
    reservation_id: UUID,
    actor: Actor = Depends(get_current_actor),
    lifecycle: ReservationLifecycle = Depends(get_lifecycle),
):
    """Cancel a reservation (customer) or delete it (staff)"""
    await lifecycle.withdraw(actor, reservation_id)
    return Response(status_code=204)
