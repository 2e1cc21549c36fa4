"""Loading and serializing reservation records"""

from typing import Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.models.reservation import Reservation
from app.models.table import Table
from app.schemas.reservation import ReservationResponse


async def load_reservation(db: AsyncSession, reservation_id: UUID) -> Optional[Reservation]:
    """Fetch a reservation with its slot and table populated"""
    result = await db.execute(
        select(Reservation)
        .where(Reservation.id == reservation_id)
        .options(selectinload(Reservation.time_slot), selectinload(Reservation.table))
        .execution_options(populate_existing=True)
    )
    return result.scalar_one_or_none()


async def lock_table(db: AsyncSession, table_id: UUID) -> Optional[Table]:
    """Row-lock a table until the current transaction ends.

    Every write that can make a reservation active on a table takes this lock
    before its conflict check, so workers in other processes serialize too.
    """
    result = await db.execute(
        select(Table)
        .where(Table.id == table_id)
        .with_for_update()
        .execution_options(populate_existing=True)
    )
    return result.scalar_one_or_none()


def serialize_reservation(reservation: Reservation) -> dict:
    return ReservationResponse.model_validate(reservation).model_dump(mode="json")
