"""Conflict detection for table reservations"""

from datetime import date
from typing import Iterable, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.reservation import Reservation, ReservationStatus, INACTIVE_STATUSES
from app.services.times import require_time, require_window


def overlaps(a_start: str, a_end: str, b_start: str, b_end: str) -> bool:
    """Half-open interval overlap: touching endpoints do not overlap."""
    return a_start < b_end and a_end > b_start


def find_overlap(
    reservations: Iterable[Reservation],
    start_time: str,
    end_time: str,
    exclude_reservation_id: Optional[UUID] = None,
) -> Optional[Reservation]:
    """Return the first active reservation overlapping [start_time, end_time)."""
    start, end = require_window(start_time, end_time)

    for existing in reservations:
        if exclude_reservation_id is not None and existing.id == exclude_reservation_id:
            continue
        if ReservationStatus(existing.status) in INACTIVE_STATUSES:
            continue
        existing_start = require_time(existing.start_time, "start_time")
        existing_end = require_time(existing.end_time, "end_time")
        if overlaps(existing_start, existing_end, start, end):
            return existing

    return None


class ConflictDetector:
    """Checks a candidate booking against the reservations already stored for a table."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def find_conflict(
        self,
        table_id: UUID,
        on_date: date,
        start_time: str,
        end_time: str,
        exclude_reservation_id: Optional[UUID] = None,
    ) -> Optional[Reservation]:
        require_window(start_time, end_time)

        result = await self.db.execute(
            select(Reservation).where(
                Reservation.table_id == table_id,
                Reservation.reservation_date == on_date,
                Reservation.status.not_in([s.value for s in INACTIVE_STATUSES]),
            )
        )
        return find_overlap(
            result.scalars().all(),
            start_time,
            end_time,
            exclude_reservation_id=exclude_reservation_id,
        )

    async def has_conflict(
        self,
        table_id: UUID,
        on_date: date,
        start_time: str,
        end_time: str,
        exclude_reservation_id: Optional[UUID] = None,
    ) -> bool:
        conflict = await self.find_conflict(
            table_id, on_date, start_time, end_time, exclude_reservation_id
        )
        return conflict is not None
