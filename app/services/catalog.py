"""Availability catalog: staff-managed time slots"""

from datetime import date
from typing import Optional
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
import structlog

from app.exceptions import NotFound, SchedulingConflict, StorageError, ValidationError
from app.models.reservation import Reservation
from app.models.timeslot import TimeSlot
from app.schemas.timeslot import TimeSlotCreate, TimeSlotResponse, TimeSlotUpdate
from app.services.conflicts import overlaps
from app.services.locks import KeyedLocks, slot_key
from app.services.notifier import ChangeEvent, ChangeNotifier
from app.services.times import require_window

logger = structlog.get_logger()


def _location_value(location) -> str:
    return location.value if hasattr(location, "value") else location


class AvailabilityCatalog:
    """Creates, edits and removes time slots.

    Two available slots at the same location may not overlap on the same
    date. Every write that could break that rule re-checks it while holding
    the lock for the (location, date) pair it lands in.
    """

    def __init__(self, db: AsyncSession, notifier: ChangeNotifier, locks: KeyedLocks):
        self.db = db
        self.notifier = notifier
        self.locks = locks

    async def create_slot(self, data: TimeSlotCreate, created_by: Optional[UUID] = None) -> TimeSlot:
        start_time, end_time = require_window(data.start_time, data.end_time)
        location = _location_value(data.location)

        async with self.locks.hold(slot_key(location, data.date)):
            await self._ensure_no_overlap(data.date, location, start_time, end_time)

            time_slot = TimeSlot(
                date=data.date,
                start_time=start_time,
                end_time=end_time,
                duration=data.duration,
                max_party_size=data.max_party_size,
                location=location,
                area=data.area.strip(),
                features=data.features,
                special_pricing=data.special_pricing,
                special_notes=data.special_notes,
                is_available=True,
                created_by=created_by,
            )
            self.db.add(time_slot)
            await self._commit("Could not save time slot")

        await self.db.refresh(time_slot)
        logger.info(
            "Time slot created",
            time_slot_id=str(time_slot.id),
            date=time_slot.date.isoformat(),
            location=location,
            start_time=start_time,
            end_time=end_time,
        )
        await self.notifier.publish(ChangeEvent.TIMESLOT_CREATED, {"time_slot": _serialize(time_slot)})
        return time_slot

    async def get_slot(self, slot_id: UUID) -> TimeSlot:
        time_slot = await self.db.get(TimeSlot, slot_id)
        if time_slot is None:
            raise NotFound("Time slot", slot_id)
        return time_slot

    async def update_slot(self, slot_id: UUID, data: TimeSlotUpdate) -> TimeSlot:
        time_slot = await self.get_slot(slot_id)
        changes = data.model_dump(exclude_unset=True)

        for required in ("date", "start_time", "end_time", "duration", "max_party_size", "location", "area", "is_available"):
            if required in changes and changes[required] is None:
                raise ValidationError(f"{required} cannot be null", field=required)

        on_date: date = changes.get("date", time_slot.date)
        start_time = changes.get("start_time", time_slot.start_time)
        end_time = changes.get("end_time", time_slot.end_time)
        location = _location_value(changes.get("location", time_slot.location))
        is_available = changes.get("is_available", time_slot.is_available)
        start_time, end_time = require_window(start_time, end_time)

        async with self.locks.hold(slot_key(location, on_date)):
            if is_available:
                await self._ensure_no_overlap(on_date, location, start_time, end_time, exclude_slot_id=slot_id)

            for field, value in changes.items():
                if field == "location":
                    value = location
                setattr(time_slot, field, value)
            await self._commit("Could not update time slot")

        await self.db.refresh(time_slot)
        logger.info("Time slot updated", time_slot_id=str(slot_id), fields=sorted(changes))
        await self.notifier.publish(ChangeEvent.TIMESLOT_UPDATED, {"time_slot": _serialize(time_slot)})
        return time_slot

    async def delete_slot(self, slot_id: UUID) -> None:
        time_slot = await self.get_slot(slot_id)

        try:
            # Reservations keep their own date and times; only the reference goes
            await self.db.execute(
                update(Reservation)
                .where(Reservation.time_slot_id == time_slot.id)
                .values(time_slot_id=None)
            )
            await self.db.delete(time_slot)
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise StorageError("Could not delete time slot") from e
        await self._commit("Could not delete time slot")

        logger.info("Time slot deleted", time_slot_id=str(slot_id))
        await self.notifier.publish(ChangeEvent.TIMESLOT_DELETED, {"time_slot_id": str(slot_id)})

    async def _ensure_no_overlap(
        self,
        on_date: date,
        location: str,
        start_time: str,
        end_time: str,
        exclude_slot_id: Optional[UUID] = None,
    ) -> None:
        try:
            result = await self.db.execute(
                select(TimeSlot).where(
                    TimeSlot.date == on_date,
                    TimeSlot.location == location,
                    TimeSlot.is_available == True,
                )
            )
            existing_slots = result.scalars().all()
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise StorageError("Could not check time slot availability") from e

        for existing in existing_slots:
            if exclude_slot_id is not None and existing.id == exclude_slot_id:
                continue
            if overlaps(existing.start_time, existing.end_time, start_time, end_time):
                raise SchedulingConflict("Time slot conflicts with existing availability")

    async def _commit(self, message: str) -> None:
        try:
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(message, error=str(e))
            raise StorageError(message) from e


def _serialize(time_slot: TimeSlot) -> dict:
    return TimeSlotResponse.model_validate(time_slot).model_dump(mode="json")
