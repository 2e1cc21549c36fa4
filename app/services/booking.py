"""Booking orchestration: turn a customer request into a persisted reservation"""

from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
import structlog

from app.exceptions import (
    SchedulingConflict,
    SlotUnavailable,
    StorageError,
    TableUnsuitable,
    ValidationError,
)
from app.models.reservation import Reservation, ReservationStatus
from app.models.table import Table
from app.models.timeslot import TimeSlot
from app.schemas.reservation import ReservationCreate
from app.services.conflicts import ConflictDetector
from app.services.locks import KeyedLocks, table_key
from app.services.notifier import ChangeEvent, ChangeNotifier
from app.services.records import load_reservation, lock_table, serialize_reservation
from app.services.times import require_window

logger = structlog.get_logger()


def price_snapshot(time_slot: TimeSlot, table: Table, party_size: int) -> tuple:
    """Per-person and total price frozen onto a new reservation."""
    if time_slot.special_pricing is not None:
        per_person = time_slot.special_pricing
    elif table.price_per_person is not None:
        per_person = table.price_per_person
    else:
        per_person = 0
    return per_person, round(per_person * party_size, 2)


class BookingService:
    """Validates a booking request and persists it atomically with its conflict check.

    Everything from resolving the slot to the insert runs while holding the
    table's lock and inside one transaction that also row-locks the table, so
    two requests for the same table can never both pass the conflict check.
    """

    def __init__(self, db: AsyncSession, notifier: ChangeNotifier, locks: KeyedLocks):
        self.db = db
        self.notifier = notifier
        self.locks = locks
        self.conflicts = ConflictDetector(db)

    async def create_reservation(self, customer_id: UUID, request: ReservationCreate) -> Reservation:
        start_time, end_time = require_window(request.start_time, request.end_time)

        async with self.locks.hold(table_key(request.table_id)):
            reservation = await self._book(customer_id, request, start_time, end_time)
            try:
                await self.db.commit()
            except SQLAlchemyError as e:
                await self.db.rollback()
                logger.error("Failed to persist reservation", table_id=str(request.table_id), error=str(e))
                raise StorageError("Could not save reservation") from e

        reservation = await load_reservation(self.db, reservation.id)

        logger.info(
            "Reservation created",
            reservation_id=str(reservation.id),
            customer_id=str(customer_id),
            table_id=str(reservation.table_id),
            reservation_date=reservation.reservation_date.isoformat(),
            start_time=reservation.start_time,
            end_time=reservation.end_time,
        )

        await self.notifier.publish(
            ChangeEvent.RESERVATION_CREATED,
            {"reservation": serialize_reservation(reservation)},
        )
        return reservation

    async def _book(
        self,
        customer_id: UUID,
        request: ReservationCreate,
        start_time: str,
        end_time: str,
    ) -> Reservation:
        try:
            time_slot = await self.db.get(TimeSlot, request.time_slot_id, populate_existing=True)
            if time_slot is None or not time_slot.is_available:
                raise SlotUnavailable()

            table = await lock_table(self.db, request.table_id)
            if table is None or not table.is_active or table.capacity < request.party_size:
                raise TableUnsuitable()

            if request.party_size > time_slot.max_party_size:
                raise ValidationError(
                    f"Party size exceeds the time slot maximum of {time_slot.max_party_size}",
                    field="party_size",
                )

            conflict = await self.conflicts.find_conflict(
                request.table_id, request.reservation_date, start_time, end_time
            )
            if conflict is not None:
                logger.info(
                    "Booking rejected: table already reserved",
                    table_id=str(request.table_id),
                    conflicting_reservation_id=str(conflict.id),
                )
                raise SchedulingConflict()

            per_person, total = price_snapshot(time_slot, table, request.party_size)

            reservation = Reservation(
                customer_id=customer_id,
                time_slot_id=time_slot.id,
                table_id=table.id,
                party_size=request.party_size,
                reservation_date=request.reservation_date,
                start_time=start_time,
                end_time=end_time,
                status=ReservationStatus.PENDING.value,
                special_requests=request.special_requests,
                customer_notes=request.customer_notes,
                price_per_person_at_booking=per_person,
                total_price=total,
            )
            self.db.add(reservation)
            await self.db.flush()
        except (SlotUnavailable, TableUnsuitable, ValidationError, SchedulingConflict):
            # Release the table row lock along with the transaction
            await self.db.rollback()
            raise
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error("Booking query failed", table_id=str(request.table_id), error=str(e))
            raise StorageError("Could not check table availability") from e

        return reservation
