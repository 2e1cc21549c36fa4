"""Reservation lifecycle: status transitions, note edits, cancellation and deletion"""

from contextlib import nullcontext
from typing import Any, Dict, FrozenSet, Mapping, Optional
from uuid import UUID

from sqlalchemy import delete
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
import structlog

from app.exceptions import (
    AuthorizationError,
    NotFound,
    SchedulingConflict,
    StorageError,
    TableUnsuitable,
    ValidationError,
)
from app.models.reservation import Reservation, ReservationStatus, INACTIVE_STATUSES
from app.models.review import Review
from app.services.actors import Actor
from app.services.conflicts import ConflictDetector
from app.services.locks import KeyedLocks, table_key
from app.services.notifier import ChangeEvent, ChangeNotifier
from app.services.records import load_reservation, lock_table, serialize_reservation

logger = structlog.get_logger()


FORWARD_TRANSITIONS: Mapping[ReservationStatus, FrozenSet[ReservationStatus]] = {
    ReservationStatus.PENDING: frozenset({ReservationStatus.CONFIRMED, ReservationStatus.CANCELLED}),
    ReservationStatus.CONFIRMED: frozenset({
        ReservationStatus.SEATED,
        ReservationStatus.CANCELLED,
        ReservationStatus.NO_SHOW,
    }),
    ReservationStatus.SEATED: frozenset({ReservationStatus.COMPLETED}),
    ReservationStatus.COMPLETED: frozenset(),
    ReservationStatus.CANCELLED: frozenset(),
    ReservationStatus.NO_SHOW: frozenset(),
}

CUSTOMER_CANCELLABLE = frozenset({ReservationStatus.PENDING, ReservationStatus.CONFIRMED})


class ReservationLifecycle:
    """Applies role-gated changes to existing reservations.

    Customers may cancel their own pending or confirmed reservations and edit
    their own request notes. Staff may change status and staff notes on any
    reservation and may hard-delete. With ``strict_transitions`` staff are held
    to FORWARD_TRANSITIONS; otherwise any staff status change is accepted.
    """

    def __init__(
        self,
        db: AsyncSession,
        notifier: ChangeNotifier,
        locks: KeyedLocks,
        strict_transitions: bool = False,
    ):
        self.db = db
        self.notifier = notifier
        self.locks = locks
        self.strict_transitions = strict_transitions
        self.conflicts = ConflictDetector(db)

    async def get(self, actor: Actor, reservation_id: UUID) -> Reservation:
        reservation = await load_reservation(self.db, reservation_id)
        if reservation is None:
            raise NotFound("Reservation", reservation_id)
        if not actor.is_staff and not actor.owns(reservation.customer_id):
            raise AuthorizationError("Not authorized to access this reservation")
        return reservation

    async def update(self, actor: Actor, reservation_id: UUID, changes: Dict[str, Any]) -> Reservation:
        """Apply a partial update. ``changes`` holds only the fields the caller sent."""
        reservation = await self.get(actor, reservation_id)

        forbidden = set(changes) - actor.editable_fields
        if forbidden:
            raise AuthorizationError(
                f"Not authorized to modify: {', '.join(sorted(forbidden))}"
            )

        current = ReservationStatus(reservation.status)
        target: Optional[ReservationStatus] = None
        if changes.get("status") is not None:
            target = ReservationStatus(changes["status"])
            if target == current:
                target = None
            else:
                self._check_transition(actor, current, target)

        reactivating = target is not None and current in INACTIVE_STATUSES and target not in INACTIVE_STATUSES
        guard = self.locks.hold(table_key(reservation.table_id)) if reactivating else nullcontext()

        async with guard:
            if reactivating:
                await self._ensure_table_free(reservation)

            for field, value in changes.items():
                if field == "status":
                    continue
                setattr(reservation, field, value)
            if target is not None:
                reservation.status = target.value

            await self._commit("Could not update reservation", reservation_id)

        reservation = await load_reservation(self.db, reservation_id)

        logger.info(
            "Reservation updated",
            reservation_id=str(reservation_id),
            actor_id=str(actor.id),
            staff=actor.is_staff,
            from_status=current.value,
            status=reservation.status,
            fields=sorted(changes),
        )

        event = (
            ChangeEvent.RESERVATION_CANCELLED
            if target == ReservationStatus.CANCELLED
            else ChangeEvent.RESERVATION_UPDATED
        )
        await self.notifier.publish(event, {"reservation": serialize_reservation(reservation)})
        return reservation

    async def cancel(self, actor: Actor, reservation_id: UUID) -> Reservation:
        return await self.update(actor, reservation_id, {"status": ReservationStatus.CANCELLED})

    async def delete(self, actor: Actor, reservation_id: UUID) -> None:
        if not actor.is_staff:
            raise AuthorizationError("Only staff can delete reservations")

        reservation = await self.get(actor, reservation_id)
        customer_id = reservation.customer_id

        try:
            await self.db.execute(delete(Review).where(Review.reservation_id == reservation.id))
            await self.db.delete(reservation)
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise StorageError("Could not delete reservation") from e
        await self._commit("Could not delete reservation", reservation_id)

        logger.info("Reservation deleted", reservation_id=str(reservation_id), actor_id=str(actor.id))
        await self.notifier.publish(
            ChangeEvent.RESERVATION_DELETED,
            {"reservation_id": str(reservation_id), "customer_id": str(customer_id)},
        )

    async def withdraw(self, actor: Actor, reservation_id: UUID) -> Optional[Reservation]:
        """Customers cancel, staff hard-delete."""
        if actor.is_staff:
            await self.delete(actor, reservation_id)
            return None
        return await self.cancel(actor, reservation_id)

    def _check_transition(self, actor: Actor, current: ReservationStatus, target: ReservationStatus) -> None:
        if not actor.is_staff:
            if target != ReservationStatus.CANCELLED:
                raise AuthorizationError("Customers can only cancel reservations")
            if current not in CUSTOMER_CANCELLABLE:
                raise ValidationError(
                    f"Cannot cancel a reservation that is {current.value}",
                    field="status",
                )
            return

        if self.strict_transitions and target not in FORWARD_TRANSITIONS[current]:
            raise ValidationError(
                f"Cannot move a reservation from {current.value} to {target.value}",
                field="status",
            )

    async def _ensure_table_free(self, reservation: Reservation) -> None:
        if reservation.table_id is None:
            raise TableUnsuitable("Reservation no longer has a table")
        try:
            table = await lock_table(self.db, reservation.table_id)
            conflict = None
            if table is not None:
                conflict = await self.conflicts.find_conflict(
                    reservation.table_id,
                    reservation.reservation_date,
                    reservation.start_time,
                    reservation.end_time,
                    exclude_reservation_id=reservation.id,
                )
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise StorageError("Could not check table availability") from e
        if table is None:
            await self.db.rollback()
            raise TableUnsuitable("Reservation no longer has a table")
        if conflict is not None:
            await self.db.rollback()
            raise SchedulingConflict("Table has been reserved for this time since cancellation")

    async def _commit(self, message: str, reservation_id: UUID) -> None:
        try:
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(message, reservation_id=str(reservation_id), error=str(e))
            raise StorageError(message) from e
