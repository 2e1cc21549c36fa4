"""Service wiring for request handlers"""

from functools import lru_cache

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.database import get_db
from app.services.booking import BookingService
from app.services.catalog import AvailabilityCatalog
from app.services.lifecycle import ReservationLifecycle
from app.services.locks import KeyedLocks
from app.services.notifier import ChangeNotifier


@lru_cache()
def get_locks() -> KeyedLocks:
    """Process-wide lock registry"""
    return KeyedLocks()


def get_notifier(request: Request) -> ChangeNotifier:
    """Notifier created by the application lifespan"""
    return request.app.state.notifier


def get_booking_service(
    db: AsyncSession = Depends(get_db),
    notifier: ChangeNotifier = Depends(get_notifier),
    locks: KeyedLocks = Depends(get_locks),
) -> BookingService:
    return BookingService(db, notifier, locks)


def get_lifecycle(
    db: AsyncSession = Depends(get_db),
    notifier: ChangeNotifier = Depends(get_notifier),
    locks: KeyedLocks = Depends(get_locks),
) -> ReservationLifecycle:
    return ReservationLifecycle(
        db,
        notifier,
        locks,
        strict_transitions=settings.strict_status_transitions,
    )


def get_catalog(
    db: AsyncSession = Depends(get_db),
    notifier: ChangeNotifier = Depends(get_notifier),
    locks: KeyedLocks = Depends(get_locks),
) -> AvailabilityCatalog:
    return AvailabilityCatalog(db, notifier, locks)
