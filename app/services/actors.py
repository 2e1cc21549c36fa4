"""Actors on whose behalf the scheduling core acts"""

from dataclasses import dataclass
from typing import ClassVar, FrozenSet, Union
from uuid import UUID

from app.models.user import User, UserRole


@dataclass(frozen=True)
class Customer:
    id: UUID

    is_staff: ClassVar[bool] = False
    # Reservation fields a customer may change on their own booking
    editable_fields: ClassVar[FrozenSet[str]] = frozenset({"status", "special_requests", "customer_notes"})

    def owns(self, customer_id: UUID) -> bool:
        return self.id == customer_id


@dataclass(frozen=True)
class Staff:
    id: UUID

    is_staff: ClassVar[bool] = True
    editable_fields: ClassVar[FrozenSet[str]] = frozenset({"status", "staff_notes"})

    def owns(self, customer_id: UUID) -> bool:
        return False


Actor = Union[Customer, Staff]


def actor_for(user: User) -> Actor:
    """Build the actor for an authenticated user."""
    if user.role == UserRole.STAFF:
        return Staff(id=user.id)
    return Customer(id=user.id)
