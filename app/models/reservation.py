"""Reservation model"""

import uuid
from datetime import datetime
from sqlalchemy import (
    Column, String, Integer, Boolean, Date, DateTime, ForeignKey, Numeric, Text, Uuid, Index,
)
from sqlalchemy.orm import relationship, validates
import enum

from app.database import Base


class ReservationStatus(str, enum.Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    SEATED = "seated"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    NO_SHOW = "no-show"


# Reservations in these states never block a table
INACTIVE_STATUSES = frozenset({ReservationStatus.CANCELLED, ReservationStatus.NO_SHOW})


class Reservation(Base):
    """Table reservations"""
    __tablename__ = "reservations"
    __table_args__ = (
        Index("ix_reservations_table_date_start", "table_id", "reservation_date", "start_time"),
        Index("ix_reservations_customer_date", "customer_id", "reservation_date"),
        Index("ix_reservations_status_date", "status", "reservation_date"),
    )

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    customer_id = Column(Uuid(as_uuid=True), ForeignKey("users.id"), nullable=False)
    time_slot_id = Column(Uuid(as_uuid=True), ForeignKey("time_slots.id", ondelete="SET NULL"))
    table_id = Column(Uuid(as_uuid=True), ForeignKey("tables.id", ondelete="SET NULL"))

    party_size = Column(Integer, nullable=False)

    # Copied from the request at booking time; later slot edits do not move the booking
    reservation_date = Column(Date, nullable=False)
    start_time = Column(String(5), nullable=False)
    end_time = Column(String(5), nullable=False)

    status = Column(String(20), default=ReservationStatus.PENDING.value, nullable=False)

    # Notes
    special_requests = Column(Text)
    customer_notes = Column(Text)
    staff_notes = Column(Text)
    is_walk_in = Column(Boolean, default=False)

    # Price snapshot, written once at booking
    price_per_person_at_booking = Column(Numeric(10, 2, asdecimal=False))
    total_price = Column(Numeric(10, 2, asdecimal=False))

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    customer = relationship("User")
    time_slot = relationship("TimeSlot")
    table = relationship("Table")

    @validates("price_per_person_at_booking", "total_price")
    def _freeze_price_snapshot(self, key, value):
        current = self.__dict__.get(key)
        if current is not None and current != value:
            raise ValueError("price snapshot is immutable once captured")
        return value

    @property
    def price_snapshot(self) -> dict:
        return {
            "price_per_person_at_booking": self.price_per_person_at_booking,
            "total_price": self.total_price,
        }
