"""Time slot model"""

import uuid
from datetime import datetime
from sqlalchemy import (
    Column, String, Integer, Boolean, Date, DateTime, ForeignKey, JSON, Numeric, Text, Uuid, Index,
)

from app.database import Base


class TimeSlot(Base):
    """Staff-defined bookable windows"""
    __tablename__ = "time_slots"
    __table_args__ = (
        Index("ix_time_slots_date_location_available", "date", "location", "is_available"),
    )

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)

    # Window: zero-padded 24h "HH:MM" strings so they order lexicographically
    date = Column(Date, nullable=False)
    start_time = Column(String(5), nullable=False)
    end_time = Column(String(5), nullable=False)
    duration = Column(Integer, nullable=False)  # minutes

    max_party_size = Column(Integer, nullable=False)
    location = Column(String(30), nullable=False)
    area = Column(String(100), nullable=False)
    features = Column(JSON, default=list)

    # Per-person override of the table rate
    special_pricing = Column(Numeric(10, 2, asdecimal=False))
    special_notes = Column(Text)

    is_available = Column(Boolean, default=True)
    created_by = Column(Uuid(as_uuid=True), ForeignKey("users.id", ondelete="SET NULL"))

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
