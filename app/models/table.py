"""Table model"""

import uuid
from datetime import datetime
from sqlalchemy import Column, String, Integer, Boolean, DateTime, JSON, Numeric, Uuid
import enum

from app.database import Base


class Location(str, enum.Enum):
    """Dining locations shared by tables and time slots"""
    INDOOR = "indoor"
    OUTDOOR = "outdoor"
    PRIVATE_DINING = "private-dining"
    BAR = "bar"
    WINDOW_VIEW = "window-view"
    QUIET_AREA = "quiet-area"


class TableFeature(str, enum.Enum):
    WINDOW_VIEW = "window-view"
    QUIET_AREA = "quiet-area"
    PRIVATE = "private"
    ACCESSIBLE = "accessible"
    HIGH_CHAIR_AVAILABLE = "high-chair-available"


class TableStatus(str, enum.Enum):
    AVAILABLE = "available"
    OCCUPIED = "occupied"
    RESERVED = "reserved"
    MAINTENANCE = "maintenance"


class Table(Base):
    """Physical dining tables"""
    __tablename__ = "tables"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    table_number = Column(String(20), unique=True, nullable=False)
    capacity = Column(Integer, nullable=False)

    # Placement
    location = Column(String(30), nullable=False)
    area = Column(String(100), nullable=False)
    features = Column(JSON, default=list)

    # Fallback rate when the booked slot carries no special pricing
    price_per_person = Column(Numeric(10, 2, asdecimal=False))

    # Status
    is_active = Column(Boolean, default=True)
    current_status = Column(String(20), default=TableStatus.AVAILABLE.value)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
