"""Review model"""

import uuid
from datetime import datetime
from sqlalchemy import Column, Integer, Boolean, DateTime, ForeignKey, Text, Uuid, Index
from sqlalchemy.orm import relationship

from app.database import Base


class Review(Base):
    """Post-visit reviews, at most one per reservation"""
    __tablename__ = "reviews"
    __table_args__ = (
        Index("ix_reviews_rating_created", "rating", "created_at"),
        Index("ix_reviews_public_verified", "is_public", "is_verified"),
    )

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    customer_id = Column(Uuid(as_uuid=True), ForeignKey("users.id"), nullable=False)
    reservation_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("reservations.id", ondelete="CASCADE"),
        unique=True,
        nullable=False,
    )

    # Ratings (1-5)
    rating = Column(Integer, nullable=False)
    food_rating = Column(Integer)
    service_rating = Column(Integer)
    ambiance_rating = Column(Integer)

    comment = Column(Text, nullable=False)

    is_verified = Column(Boolean, default=False)
    is_public = Column(Boolean, default=True)

    # Staff response
    staff_response = Column(Text)
    responded_by = Column(Uuid(as_uuid=True), ForeignKey("users.id", ondelete="SET NULL"))
    responded_at = Column(DateTime)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    reservation = relationship("Reservation")
