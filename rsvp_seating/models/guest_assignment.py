"""
Guest assignment model
"""

import uuid
from datetime import datetime
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship

from rsvp_seating.core.db import Base

class GuestAssignment(Base):
    __tablename__ = "guest_assignments"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    table_id = Column(String(36), ForeignKey("tables.id", ondelete="CASCADE"), nullable=False, index=True)
    rsvp_id = Column(String(36), ForeignKey("rsvps.id", ondelete="CASCADE"), nullable=False, index=True)
    guest_name = Column(String(255), nullable=False)  # copied from rsvp.guest_names at assignment time
    seat_number = Column(Integer, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)

    # Relationships
    table = relationship("Table", back_populates="assignments")
    rsvp = relationship("RSVP", back_populates="assignments")

    # A guest occurrence is seated at most once
    __table_args__ = (
        UniqueConstraint("rsvp_id", "seat_number", name="uq_guest_assignments_occurrence"),
    )
