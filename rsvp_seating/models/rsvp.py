"""
RSVP model
"""

import uuid
from datetime import datetime
from sqlalchemy import Column, Integer, String, DateTime, JSON
from sqlalchemy.orm import relationship

from rsvp_seating.core.db import Base

class RSVP(Base):
    __tablename__ = "rsvps"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    contact_info = Column(String(255), nullable=False)
    guest_count = Column(Integer, nullable=False)
    guest_names = Column(JSON, nullable=False)  # ordered; seat_number indexes into it
    created_at = Column(DateTime, default=datetime.utcnow, index=True)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    assignments = relationship("GuestAssignment", back_populates="rsvp", passive_deletes=True)
