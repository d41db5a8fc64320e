"""
User role model
"""

import uuid
from datetime import datetime
from sqlalchemy import Column, String, DateTime, Enum

from rsvp_seating.core.db import Base

class UserRole(Base):
    __tablename__ = "user_roles"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String(36), nullable=False, index=True)
    role = Column(Enum("admin", "user", name="app_role"), nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)
