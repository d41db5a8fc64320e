"""
RSVP-related Pydantic schemas
"""

from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel

__all__ = ["RSVPCreate", "RSVPRecord", "RSVPStats"]

class RSVPCreate(BaseModel):
    """Attendance confirmation as submitted by a guest"""
    contact_info: str
    guest_names: List[str]

class RSVPRecord(BaseModel):
    """Stored RSVP snapshot"""
    id: str
    contact_info: str
    guest_count: int
    guest_names: List[str]
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
        frozen = True

class RSVPStats(BaseModel):
    """Totals shown on the RSVP dashboard"""
    total_rsvps: int
    total_guests: int
