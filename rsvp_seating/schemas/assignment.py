"""
Guest assignment Pydantic schemas
"""

from datetime import datetime
from typing import NamedTuple, Optional
from pydantic import BaseModel

__all__ = ["OccurrenceKey", "AssignmentCreate", "AssignmentRecord", "AvailableGuest"]

class OccurrenceKey(NamedTuple):
    """Identity of one named guest inside one RSVP"""
    rsvp_id: str
    seat_index: int

class AssignmentCreate(BaseModel):
    """Seat one guest occurrence at a table"""
    table_id: str
    rsvp_id: str
    seat_index: int

class AssignmentRecord(BaseModel):
    """Stored guest assignment snapshot"""
    id: str
    table_id: str
    rsvp_id: str
    guest_name: str
    seat_number: int
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
        frozen = True

    @property
    def occurrence(self) -> OccurrenceKey:
        return OccurrenceKey(self.rsvp_id, self.seat_number)

class AvailableGuest(BaseModel):
    """Guest occurrence that is not seated yet"""
    rsvp_id: str
    seat_index: int
    guest_name: str
    contact_info: str

    class Config:
        frozen = True

    @property
    def occurrence(self) -> OccurrenceKey:
        return OccurrenceKey(self.rsvp_id, self.seat_index)

    @property
    def label(self) -> str:
        return f"{self.guest_name} ({self.contact_info})"
