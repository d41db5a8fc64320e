"""
Table-related Pydantic schemas
"""

from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel

from .assignment import AssignmentRecord

__all__ = ["TableCreate", "TableUpdate", "TableRecord", "TableOverview"]

class TableCreate(BaseModel):
    """Schema for creating a table"""
    name: str
    capacity: int

class TableUpdate(BaseModel):
    """Schema for editing a table; both fields are replaced"""
    name: str
    capacity: int

class TableRecord(BaseModel):
    """Stored table snapshot"""
    id: str
    name: str
    capacity: int
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
        frozen = True

class TableOverview(BaseModel):
    """A table with its current assignments"""
    id: str
    name: str
    capacity: int
    assigned_count: int
    available_seats: int
    assignments: List[AssignmentRecord]
