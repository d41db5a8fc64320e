"""
Pydantic schemas package
"""

from .common import *
from .rsvp import *
from .table import *
from .assignment import *

__all__ = [
    "StandardResponse",
    "ErrorResponse",
    "RSVPCreate",
    "RSVPRecord",
    "RSVPStats",
    "TableCreate",
    "TableUpdate",
    "TableRecord",
    "TableOverview",
    "AssignmentCreate",
    "AssignmentRecord",
    "AvailableGuest",
    "OccurrenceKey",
]
