"""
Database models package
"""

from .rsvp import RSVP
from .table import Table
from .guest_assignment import GuestAssignment
from .user_role import UserRole

__all__ = ["RSVP", "Table", "GuestAssignment", "UserRole"]
