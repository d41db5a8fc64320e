"""
Error taxonomy shared by the stores, services and API layer
"""


class SeatingError(Exception):
    """Base exception for RSVP and seating errors"""

    pass


class ValidationError(SeatingError):
    """Bad or missing input, or a seating rule violation"""

    pass


class NotFoundError(SeatingError):
    """Reference to a table, RSVP, assignment or guest that does not exist"""

    pass


class PermissionDeniedError(SeatingError):
    """Caller does not hold the admin role"""

    pass


class StoreError(SeatingError):
    """Backing store call failed"""

    pass
