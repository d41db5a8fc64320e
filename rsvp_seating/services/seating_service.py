"""
Seating arrangement and validation service
"""

import logging
from collections import Counter
from typing import Iterable, List, Optional

from rsvp_seating.core.config import settings
from rsvp_seating.core.exceptions import NotFoundError, ValidationError
from rsvp_seating.schemas import (
    AssignmentRecord,
    AvailableGuest,
    OccurrenceKey,
    RSVPRecord,
    TableOverview,
    TableRecord,
)

logger = logging.getLogger(__name__)


def compute_available_guests(
    rsvps: Iterable[RSVPRecord],
    assignments: Iterable[AssignmentRecord],
) -> List[AvailableGuest]:
    """Guest occurrences that have no assignment yet.

    Order follows ``rsvps``, then seat index ascending.
    """
    seated = {a.occurrence for a in assignments}
    return [
        AvailableGuest(
            rsvp_id=rsvp.id,
            seat_index=idx,
            guest_name=name,
            contact_info=rsvp.contact_info,
        )
        for rsvp in rsvps
        for idx, name in enumerate(rsvp.guest_names)
        if OccurrenceKey(rsvp.id, idx) not in seated
    ]


def validate_table_fields(name: str, capacity: int) -> str:
    """Return the cleaned table name or raise ValidationError"""
    cleaned = (name or "").strip()
    if not cleaned:
        raise ValidationError("table name required")
    if isinstance(capacity, bool) or not isinstance(capacity, int) or capacity <= 0:
        raise ValidationError("capacity must be a positive integer")
    return cleaned


class SeatingService:
    """Service for table management and guest-to-table assignment"""

    def __init__(self, store, unique_names: Optional[bool] = None):
        self.store = store
        self.unique_names = settings.UNIQUE_GUEST_NAMES if unique_names is None else unique_names

    # Guests

    def list_available_guests(self) -> List[AvailableGuest]:
        return compute_available_guests(self.store.list_rsvps(), self.store.list_assignments())

    def assign_guest(self, table_id: str, rsvp_id: str, seat_index: Optional[int]) -> AssignmentRecord:
        """Seat one guest occurrence at a table.

        Rules are checked in order and the first violation is raised:
        missing selection, guest not found, guest already assigned,
        table not found, table full.
        """
        if not table_id or not rsvp_id or seat_index is None:
            raise ValidationError("missing selection")

        rsvp = self.store.get_rsvp(rsvp_id)
        if not rsvp or not 0 <= seat_index < len(rsvp.guest_names):
            raise ValidationError("guest not found")
        guest_name = rsvp.guest_names[seat_index]

        assignments = self.store.list_assignments()
        occurrence = OccurrenceKey(rsvp_id, seat_index)
        for existing in assignments:
            if existing.occurrence == occurrence or (
                self.unique_names and existing.guest_name == guest_name
            ):
                logger.warning(f"Rejected assignment of '{guest_name}': already seated at table {existing.table_id}")
                raise ValidationError("guest already assigned")

        table = self.store.get_table(table_id)
        if not table:
            raise NotFoundError("table not found")

        seated_here = sum(1 for a in assignments if a.table_id == table_id)
        if seated_here + 1 > table.capacity:
            logger.warning(f"Rejected assignment of '{guest_name}': table '{table.name}' is full")
            raise ValidationError("table full")

        assignment = self.store.create_assignment(
            table_id=table_id,
            rsvp_id=rsvp_id,
            guest_name=guest_name,
            seat_number=seat_index,
        )
        logger.info(f"Guest '{guest_name}' assigned to table '{table.name}'")
        return assignment

    def delete_assignment(self, assignment_id: str) -> None:
        """Unseat a guest; the occurrence becomes available again"""
        assignment = self.store.get_assignment(assignment_id)
        if not assignment or not self.store.delete_assignment(assignment_id):
            raise NotFoundError("assignment not found")
        logger.info(f"Guest '{assignment.guest_name}' removed from table {assignment.table_id}")

    def list_assignments(self, search: Optional[str] = None) -> List[AssignmentRecord]:
        assignments = self.store.list_assignments()
        query = (search or "").strip().lower()
        if query:
            assignments = [a for a in assignments if query in a.guest_name.lower()]
        return assignments

    # Tables

    def list_tables(self) -> List[TableRecord]:
        return self.store.list_tables()

    def create_table(self, name: str, capacity: int) -> TableRecord:
        name = validate_table_fields(name, capacity)
        table = self.store.create_table(name, capacity)
        logger.info(f"Table '{table.name}' created with capacity {table.capacity}")
        return table

    def edit_table(self, table_id: str, name: str, capacity: int) -> TableRecord:
        """Replace a table's name and capacity.

        Capacity may not drop below the number of guests already seated there.
        """
        name = validate_table_fields(name, capacity)
        if not self.store.get_table(table_id):
            raise NotFoundError("table not found")

        seated = sum(1 for a in self.store.list_assignments() if a.table_id == table_id)
        if capacity < seated:
            raise ValidationError("capacity below assigned guests")

        table = self.store.update_table(table_id, name, capacity)
        if not table:
            raise NotFoundError("table not found")
        logger.info(f"Table {table_id} updated: '{table.name}', capacity {table.capacity}")
        return table

    def delete_table(self, table_id: str) -> None:
        """Delete a table; its assignments are removed with it"""
        if not self.store.delete_table(table_id):
            raise NotFoundError("table not found")
        logger.info(f"Table {table_id} deleted")

    def get_table_overview(self, search: Optional[str] = None) -> List[TableOverview]:
        """Tables with their seated guests.

        With a search term only matching assignments are listed and tables
        without a match are left out.
        """
        assignments = self.store.list_assignments()
        counts = Counter(a.table_id for a in assignments)
        matching = self.list_assignments(search) if search else assignments

        overview = []
        for table in self.store.list_tables():
            table_assignments = [a for a in matching if a.table_id == table.id]
            if search and not table_assignments:
                continue
            overview.append(TableOverview(
                id=table.id,
                name=table.name,
                capacity=table.capacity,
                assigned_count=counts[table.id],
                available_seats=max(table.capacity - counts[table.id], 0),
                assignments=table_assignments,
            ))
        return overview
