"""
RSVP submission, listing and removal
"""

import logging
from typing import Iterable, List, Optional

from rsvp_seating.core.config import settings
from rsvp_seating.core.exceptions import NotFoundError, ValidationError
from rsvp_seating.schemas import RSVPRecord, RSVPStats

logger = logging.getLogger(__name__)


def normalize_guest_names(names: Iterable[Optional[str]]) -> List[str]:
    """Trim every name and drop the blank ones, keeping the submitted order"""
    trimmed = ((name or "").strip() for name in names)
    return [name for name in trimmed if name]


def matches_search(rsvp: RSVPRecord, search: str) -> bool:
    query = search.strip().lower()
    if not query:
        return True
    return query in rsvp.contact_info.lower() or any(
        query in name.lower() for name in rsvp.guest_names
    )


class RSVPService:
    """Service for attendance confirmations"""

    def __init__(self, store, max_guests: Optional[int] = None):
        self.store = store
        self.max_guests = max_guests or settings.MAX_GUESTS_PER_RSVP

    def submit_rsvp(self, contact_info: str, guest_names: List[str]) -> RSVPRecord:
        """Validate and store a new RSVP.

        The stored guest list is the trimmed, non-blank subset of ``guest_names``
        in submission order, and ``guest_count`` is its length. Nothing is
        stored when validation fails.
        """
        contact = (contact_info or "").strip()
        if not contact:
            raise ValidationError("contact info required")

        if len(guest_names) > self.max_guests:
            raise ValidationError(f"at most {self.max_guests} guests per RSVP")

        names = normalize_guest_names(guest_names)
        if not names:
            raise ValidationError("at least one guest name required")

        rsvp = self.store.create_rsvp(contact, names)
        logger.info(f"RSVP {rsvp.id} submitted for {rsvp.guest_count} guest(s)")
        return rsvp

    def list_rsvps(self, search: Optional[str] = None) -> List[RSVPRecord]:
        """List RSVPs newest first, optionally filtered by contact or guest name"""
        rsvps = self.store.list_rsvps()
        if search:
            rsvps = [r for r in rsvps if matches_search(r, search)]
        return rsvps

    def get_stats(self) -> RSVPStats:
        rsvps = self.store.list_rsvps()
        return RSVPStats(
            total_rsvps=len(rsvps),
            total_guests=sum(r.guest_count for r in rsvps),
        )

    def delete_rsvp(self, rsvp_id: str) -> None:
        """Delete an RSVP; assignments of its guests are removed with it"""
        if not self.store.delete_rsvp(rsvp_id):
            raise NotFoundError("RSVP not found")
        logger.info(f"RSVP {rsvp_id} deleted")
