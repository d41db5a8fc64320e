"""
Tests for the unassigned-guest computation
"""

from rsvp_seating.schemas import AssignmentRecord, OccurrenceKey, RSVPRecord
from rsvp_seating.services.seating_service import compute_available_guests

def make_rsvp(rsvp_id, contact, names):
    return RSVPRecord(id=rsvp_id, contact_info=contact, guest_count=len(names), guest_names=names)

def make_assignment(assignment_id, rsvp_id, seat, name, table_id="t1"):
    return AssignmentRecord(
        id=assignment_id,
        table_id=table_id,
        rsvp_id=rsvp_id,
        guest_name=name,
        seat_number=seat,
    )

RSVPS = [
    make_rsvp("r1", "+381601234567", ["Ana", "Marko"]),
    make_rsvp("r2", "jelena@example.com", ["Jelena", "Marko", "Petar"]),
]

def test_no_assignments_lists_every_guest_in_order():
    """RSVP order first, then seat index"""
    guests = compute_available_guests(RSVPS, [])

    assert [g.occurrence for g in guests] == [
        OccurrenceKey("r1", 0),
        OccurrenceKey("r1", 1),
        OccurrenceKey("r2", 0),
        OccurrenceKey("r2", 1),
        OccurrenceKey("r2", 2),
    ]
    assert guests[3].guest_name == "Marko"
    assert guests[3].contact_info == "jelena@example.com"
    assert guests[0].label == "Ana (+381601234567)"

def test_assigned_occurrence_excluded():
    guests = compute_available_guests(RSVPS, [make_assignment("a1", "r2", 2, "Petar")])

    assert OccurrenceKey("r2", 2) not in [g.occurrence for g in guests]
    assert len(guests) == 4

def test_exclusion_is_by_occurrence_not_name():
    """Seating one Marko leaves the namesake in the other RSVP available"""
    guests = compute_available_guests(RSVPS, [make_assignment("a1", "r1", 1, "Marko")])

    markos = [g.occurrence for g in guests if g.guest_name == "Marko"]
    assert markos == [OccurrenceKey("r2", 1)]

def test_assignment_for_unknown_rsvp_is_ignored():
    guests = compute_available_guests(RSVPS, [make_assignment("a1", "gone", 0, "Ana")])
    assert len(guests) == 5

def test_everyone_seated():
    assignments = [
        make_assignment(f"a{r.id}{i}", r.id, i, name)
        for r in RSVPS
        for i, name in enumerate(r.guest_names)
    ]
    assert compute_available_guests(RSVPS, assignments) == []

def test_empty_inputs():
    assert compute_available_guests([], []) == []
