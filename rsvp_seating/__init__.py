"""
RSVP collection and guest-to-table seating backend
"""
