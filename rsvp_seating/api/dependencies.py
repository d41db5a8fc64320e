"""
Service providers for the routers
"""

from fastapi import Depends
from sqlalchemy.orm import Session

from rsvp_seating.core.db import get_db
from rsvp_seating.services.repositories import get_store
from rsvp_seating.services.rsvp_service import RSVPService
from rsvp_seating.services.seating_service import SeatingService

def get_rsvp_service(db: Session = Depends(get_db)) -> RSVPService:
    return RSVPService(get_store(db))

def get_seating_service(db: Session = Depends(get_db)) -> SeatingService:
    return SeatingService(get_store(db))
