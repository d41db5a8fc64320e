"""
Public API routes - no authentication required
"""

from fastapi import APIRouter, Depends, Request

from rsvp_seating.api.dependencies import get_rsvp_service
from rsvp_seating.schemas.rsvp import RSVPCreate
from rsvp_seating.services.rsvp_service import RSVPService
from rsvp_seating.utils.security import rate_limit_check, get_client_ip
from rsvp_seating.utils.responses import success_response, rate_limit_error

router = APIRouter()

@router.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "ok"}

@router.post("/rsvps")
async def submit_rsvp(
    rsvp_data: RSVPCreate,
    request: Request,
    service: RSVPService = Depends(get_rsvp_service)
):
    """Confirm attendance for one or more named guests"""
    client_ip = get_client_ip(request)
    if not rate_limit_check(client_ip):
        raise rate_limit_error()

    rsvp = service.submit_rsvp(rsvp_data.contact_info, rsvp_data.guest_names)

    return success_response(
        message=f"Attendance confirmed for {rsvp.guest_count} guest(s)",
        data=rsvp,
        status_code=201
    )
