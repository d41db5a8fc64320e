"""
Admin API routes - requires authentication
"""

from typing import Optional
from fastapi import APIRouter, Depends, Query

from rsvp_seating.api.dependencies import get_rsvp_service, get_seating_service
from rsvp_seating.schemas.assignment import AssignmentCreate
from rsvp_seating.schemas.table import TableCreate, TableUpdate
from rsvp_seating.services.rsvp_service import RSVPService
from rsvp_seating.services.seating_service import SeatingService
from rsvp_seating.utils.security import verify_admin
from rsvp_seating.utils.responses import success_response

router = APIRouter(dependencies=[Depends(verify_admin)])

# -------- RSVPs --------

@router.get("/rsvps")
async def list_rsvps(
    search: Optional[str] = Query(None),
    service: RSVPService = Depends(get_rsvp_service)
):
    """List RSVPs, newest first"""
    rsvps = service.list_rsvps(search)
    return success_response(
        message="RSVPs retrieved successfully",
        data=rsvps
    )

@router.get("/rsvps/stats")
async def rsvp_stats(service: RSVPService = Depends(get_rsvp_service)):
    """Total RSVPs and total confirmed guests"""
    return success_response(
        message="RSVP statistics retrieved",
        data=service.get_stats()
    )

@router.delete("/rsvps/{rsvp_id}")
async def delete_rsvp(
    rsvp_id: str,
    service: RSVPService = Depends(get_rsvp_service)
):
    """Delete an RSVP and the assignments of its guests"""
    service.delete_rsvp(rsvp_id)
    return success_response(
        message="RSVP deleted successfully",
        data={"deleted_rsvp_id": rsvp_id}
    )

# -------- Tables --------

@router.get("/tables")
async def list_tables(service: SeatingService = Depends(get_seating_service)):
    return success_response(
        message="Tables retrieved successfully",
        data=service.list_tables()
    )

@router.get("/tables/overview")
async def table_overview(
    search: Optional[str] = Query(None),
    service: SeatingService = Depends(get_seating_service)
):
    """Tables with their seated guests, optionally filtered by guest name"""
    return success_response(
        message="Table overview retrieved",
        data=service.get_table_overview(search)
    )

@router.post("/tables")
async def create_table(
    table_data: TableCreate,
    service: SeatingService = Depends(get_seating_service)
):
    table = service.create_table(table_data.name, table_data.capacity)
    return success_response(
        message="Table created successfully",
        data=table,
        status_code=201
    )

@router.put("/tables/{table_id}")
async def edit_table(
    table_id: str,
    table_data: TableUpdate,
    service: SeatingService = Depends(get_seating_service)
):
    table = service.edit_table(table_id, table_data.name, table_data.capacity)
    return success_response(
        message="Table updated successfully",
        data=table
    )

@router.delete("/tables/{table_id}")
async def delete_table(
    table_id: str,
    service: SeatingService = Depends(get_seating_service)
):
    """Delete a table and the assignments seated at it"""
    service.delete_table(table_id)
    return success_response(
        message="Table deleted successfully",
        data={"deleted_table_id": table_id}
    )

# -------- Seating --------

@router.get("/guests/available")
async def available_guests(service: SeatingService = Depends(get_seating_service)):
    """Guests not seated at any table yet"""
    guests = service.list_available_guests()
    return success_response(
        message="Available guests retrieved",
        data=[{**g.model_dump(), "label": g.label} for g in guests]
    )

@router.get("/assignments")
async def list_assignments(
    search: Optional[str] = Query(None),
    service: SeatingService = Depends(get_seating_service)
):
    return success_response(
        message="Assignments retrieved successfully",
        data=service.list_assignments(search)
    )

@router.post("/assignments")
async def assign_guest(
    assignment_data: AssignmentCreate,
    service: SeatingService = Depends(get_seating_service)
):
    """Seat one guest at a table"""
    assignment = service.assign_guest(
        table_id=assignment_data.table_id,
        rsvp_id=assignment_data.rsvp_id,
        seat_index=assignment_data.seat_index
    )
    return success_response(
        message="Guest assigned successfully",
        data=assignment,
        status_code=201
    )

@router.delete("/assignments/{assignment_id}")
async def delete_assignment(
    assignment_id: str,
    service: SeatingService = Depends(get_seating_service)
):
    service.delete_assignment(assignment_id)
    return success_response(
        message="Assignment deleted successfully",
        data={"deleted_assignment_id": assignment_id}
    )
