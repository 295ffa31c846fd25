"""
Attendance endpoints: register and unregister the caller for an event.
"""

from fastapi import APIRouter, Depends, HTTPException, status

from eventhub.api.deps import CurrentUser, get_current_user, get_event_id, get_event_store
from eventhub.core.exceptions import EventNotFoundError, StoreError
from eventhub.schemas.common import MessageResponse
from eventhub.services.event_store import EventStore

router = APIRouter(prefix="/events", tags=["Registrations"])


async def _require_event(events: EventStore, event_id: int) -> None:
    # A missing event is reported as a server-side failure on these routes
    try:
        await events.get_by_id(event_id)
    except EventNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Event not found",
        )


@router.post("/{event_id}/register", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
async def register_endpoint(
    caller: CurrentUser = Depends(get_current_user),
    event_id: int = Depends(get_event_id),
    events: EventStore = Depends(get_event_store),
):
    await _require_event(events, event_id)
    try:
        await events.register(event_id, caller.user_id)
    except StoreError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Event could not be registered",
        )
    return MessageResponse(message="Event registered successfully")


@router.delete("/{event_id}/register", response_model=MessageResponse)
async def unregister_endpoint(
    caller: CurrentUser = Depends(get_current_user),
    event_id: int = Depends(get_event_id),
    events: EventStore = Depends(get_event_store),
):
    """Remove the caller's registration; not being registered is fine."""
    await _require_event(events, event_id)
    try:
        await events.unregister(event_id, caller.user_id)
    except StoreError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Event could not be unregistered",
        )
    return MessageResponse(message="Event unregistered successfully")
