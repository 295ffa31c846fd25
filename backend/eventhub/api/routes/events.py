"""
Event endpoints. Reads are public; writes need a token, and update/delete
additionally require that the caller owns the event.
"""

from fastapi import APIRouter, Depends, HTTPException, status

from eventhub.api.deps import (
    CurrentUser,
    get_current_user,
    get_event_id,
    get_event_store,
    get_owned_event,
    parse_body,
)
from eventhub.core.exceptions import EventNotFoundError, StoreError
from eventhub.core.logging import get_logger
from eventhub.models.event import Event
from eventhub.schemas.common import MessageResponse
from eventhub.schemas.event import EventIn, EventResponse
from eventhub.services.event_store import EventStore

logger = get_logger(__name__)
router = APIRouter(prefix="/events", tags=["Events"])

parse_event = parse_body(EventIn, "Invalid event data")


@router.get("", response_model=list[EventResponse])
async def list_events_endpoint(events: EventStore = Depends(get_event_store)):
    try:
        return await events.get_all()
    except StoreError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Could not fetch events",
        )


@router.get("/{event_id}", response_model=EventResponse)
async def get_event_endpoint(
    event_id: int = Depends(get_event_id),
    events: EventStore = Depends(get_event_store),
):
    try:
        return await events.get_by_id(event_id)
    except EventNotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Event not found")


@router.post("", response_model=EventResponse, status_code=status.HTTP_201_CREATED)
async def create_event_endpoint(
    caller: CurrentUser = Depends(get_current_user),
    data: EventIn = Depends(parse_event),
    events: EventStore = Depends(get_event_store),
):
    """Create an event owned by the caller. Any owner in the body is ignored."""
    try:
        return await events.create(data, caller.user_id)
    except StoreError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Event could not be created",
        )


@router.put("/{event_id}", response_model=MessageResponse)
async def update_event_endpoint(
    event: Event = Depends(get_owned_event),
    data: EventIn = Depends(parse_event),
    events: EventStore = Depends(get_event_store),
):
    """Replace an event's fields. Ownership stays with the caller."""
    try:
        await events.update(event.id, data, event.user_id)
    except StoreError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Event could not be updated",
        )
    return MessageResponse(message="Event updated successfully")


@router.delete("/{event_id}", response_model=MessageResponse)
async def delete_event_endpoint(
    event: Event = Depends(get_owned_event),
    events: EventStore = Depends(get_event_store),
):
    try:
        await events.delete(event.id)
    except StoreError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Event could not be deleted",
        )
    return MessageResponse(message="Event deleted successfully")
