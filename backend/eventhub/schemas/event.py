"""
Pydantic schemas for event request/response validation.
"""

from datetime import datetime

from pydantic import BaseModel, Field


class EventIn(BaseModel):
    """Body for creating or replacing an event. The owner always comes from the token."""

    name: str = Field(..., min_length=1, max_length=255)
    description: str = Field(..., min_length=1, max_length=1000)
    location: str = Field(..., min_length=1, max_length=255)
    date_time: datetime


class EventResponse(BaseModel):
    id: int
    name: str
    description: str
    location: str
    date_time: datetime
    user_id: int

    model_config = {"from_attributes": True}
