from eventhub.schemas.common import MessageResponse
from eventhub.schemas.user import UserCredentials, LoginResponse
from eventhub.schemas.event import EventIn, EventResponse

__all__ = [
    "MessageResponse",
    "UserCredentials", "LoginResponse",
    "EventIn", "EventResponse",
]
