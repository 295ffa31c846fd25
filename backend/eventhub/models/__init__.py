from eventhub.models.user import User
from eventhub.models.event import Event
from eventhub.models.registration import Registration

__all__ = ["User", "Event", "Registration"]
