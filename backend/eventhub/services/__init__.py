from eventhub.services.user_store import UserStore
from eventhub.services.event_store import EventStore

__all__ = ["UserStore", "EventStore"]
