from eventhub.db.base import Base
from eventhub.db.session import Database, get_db

__all__ = ["Base", "Database", "get_db"]
