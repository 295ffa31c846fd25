"""
Event model. Every event belongs to exactly one user.

name, description and location may be empty strings here; required-ness
is checked on the request schema, not in the table.
"""

from sqlalchemy import Column, DateTime, ForeignKey, Index, String

from eventhub.db.base import Base, BigId


class Event(Base):
    __tablename__ = "events"

    id = Column(BigId, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    description = Column(String(1000), nullable=False)
    location = Column(String(255), nullable=False)
    date_time = Column(DateTime(timezone=True), nullable=False)
    user_id = Column(BigId, ForeignKey("users.id"), nullable=False)

    __table_args__ = (
        Index("ix_events_user_id", "user_id"),
    )

    def __repr__(self) -> str:
        return f"<Event(id={self.id}, name={self.name}, owner={self.user_id})>"
