"""
Registration model: a user's attendance for an event.

The unique constraint on (event_id, user_id) is what rejects a second
registration for the same pair; nothing checks for it beforehand.
"""

from sqlalchemy import Column, ForeignKey, UniqueConstraint

from eventhub.db.base import Base, BigId


class Registration(Base):
    __tablename__ = "registrations"

    id = Column(BigId, primary_key=True, autoincrement=True)
    event_id = Column(BigId, ForeignKey("events.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(BigId, ForeignKey("users.id"), nullable=False, index=True)

    __table_args__ = (
        UniqueConstraint("event_id", "user_id", name="uq_registration_event_user"),
    )

    def __repr__(self) -> str:
        return f"<Registration(event={self.event_id}, user={self.user_id})>"
