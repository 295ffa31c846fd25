"""
User model: identity plus hashed credential.
"""

from sqlalchemy import Column, String

from eventhub.db.base import Base, BigId, TimestampMixin


class User(Base, TimestampMixin):
    __tablename__ = "users"

    id = Column(BigId, primary_key=True, autoincrement=True)
    email = Column(String(255), unique=True, index=True, nullable=False)
    hashed_password = Column(String(255), nullable=False)

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email={self.email})>"
