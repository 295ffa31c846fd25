"""
Declarative base shared by all ORM models.
"""

from sqlalchemy import BigInteger, Column, DateTime, Integer, func
from sqlalchemy.orm import DeclarativeBase

# 64-bit ids; SQLite only autoincrements an INTEGER PRIMARY KEY, which is already 64-bit there
BigId = BigInteger().with_variant(Integer(), "sqlite")


class Base(DeclarativeBase):
    pass


class TimestampMixin:
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
