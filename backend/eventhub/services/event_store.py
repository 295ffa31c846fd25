"""
Event and registration persistence.

Each write is a single statement followed by a commit. Referential and
uniqueness rules are enforced by the database constraints; an IntegrityError
is rolled back and re-raised as a typed store error.
"""

from typing import Optional

from sqlalchemy import delete, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import Executable

from eventhub.core.exceptions import (
    DuplicateRegistrationError,
    EventNotFoundError,
    ForeignKeyViolationError,
    StoreError,
)
from eventhub.core.logging import get_logger
from eventhub.core.metrics import record_store_operation
from eventhub.db.integrity import is_foreign_key_violation, is_unique_violation
from eventhub.models.event import Event
from eventhub.models.registration import Registration
from eventhub.schemas.event import EventIn

logger = get_logger(__name__)


class EventStore:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def _write(
        self,
        operation: str,
        statement: Optional[Executable] = None,
        on_duplicate: Optional[StoreError] = None,
    ) -> None:
        """Execute one statement (or flush pending objects) and commit."""
        try:
            if statement is not None:
                await self.db.execute(statement)
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            if on_duplicate is not None and is_unique_violation(e):
                logger.warning("store_write_rejected", operation=operation, reason="duplicate")
                record_store_operation(operation, "conflict")
                raise on_duplicate from e
            if is_foreign_key_violation(e):
                logger.warning("store_write_rejected", operation=operation, reason="foreign_key")
                record_store_operation(operation, "conflict")
                raise ForeignKeyViolationError(f"{operation}: referenced row does not exist") from e
            record_store_operation(operation, "error")
            raise StoreError(f"{operation} failed") from e
        record_store_operation(operation, "success")

    async def create(self, data: EventIn, owner_user_id: int) -> Event:
        event = Event(
            name=data.name,
            description=data.description,
            location=data.location,
            date_time=data.date_time,
            user_id=owner_user_id,
        )
        self.db.add(event)
        await self._write("create_event")

        logger.info("event_created", event_id=event.id, owner=owner_user_id)
        return event

    async def update(self, event_id: int, data: EventIn, owner_user_id: int) -> None:
        """
        Replace every mutable field of an event.
        An unknown event_id updates nothing and is not reported.
        """
        await self._write(
            "update_event",
            update(Event)
            .where(Event.id == event_id)
            .values(
                name=data.name,
                description=data.description,
                location=data.location,
                date_time=data.date_time,
                user_id=owner_user_id,
            )
            .execution_options(synchronize_session=False),
        )
        logger.info("event_updated", event_id=event_id)

    async def delete(self, event_id: int) -> None:
        """Delete an event and, through the cascade, its registrations. Unknown ids are a no-op."""
        await self._write("delete_event", delete(Event).where(Event.id == event_id))
        logger.info("event_deleted", event_id=event_id)

    async def get_all(self) -> list[Event]:
        try:
            result = await self.db.execute(select(Event).order_by(Event.id))
        except SQLAlchemyError as e:
            logger.error("event_list_failed", error=str(e))
            raise StoreError("could not list events") from e
        return list(result.scalars().all())

    async def get_by_id(self, event_id: int) -> Event:
        result = await self.db.execute(select(Event).where(Event.id == event_id))
        event = result.scalar_one_or_none()

        if event is None:
            raise EventNotFoundError(event_id)
        return event

    async def register(self, event_id: int, user_id: int) -> None:
        self.db.add(Registration(event_id=event_id, user_id=user_id))
        await self._write("register", on_duplicate=DuplicateRegistrationError(event_id, user_id))
        logger.info("event_registered", event_id=event_id, user_id=user_id)

    async def unregister(self, event_id: int, user_id: int) -> None:
        """Remove a registration. A pair that was never registered is a no-op."""
        await self._write(
            "unregister",
            delete(Registration).where(
                Registration.event_id == event_id,
                Registration.user_id == user_id,
            ),
        )
        logger.info("event_unregistered", event_id=event_id, user_id=user_id)

    async def list_registrations(self, event_id: int) -> list[int]:
        """User ids registered for an event."""
        result = await self.db.execute(
            select(Registration.user_id)
            .where(Registration.event_id == event_id)
            .order_by(Registration.user_id)
        )
        return list(result.scalars().all())
