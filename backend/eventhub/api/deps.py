"""
Request-scoped dependencies: stores, the authenticated caller, body parsing
and the event ownership check.

get_current_user is the only place a bearer token is validated. Protected
handlers declare it (directly or through get_owned_event) and trust the
CurrentUser they receive.
"""

import re
from dataclasses import dataclass
from typing import Callable, Type, TypeVar

import structlog
from fastapi import Depends, HTTPException, Request, status
from pydantic import BaseModel
from pydantic import ValidationError as SchemaValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from eventhub.core.exceptions import EventNotFoundError, InvalidTokenError, ValidationError
from eventhub.core.logging import get_logger
from eventhub.core.metrics import record_auth_attempt
from eventhub.core.security import CredentialHasher, TokenService
from eventhub.db.session import get_db
from eventhub.models.event import Event
from eventhub.services.event_store import EventStore
from eventhub.services.user_store import UserStore

logger = get_logger(__name__)

SchemaT = TypeVar("SchemaT", bound=BaseModel)

INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1
# ASCII digits only; 19 digits covers the int64 range
_EVENT_ID_RE = re.compile(r"[+-]?[0-9]{1,19}")


@dataclass(frozen=True)
class CurrentUser:
    user_id: int


def get_token_service(request: Request) -> TokenService:
    return request.app.state.token_service


def get_hasher(request: Request) -> CredentialHasher:
    return request.app.state.hasher


def get_user_store(
    db: AsyncSession = Depends(get_db),
    hasher: CredentialHasher = Depends(get_hasher),
) -> UserStore:
    return UserStore(db, hasher)


def get_event_store(db: AsyncSession = Depends(get_db)) -> EventStore:
    return EventStore(db)


def _unauthorized() -> HTTPException:
    return HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")


async def get_current_user(
    request: Request,
    tokens: TokenService = Depends(get_token_service),
) -> CurrentUser:
    """
    Resolve the caller from the auth header.

    The whole header value is the token; no "Bearer " scheme is expected.
    """
    header = request.app.state.settings.AUTH_HEADER
    token = request.headers.get(header)
    if not token:
        record_auth_attempt("token", False)
        logger.info("auth_rejected", reason="missing_token")
        raise _unauthorized()

    try:
        user_id = tokens.validate(token)
    except InvalidTokenError:
        record_auth_attempt("token", False)
        logger.info("auth_rejected", reason="invalid_token")
        raise _unauthorized()

    record_auth_attempt("token", True)
    structlog.contextvars.bind_contextvars(user_id=user_id)
    return CurrentUser(user_id=user_id)


def get_event_id(event_id: str) -> int:
    """Parse the {event_id} path segment as a signed 64-bit decimal."""
    if not _EVENT_ID_RE.fullmatch(event_id):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid event ID")
    value = int(event_id)
    if not INT64_MIN <= value <= INT64_MAX:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid event ID")
    return value


def parse_body(schema: Type[SchemaT], message: str) -> Callable:
    """
    Build a dependency that validates the JSON body against schema.

    Failures raise ValidationError carrying message and the offending field
    names, so each route keeps its own fixed error text.
    """

    async def dependency(request: Request) -> SchemaT:
        try:
            payload = await request.json()
        except ValueError:
            raise ValidationError(message, fields=["body"])

        try:
            return schema.model_validate(payload)
        except SchemaValidationError as e:
            fields = sorted({".".join(str(part) for part in err["loc"]) or "body" for err in e.errors()})
            raise ValidationError(message, fields=fields)

    return dependency


async def get_owned_event(
    caller: CurrentUser = Depends(get_current_user),
    event_id: int = Depends(get_event_id),
    events: EventStore = Depends(get_event_store),
) -> Event:
    """
    Load the event and require that the caller owns it.
    Runs before the request body is applied.
    """
    try:
        event = await events.get_by_id(event_id)
    except EventNotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Event not found")

    if event.user_id != caller.user_id:
        logger.warning("event_forbidden", event_id=event_id, owner=event.user_id)
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden")
    return event
