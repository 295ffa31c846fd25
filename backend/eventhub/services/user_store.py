"""
User persistence: signup and credential checks.
"""

from argon2.exceptions import HashingError, InvalidHashError
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.concurrency import run_in_threadpool

from eventhub.core.exceptions import (
    DuplicateEmailError,
    InvalidCredentialsError,
    StoreError,
    ValidationError,
)
from eventhub.core.logging import get_logger
from eventhub.core.metrics import password_hash_latency, record_store_operation
from eventhub.core.security import CredentialHasher
from eventhub.db.integrity import is_unique_violation
from eventhub.models.user import User

logger = get_logger(__name__)


class UserStore:
    def __init__(self, db: AsyncSession, hasher: CredentialHasher):
        self.db = db
        self.hasher = hasher

    async def create(self, email: str, password: str) -> User:
        """
        Hash the password and insert a new user.
        Email uniqueness is left to the unique index.
        """
        missing = [name for name, value in (("email", email), ("password", password)) if not value]
        if missing:
            raise ValidationError("User data is incomplete", fields=missing)

        try:
            with password_hash_latency.time():
                hashed = await run_in_threadpool(self.hasher.hash, password)
        except HashingError as e:
            logger.error("password_hash_failed", error=str(e))
            record_store_operation("create_user", "error")
            raise StoreError("could not hash password") from e

        user = User(email=email, hashed_password=hashed)
        self.db.add(user)
        try:
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            if is_unique_violation(e):
                logger.warning("registration_failed", reason="email_exists")
                record_store_operation("create_user", "conflict")
                raise DuplicateEmailError(email) from e
            record_store_operation("create_user", "error")
            raise StoreError("could not insert user") from e

        record_store_operation("create_user", "success")
        logger.info("user_registered", user_id=user.id)
        return user

    async def validate_credentials(self, email: str, password: str) -> User:
        """
        Return the user owning these credentials.
        Unknown email and wrong password raise the same InvalidCredentialsError.
        """
        result = await self.db.execute(select(User).where(User.email == email))
        user = result.scalar_one_or_none()

        if user is None:
            await run_in_threadpool(self.hasher.verify, password, self.hasher.dummy_hash)
            logger.warning("login_failed", reason="unknown_email")
            raise InvalidCredentialsError()

        try:
            with password_hash_latency.time():
                valid = await run_in_threadpool(self.hasher.verify, password, user.hashed_password)
        except InvalidHashError:
            logger.error("stored_hash_invalid", user_id=user.id)
            raise InvalidCredentialsError() from None

        if not valid:
            logger.warning("login_failed", reason="wrong_password", user_id=user.id)
            raise InvalidCredentialsError()
        return user
