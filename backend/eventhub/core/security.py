"""
Password hashing and bearer token handling.

CredentialHasher wraps argon2id, a salted adaptive hash whose work factors
come from settings. TokenService issues and validates HMAC-signed JWTs that
carry the caller's email and numeric id.

Tokens are stateless: validity depends only on the signature and the
embedded expiry, so there is no server-side session store and no revocation.
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Optional

import jwt
from argon2 import PasswordHasher
from argon2.exceptions import VerificationError

from eventhub.core.config import Settings
from eventhub.core.exceptions import InvalidTokenError, ValidationError
from eventhub.core.logging import get_logger

logger = get_logger(__name__)


class CredentialHasher:
    """One-way hash and verify for plaintext passwords.

    Both operations are CPU-bound and block for the duration of the hash,
    so async callers should push them onto a worker thread.
    """

    def __init__(self, time_cost: int = 3, memory_cost: int = 65536, parallelism: int = 4):
        self._hasher = PasswordHasher(
            time_cost=time_cost,
            memory_cost=memory_cost,
            parallelism=parallelism,
        )
        # Verified against on unknown emails so both login failure paths cost a hash
        self.dummy_hash = self._hasher.hash("eventhub-dummy-password")

    @classmethod
    def from_settings(cls, settings: Settings) -> "CredentialHasher":
        return cls(
            time_cost=settings.PASSWORD_TIME_COST,
            memory_cost=settings.PASSWORD_MEMORY_COST,
            parallelism=settings.PASSWORD_PARALLELISM,
        )

    def hash(self, plaintext: str) -> str:
        """Raises argon2.exceptions.HashingError if hashing itself fails."""
        if not plaintext:
            raise ValidationError("Password is required", fields=["password"])
        return self._hasher.hash(plaintext)

    def verify(self, plaintext: str, hashed: str) -> bool:
        """
        Return True if plaintext matches hashed.

        A mismatch returns False. A malformed stored hash raises
        argon2.exceptions.InvalidHashError.
        """
        try:
            return self._hasher.verify(hashed, plaintext)
        except VerificationError:
            return False


class TokenService:
    """Issue and validate signed, time-limited bearer tokens."""

    def __init__(self, secret: str, algorithm: str = "HS256", ttl: timedelta = timedelta(hours=12)):
        if not secret:
            raise ValueError("token secret must not be empty")
        self._secret = secret
        self._algorithm = algorithm
        self._ttl = ttl

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenService":
        return cls(
            secret=settings.SECRET_KEY,
            algorithm=settings.ALGORITHM,
            ttl=timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES),
        )

    def issue(self, email: str, user_id: int, expires_delta: Optional[timedelta] = None) -> str:
        now = datetime.now(timezone.utc)
        expire = now + (expires_delta if expires_delta is not None else self._ttl)
        payload: dict[str, Any] = {
            "email": email,
            "id": user_id,
            "iat": int(now.timestamp()),
            "exp": int(expire.timestamp()),
        }
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def validate(self, token: str) -> int:
        """
        Return the user id carried by a token.

        Every failure (wrong or "none" algorithm, bad signature, expiry,
        missing or non-integer id) raises the same InvalidTokenError.
        """
        try:
            header = jwt.get_unverified_header(token)
            if header.get("alg") != self._algorithm:
                raise jwt.InvalidAlgorithmError(f"unexpected algorithm {header.get('alg')!r}")
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"require": ["exp", "id"]},
            )
        except jwt.PyJWTError as e:
            logger.debug("token_rejected", reason=type(e).__name__)
            raise InvalidTokenError() from None

        user_id = payload["id"]
        if isinstance(user_id, bool) or not isinstance(user_id, int):
            logger.debug("token_rejected", reason="bad_id_claim")
            raise InvalidTokenError()
        return user_id
