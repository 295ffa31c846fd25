"""
Account endpoints: signup and login.
"""

from fastapi import APIRouter, Depends, HTTPException, status

from eventhub.api.deps import get_token_service, get_user_store, parse_body
from eventhub.core.exceptions import InvalidCredentialsError, StoreError
from eventhub.core.logging import get_logger
from eventhub.core.metrics import record_auth_attempt
from eventhub.core.security import TokenService
from eventhub.schemas.common import MessageResponse
from eventhub.schemas.user import LoginResponse, UserCredentials
from eventhub.services.user_store import UserStore

logger = get_logger(__name__)
router = APIRouter(tags=["Authentication"])

parse_credentials = parse_body(UserCredentials, "Invalid user data")


@router.post("/signup", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
async def signup(
    credentials: UserCredentials = Depends(parse_credentials),
    users: UserStore = Depends(get_user_store),
):
    """Create an account. Duplicate emails and store failures share one message."""
    try:
        await users.create(credentials.email, credentials.password)
    except StoreError:
        record_auth_attempt("signup", False)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="User could not be saved",
        )

    record_auth_attempt("signup", True)
    return MessageResponse(message="User created successfully")


@router.post("/login", response_model=LoginResponse)
async def login(
    credentials: UserCredentials = Depends(parse_credentials),
    users: UserStore = Depends(get_user_store),
    tokens: TokenService = Depends(get_token_service),
):
    """Exchange email and password for a signed token."""
    try:
        user = await users.validate_credentials(credentials.email, credentials.password)
    except InvalidCredentialsError:
        record_auth_attempt("login", False)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
        )

    token = tokens.issue(user.email, user.id)
    record_auth_attempt("login", True)
    logger.info("user_logged_in", user_id=user.id)
    return LoginResponse(message="User logged in successfully", token=token)
