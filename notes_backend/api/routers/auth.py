import logging

from fastapi import APIRouter, Depends, HTTPException, status

from notes_backend.api.deps import get_accounts, get_hasher, get_token_service
from notes_backend.api.schemas import AuthResponse, ErrorResponse, LoginRequest, RegisterRequest, UserPublic
from notes_backend.security import PasswordHasher, TokenError, TokenService
from notes_database import AccountStore, DuplicateAccountError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Authentication"])

INVALID_CREDENTIALS = "invalid email or password"


def _issue_token(tokens: TokenService, user) -> str:
    try:
        return tokens.issue(user)
    except TokenError as exc:
        logger.error("Could not issue token for user %s: %s", user.id, exc)
        raise HTTPException(status_code=500, detail="failed to create token")


# PUBLIC_INTERFACE
@router.post(
    "/register",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}},
    summary="Register a new user",
)
def register(
    body: RegisterRequest,
    accounts: AccountStore = Depends(get_accounts),
    hasher: PasswordHasher = Depends(get_hasher),
    tokens: TokenService = Depends(get_token_service),
):
    """
    Register a new user.
    Returns the public account fields and a bearer token.
    """
    if accounts.get_by_email(body.email):
        raise HTTPException(status_code=400, detail="a user with this email already exists")
    if accounts.get_by_username(body.username):
        raise HTTPException(status_code=400, detail="a user with this username already exists")

    password_hash = hasher.hash(body.password)
    try:
        user = accounts.create(body.username, body.email, password_hash)
    except DuplicateAccountError:
        logger.info("Concurrent registration lost the race for %s", body.email)
        raise HTTPException(status_code=400, detail="a user with this username or email already exists")

    logger.info("Registered user id=%s", user.id)
    return AuthResponse(
        message="user registered successfully",
        user=UserPublic.model_validate(user),
        token=_issue_token(tokens, user),
    )


# PUBLIC_INTERFACE
@router.post(
    "/login",
    response_model=AuthResponse,
    responses={401: {"model": ErrorResponse}},
    summary="Login and get a bearer token",
)
def login(
    body: LoginRequest,
    accounts: AccountStore = Depends(get_accounts),
    hasher: PasswordHasher = Depends(get_hasher),
    tokens: TokenService = Depends(get_token_service),
):
    """
    User login by email and password.
    Unknown email and wrong password produce the same 401.
    """
    user = accounts.get_by_email(body.email)
    if user is None or not hasher.verify(body.password, user.password_hash):
        logger.info("Failed login attempt")
        raise HTTPException(status_code=401, detail=INVALID_CREDENTIALS)

    return AuthResponse(
        message="login successful",
        user=UserPublic.model_validate(user),
        token=_issue_token(tokens, user),
    )
