"""
Access guard for protected routes.

Attached at router level: it resolves the bearer token to an account and
stores the account on ``request.state`` before any handler runs. Every
failure is a 401 and nothing downstream executes.
"""
import logging
from typing import Optional

from fastapi import Depends, Header, HTTPException, Request, status

from notes_backend.api.deps import get_accounts, get_token_service
from notes_backend.security import TokenError, TokenService
from notes_database import AccountStore

logger = logging.getLogger(__name__)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def extract_bearer_token(authorization: Optional[str]) -> str:
    if not authorization:
        raise _unauthorized("authorization header is required")
    parts = authorization.split(" ")
    if len(parts) != 2 or parts[0] != "Bearer" or not parts[1]:
        raise _unauthorized("invalid authorization header format")
    return parts[1]


# PUBLIC_INTERFACE
def require_auth(
    request: Request,
    authorization: Optional[str] = Header(default=None),
    tokens: TokenService = Depends(get_token_service),
    accounts: AccountStore = Depends(get_accounts),
) -> None:
    """Validates the bearer token and attaches the account to the request."""
    token = extract_bearer_token(authorization)
    try:
        claims = tokens.validate(token)
    except TokenError as exc:
        logger.info("Rejected token on %s: %s", request.url.path, exc)
        raise _unauthorized(f"invalid token: {exc}")

    user = accounts.get(claims.user_id)
    if user is None:
        logger.info("Token for unknown user id %s", claims.user_id)
        raise _unauthorized("user not found")

    request.state.user = user
    request.state.user_id = user.id
