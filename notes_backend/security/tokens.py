"""
Signed bearer tokens (JWT) for authenticated requests.

A token carries the account id as a ``user_id`` claim, the username as the
subject, and issued-at / expiry timestamps. Exactly one symmetric algorithm
is accepted, taken from configuration and compared directly against the
token header.
"""
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

from jose import ExpiredSignatureError, JWTError, jwt
from jose.exceptions import JWTClaimsError

DEFAULT_ALGORITHM = "HS256"
DEFAULT_TTL = timedelta(hours=24)


class TokenError(Exception):
    """Base class for every reason a token cannot be issued or accepted."""

    reason = "invalid token"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.reason)


class MissingSecretError(TokenError):
    reason = "JWT_SECRET is not set"


class MalformedTokenError(TokenError):
    reason = "malformed token"


class SignatureMismatchError(TokenError):
    reason = "signature verification failed"


class UnexpectedAlgorithmError(TokenError):
    reason = "unexpected signing method"


class ExpiredTokenError(TokenError):
    reason = "token has expired"


@dataclass(frozen=True)
class TokenClaims:
    user_id: int
    subject: str
    issued_at: datetime
    expires_at: datetime


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


# PUBLIC_INTERFACE
class TokenService:
    def __init__(
        self,
        secret: Optional[str],
        algorithm: str = DEFAULT_ALGORITHM,
        ttl: timedelta = DEFAULT_TTL,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self.secret = secret
        self.algorithm = algorithm
        self.ttl = ttl
        self.clock = clock

    def _require_secret(self) -> str:
        if not self.secret:
            raise MissingSecretError()
        return self.secret

    def issue(self, user) -> str:
        """Generates a signed token for ``user`` (anything with ``id`` and ``username``)."""
        secret = self._require_secret()
        now = self.clock()
        claims = {
            "user_id": user.id,
            "sub": user.username,
            "iat": now,
            "exp": now + self.ttl,
        }
        return jwt.encode(claims, secret, algorithm=self.algorithm)

    def validate(self, token: str) -> TokenClaims:
        """Verifies ``token`` and returns its claims, or raises a TokenError subclass."""
        secret = self._require_secret()
        if not token:
            raise MalformedTokenError("empty token")

        try:
            header = jwt.get_unverified_header(token)
        except JWTError as exc:
            raise MalformedTokenError() from exc
        if header.get("alg") != self.algorithm:
            raise UnexpectedAlgorithmError(f"unexpected signing method: {header.get('alg')}")

        try:
            payload = jwt.decode(token, secret, algorithms=[self.algorithm])
        except ExpiredSignatureError as exc:
            raise ExpiredTokenError() from exc
        except JWTClaimsError as exc:
            raise MalformedTokenError(str(exc)) from exc
        except JWTError as exc:
            raise SignatureMismatchError() from exc

        user_id = payload.get("user_id")
        if not isinstance(user_id, int) or isinstance(user_id, bool):
            raise MalformedTokenError("token carries no user id")
        if "exp" not in payload:
            raise MalformedTokenError("token carries no expiry")
        return TokenClaims(
            user_id=user_id,
            subject=payload.get("sub", ""),
            issued_at=datetime.fromtimestamp(payload.get("iat", 0), tz=timezone.utc),
            expires_at=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
        )
