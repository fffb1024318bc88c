from notes_backend.security.passwords import PasswordHasher
from notes_backend.security.tokens import (
    ExpiredTokenError,
    MalformedTokenError,
    MissingSecretError,
    SignatureMismatchError,
    TokenClaims,
    TokenError,
    TokenService,
    UnexpectedAlgorithmError,
)

__all__ = [
    "ExpiredTokenError",
    "MalformedTokenError",
    "MissingSecretError",
    "PasswordHasher",
    "SignatureMismatchError",
    "TokenClaims",
    "TokenError",
    "TokenService",
    "UnexpectedAlgorithmError",
]
