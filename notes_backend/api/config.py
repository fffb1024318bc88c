import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

from notes_database.db import get_database_url

VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


def _env_bool(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


# PUBLIC_INTERFACE
class Settings(BaseModel):
    """
    Process configuration, read once at startup.

    jwt_secret has no default: without it every token operation fails.
    """

    jwt_secret: Optional[str] = None
    jwt_algorithm: str = "HS256"
    jwt_ttl_hours: int = Field(default=24, ge=1)
    database_url: Optional[str] = None
    bcrypt_rounds: int = Field(default=12, ge=4, le=31)
    api_prefix: str = "/api"
    host: str = "0.0.0.0"
    port: int = Field(default=8080, ge=1, le=65535)
    log_level: str = "INFO"
    sql_echo: bool = False

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        upper = v.upper()
        if upper not in VALID_LOG_LEVELS:
            raise ValueError(f"Invalid log level '{v}'. Must be one of: {sorted(VALID_LOG_LEVELS)}")
        return upper

    @field_validator("jwt_algorithm")
    @classmethod
    def validate_algorithm(cls, v: str) -> str:
        if not v.upper().startswith("HS"):
            raise ValueError("Only symmetric HMAC algorithms (HS256/HS384/HS512) are supported")
        return v.upper()

    @field_validator("api_prefix")
    @classmethod
    def normalize_prefix(cls, v: str) -> str:
        v = v.strip().rstrip("/")
        if v and not v.startswith("/"):
            v = "/" + v
        return v

    @classmethod
    def from_env(cls) -> "Settings":
        """Loads .env (if present) and builds settings from environment variables."""
        load_dotenv()
        values = {
            "jwt_secret": os.getenv("JWT_SECRET") or None,
            "jwt_algorithm": os.getenv("JWT_ALGORITHM", "HS256"),
            "jwt_ttl_hours": os.getenv("JWT_TTL_HOURS", "24"),
            "bcrypt_rounds": os.getenv("BCRYPT_ROUNDS", "12"),
            "api_prefix": os.getenv("API_PREFIX", "/api"),
            "host": os.getenv("HOST", "0.0.0.0"),
            "port": os.getenv("PORT") or "8080",
            "log_level": os.getenv("LOG_LEVEL", "INFO"),
            "sql_echo": _env_bool("SQL_ECHO"),
        }
        return cls(**values)

    def resolved_database_url(self) -> str:
        return self.database_url or get_database_url()
