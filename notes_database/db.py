import logging
import os
from typing import Optional
from urllib.parse import quote_plus

from dotenv import load_dotenv
from sqlalchemy import create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from notes_database.models import Base

logger = logging.getLogger(__name__)


# PUBLIC_INTERFACE
def get_database_url():
    """
    Retrieves the database URL from the environment.

    DATABASE_URL wins when set. Otherwise a PostgreSQL URL is assembled from
    DB_HOST, DB_PORT, DB_USER, DB_PASSWORD, DB_NAME and DB_SSLMODE.
    """
    load_dotenv()
    db_url = os.getenv("DATABASE_URL")
    if db_url:
        return db_url

    host = os.getenv("DB_HOST")
    name = os.getenv("DB_NAME")
    if not host or not name:
        raise ValueError("Set DATABASE_URL, or DB_HOST and DB_NAME.")
    port = os.getenv("DB_PORT", "5432")
    user = quote_plus(os.getenv("DB_USER", ""))
    password = quote_plus(os.getenv("DB_PASSWORD", ""))
    sslmode = os.getenv("DB_SSLMODE", "disable")
    credentials = f"{user}:{password}@" if user else ""
    return f"postgresql+psycopg2://{credentials}{host}:{port}/{name}?sslmode={sslmode}"


# PUBLIC_INTERFACE
class Database:
    """
    Owns the SQLAlchemy engine and session factory for one store.

    Constructed explicitly by the application factory (or a test) and handed
    to whatever needs a session; nothing in the package holds a global engine.
    """

    def __init__(self, url: str, echo: bool = False):
        self.url = url
        kwargs = {"future": True, "echo": echo}
        parsed = make_url(url)
        if parsed.get_backend_name() == "sqlite":
            kwargs["connect_args"] = {"check_same_thread": False}
            if parsed.database in (None, "", ":memory:"):
                kwargs["poolclass"] = StaticPool
        else:
            kwargs["pool_pre_ping"] = True
        self.engine = create_engine(url, **kwargs)
        self.SessionLocal = sessionmaker(
            autocommit=False, autoflush=False, expire_on_commit=False, bind=self.engine
        )

    def create_all(self) -> None:
        """Creates every table that does not exist yet."""
        Base.metadata.create_all(bind=self.engine)
        logger.info("Database schema ready (%s)", self.engine.url.render_as_string(hide_password=True))

    def drop_all(self) -> None:
        Base.metadata.drop_all(bind=self.engine)

    def session(self) -> Session:
        return self.SessionLocal()

    def dispose(self) -> None:
        self.engine.dispose()


def create_database(url: Optional[str] = None, echo: bool = False) -> Database:
    return Database(url or get_database_url(), echo=echo)
