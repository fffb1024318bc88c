"""
Database initialization script.

Run this script to create all required tables in the configured database.
"""
import logging

from notes_database.db import create_database

logger = logging.getLogger(__name__)


# PUBLIC_INTERFACE
def init_db(url=None):
    """Initializes the database by creating all tables if they do not exist."""
    database = create_database(url)
    try:
        database.create_all()
    finally:
        database.dispose()


def main():
    logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(name)s: %(message)s")
    init_db()
    logger.info("Database tables created successfully.")


if __name__ == "__main__":
    main()
