from notes_database.db import Database, create_database, get_database_url
from notes_database.models import Base, Note, User
from notes_database.store import AccountStore, DuplicateAccountError, NoteStore

__all__ = [
    "AccountStore",
    "Base",
    "Database",
    "DuplicateAccountError",
    "Note",
    "NoteStore",
    "User",
    "create_database",
    "get_database_url",
]
