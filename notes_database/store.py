"""
Query helpers for accounts and notes.

Each store wraps a single SQLAlchemy session; handlers get one per request.
"""
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from notes_database.models import Note, User


class DuplicateAccountError(Exception):
    """Raised when the unique constraint on username or email rejects an insert."""


# PUBLIC_INTERFACE
class AccountStore:
    def __init__(self, session: Session):
        self.session = session

    def get(self, user_id: int) -> Optional[User]:
        return self.session.get(User, user_id)

    def get_by_email(self, email: str) -> Optional[User]:
        return self.session.execute(select(User).where(User.email == email)).scalars().first()

    def get_by_username(self, username: str) -> Optional[User]:
        return self.session.execute(select(User).where(User.username == username)).scalars().first()

    def create(self, username: str, email: str, password_hash: str) -> User:
        """
        Inserts a new account.

        The unique constraints are the final word on duplicates: a concurrent
        registration that slipped past the lookups surfaces here as
        DuplicateAccountError.
        """
        if not password_hash:
            raise ValueError("password_hash must not be empty")
        user = User(username=username, email=email, password_hash=password_hash)
        self.session.add(user)
        try:
            self.session.commit()
        except IntegrityError as exc:
            self.session.rollback()
            raise DuplicateAccountError("username or email already registered") from exc
        self.session.refresh(user)
        return user


# PUBLIC_INTERFACE
class NoteStore:
    def __init__(self, session: Session):
        self.session = session

    def create(self, user_id: int, title: str, content: str = "") -> Note:
        note = Note(title=title, content=content or "", user_id=user_id)
        self.session.add(note)
        self.session.commit()
        self.session.refresh(note)
        return note

    def list_for_user(self, user_id: int) -> List[Note]:
        return list(self.session.execute(select(Note).where(Note.user_id == user_id)).scalars())

    def get_owned(self, note_id: int, user_id: int) -> Optional[Note]:
        """Returns the note only when it belongs to user_id."""
        stmt = select(Note).where(Note.id == note_id, Note.user_id == user_id)
        return self.session.execute(stmt).scalars().first()

    def update(self, note: Note, title: str, content: str = "") -> Note:
        note.title = title
        note.content = content or ""
        self.session.commit()
        self.session.refresh(note)
        return note

    def delete(self, note: Note) -> None:
        self.session.delete(note)
        self.session.commit()
