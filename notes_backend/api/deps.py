from typing import Iterator

from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.orm import Session

from notes_backend.security import PasswordHasher, TokenService
from notes_database import AccountStore, NoteStore

MAX_NOTE_ID = 2 ** 32 - 1


# DATABASE Dependency
def get_db(request: Request) -> Iterator[Session]:
    """Opens one session per request on the application's Database and always closes it."""
    db = request.app.state.database.session()
    try:
        yield db
    finally:
        db.close()


def get_accounts(db: Session = Depends(get_db)) -> AccountStore:
    return AccountStore(db)


def get_notes(db: Session = Depends(get_db)) -> NoteStore:
    return NoteStore(db)


def get_hasher(request: Request) -> PasswordHasher:
    return request.app.state.hasher


def get_token_service(request: Request) -> TokenService:
    return request.app.state.tokens


def current_user_id(request: Request) -> int:
    """Identifier attached by the access guard."""
    user_id = getattr(request.state, "user_id", None)
    if user_id is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="user is not authenticated")
    return user_id


def current_user(request: Request):
    user = getattr(request.state, "user", None)
    if user is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="user is not authenticated")
    return user


def note_id_param(id: str) -> int:
    """Parses the path id as an unsigned 32-bit integer."""
    if not (id.isascii() and id.isdigit()):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="invalid note ID")
    note_id = int(id)
    if note_id > MAX_NOTE_ID:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="invalid note ID")
    return note_id
