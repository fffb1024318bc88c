import pytest

from notes_database import AccountStore, DuplicateAccountError, NoteStore


@pytest.fixture
def accounts(db_session):
    return AccountStore(db_session)


@pytest.fixture
def notes(db_session):
    return NoteStore(db_session)


def test_account_create_and_lookup(accounts, hasher):
    user = accounts.create("alice", "alice@example.com", hasher.hash("alicepassword"))
    assert user.id is not None
    assert user.created_at is not None
    assert accounts.get(user.id) is user
    assert accounts.get_by_email("alice@example.com").id == user.id
    assert accounts.get_by_username("alice").id == user.id
    assert accounts.get_by_email("nobody@example.com") is None
    assert accounts.get(999) is None


def test_unique_constraint_is_the_arbiter(accounts, hasher):
    accounts.create("alice", "alice@example.com", hasher.hash("pw123456"))
    with pytest.raises(DuplicateAccountError):
        accounts.create("alice2", "alice@example.com", hasher.hash("pw123456"))
    with pytest.raises(DuplicateAccountError):
        accounts.create("alice", "other@example.com", hasher.hash("pw123456"))
    # Session is usable after the rollback
    assert accounts.create("carol", "carol@example.com", hasher.hash("pw123456")).id


def test_account_requires_hash(accounts):
    with pytest.raises(ValueError):
        accounts.create("alice", "alice@example.com", "")


def test_note_ownership(accounts, notes, hasher):
    alice = accounts.create("alice", "alice@example.com", hasher.hash("pw123456"))
    bob = accounts.create("bob", "bob@example.com", hasher.hash("pw123456"))

    note = notes.create(alice.id, "T", "C")
    assert note.user_id == alice.id
    assert notes.get_owned(note.id, alice.id) is note
    assert notes.get_owned(note.id, bob.id) is None
    assert notes.list_for_user(bob.id) == []
    assert [n.id for n in notes.list_for_user(alice.id)] == [note.id]


def test_note_update_and_delete(accounts, notes, hasher):
    alice = accounts.create("alice", "alice@example.com", hasher.hash("pw123456"))
    note = notes.create(alice.id, "T", None)
    assert note.content == ""

    updated = notes.update(note, "T2", "C2")
    assert (updated.title, updated.content, updated.user_id) == ("T2", "C2", alice.id)

    notes.delete(updated)
    assert notes.get_owned(note.id, alice.id) is None
