import pytest


def test_hash_is_not_plaintext(hasher):
    hashed = hasher.hash("password123")
    assert hashed != "password123"
    assert hasher.is_hash(hashed)
    assert hasher.verify("password123", hashed)
    assert not hasher.verify("wrongpassword", hashed)


def test_same_password_salted_differently(hasher):
    first = hasher.hash("shared-secret")
    second = hasher.hash("shared-secret")
    assert first != second
    assert hasher.verify("shared-secret", first)
    assert hasher.verify("shared-secret", second)


def test_verify_rejects_non_hash_values(hasher):
    assert not hasher.verify("password123", "password123")
    assert not hasher.verify("password123", "")
    assert not hasher.verify("", hasher.hash("password123"))


def test_is_hash(hasher):
    assert not hasher.is_hash(None)
    assert not hasher.is_hash("plain text")


def test_empty_password_refused(hasher):
    with pytest.raises(ValueError):
        hasher.hash("")
