import base64
import json
from datetime import datetime, timedelta, timezone
from types import SimpleNamespace

import pytest
from jose import jwt

from notes_backend.security import (
    ExpiredTokenError,
    MalformedTokenError,
    MissingSecretError,
    SignatureMismatchError,
    TokenError,
    TokenService,
    UnexpectedAlgorithmError,
)

SECRET = "unit-test-secret"
ALICE = SimpleNamespace(id=7, username="alice")


def _b64(data: dict) -> str:
    raw = json.dumps(data, separators=(",", ":")).encode()
    return base64.urlsafe_b64encode(raw).rstrip(b"=").decode()


def test_issue_and_validate():
    service = TokenService(SECRET)
    claims = service.validate(service.issue(ALICE))
    assert claims.user_id == 7
    assert claims.subject == "alice"
    assert claims.expires_at - claims.issued_at == timedelta(hours=24)


def test_issued_claims_on_the_wire():
    fixed = datetime(2030, 1, 1, 12, 0, tzinfo=timezone.utc)
    token = TokenService(SECRET, clock=lambda: fixed).issue(ALICE)
    payload = jwt.get_unverified_claims(token)
    assert jwt.get_unverified_header(token)["alg"] == "HS256"
    assert payload["user_id"] == 7
    assert payload["sub"] == "alice"
    assert payload["iat"] == int(fixed.timestamp())
    assert payload["exp"] == int((fixed + timedelta(hours=24)).timestamp())


def test_expired_token():
    past = TokenService(SECRET, clock=lambda: datetime.now(timezone.utc) - timedelta(hours=25))
    token = past.issue(ALICE)
    with pytest.raises(ExpiredTokenError):
        TokenService(SECRET).validate(token)


def test_wrong_secret():
    token = TokenService("other-secret").issue(ALICE)
    with pytest.raises(SignatureMismatchError):
        TokenService(SECRET).validate(token)


def test_tampered_payload():
    token = TokenService(SECRET).issue(ALICE)
    header, _, signature = token.split(".")
    forged = _b64({"user_id": 1, "sub": "admin", "exp": 9999999999})
    with pytest.raises(SignatureMismatchError):
        TokenService(SECRET).validate(".".join([header, forged, signature]))


def test_none_algorithm_rejected():
    token = ".".join([
        _b64({"alg": "none", "typ": "JWT"}),
        _b64({"user_id": 7, "sub": "alice", "exp": 9999999999}),
        "",
    ])
    with pytest.raises(UnexpectedAlgorithmError):
        TokenService(SECRET).validate(token)


def test_other_hmac_algorithm_rejected():
    exp = datetime.now(timezone.utc) + timedelta(hours=1)
    token = jwt.encode({"user_id": 7, "sub": "alice", "exp": exp}, SECRET, algorithm="HS512")
    with pytest.raises(UnexpectedAlgorithmError):
        TokenService(SECRET).validate(token)


@pytest.mark.parametrize("token", ["", "garbage", "a.b", "!!!.???.***"])
def test_malformed_token(token):
    with pytest.raises(MalformedTokenError):
        TokenService(SECRET).validate(token)


def test_missing_user_id_claim():
    exp = datetime.now(timezone.utc) + timedelta(hours=1)
    token = jwt.encode({"sub": "alice", "exp": exp}, SECRET, algorithm="HS256")
    with pytest.raises(MalformedTokenError):
        TokenService(SECRET).validate(token)


@pytest.mark.parametrize("secret", [None, ""])
def test_missing_secret(secret):
    service = TokenService(secret)
    with pytest.raises(MissingSecretError):
        service.issue(ALICE)
    with pytest.raises(MissingSecretError):
        service.validate("anything")


def test_errors_share_a_base_class():
    for cls in (ExpiredTokenError, MalformedTokenError, MissingSecretError,
                SignatureMismatchError, UnexpectedAlgorithmError):
        assert issubclass(cls, TokenError)
        assert str(cls())
