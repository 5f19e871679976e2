import pytest
from fastapi.security import HTTPAuthorizationCredentials

from conftest import run
from newsdesk.core.deps import get_identity
from newsdesk.core.exceptions import Unauthorized
from newsdesk.core.identity import ANONYMOUS, Identity, require
from newsdesk.core.security import create_access_token


def _bearer(token: str) -> HTTPAuthorizationCredentials:
    return HTTPAuthorizationCredentials(scheme="Bearer", credentials=token)


def test_require_rejects_zero_identity():
    with pytest.raises(Unauthorized) as exc:
        require(Identity(user_id=0))
    assert exc.value.status_code == 401


def test_require_returns_verified_identity():
    identity = Identity(user_id=42, email="a@b.c")
    assert require(identity) is identity


def test_missing_credentials_degrade_to_anonymous():
    assert run(get_identity(None)) == ANONYMOUS


def test_invalid_token_degrades_to_anonymous():
    assert run(get_identity(_bearer("not-a-jwt"))) == ANONYMOUS


def test_non_numeric_subject_degrades_to_anonymous():
    token, _ = create_access_token(data={"sub": "someone"})
    assert run(get_identity(_bearer(token))) == ANONYMOUS


def test_zero_subject_degrades_to_anonymous():
    token, _ = create_access_token(data={"sub": 0})
    assert run(get_identity(_bearer(token))).is_anonymous


def test_valid_token_yields_identity():
    token, _ = create_access_token(data={"sub": 5, "email": "editor@mail.com"})
    assert run(get_identity(_bearer(token))) == Identity(user_id=5, email="editor@mail.com")
