import pytest

from hometail.core import identity as identity_module
from hometail.core.identity import AuthenticationError, Identity, get_optional_identity
from hometail.models.user import UserRole


@pytest.fixture
def fake_tokens(monkeypatch):
    tokens = {"good-alice": {"uid": "uid-alice"}, "good-admin": {"uid": "uid-admin"}, "stranger": {"uid": "nobody"}}
    monkeypatch.setattr(identity_module, "verify_firebase_token", lambda token: tokens.get(token))
    return tokens


def test_bearer_token_resolves_to_identity(db, users, fake_tokens):
    ident = identity_module._resolve("Bearer good-alice", db)
    assert ident == Identity(user_id=users["alice"].user_id, role=UserRole.USER)
    assert not ident.is_admin


def test_admin_role_is_carried(db, users, fake_tokens):
    assert identity_module._resolve("Bearer good-admin", db).is_admin


@pytest.mark.parametrize(
    "header, code",
    [
        (None, "AUTH_401_1"),
        ("Token good-alice", "AUTH_401_2"),
        ("Bearer expired", "AUTH_401_3"),
        ("Bearer stranger", "AUTH_401_4"),
    ],
)
def test_resolution_failures(db, users, fake_tokens, header, code):
    with pytest.raises(AuthenticationError) as exc:
        identity_module._resolve(header, db)
    assert exc.value.code == code


def test_optional_identity_swallows_bad_tokens(db, users, fake_tokens):
    assert get_optional_identity(None, authorization="Bearer expired", db=db) is None
    assert get_optional_identity(None, authorization=None, db=db) is None
    assert get_optional_identity(None, authorization="Bearer good-alice", db=db).user_id == users["alice"].user_id
