from __future__ import annotations

import jwt
import pytest
from werkzeug.security import check_password_hash, generate_password_hash

from src.meeting_tracker.meeting_tracker.core.enums import Role
from src.meeting_tracker.meeting_tracker.core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    NotFoundError,
    ValidationError,
)
from src.meeting_tracker.meeting_tracker.database.bootstrap import ensure_default_admin
from src.meeting_tracker.meeting_tracker.users.model import Admin
from src.meeting_tracker.meeting_tracker.users.service import AuthService, ProfileService
from src.meeting_tracker.meeting_tracker.users.sql_admin_repository import SqlAdminRepository
from src.meeting_tracker.meeting_tracker.users.tokens import TokenService

SECRET = "unit-test-signing-key-0123456789abcdef"


class FakeAdminsRepo:
    def __init__(self, admins):
        self._by_id = {a.admin_id: a for a in admins}

    def get_by_id(self, admin_id):
        return self._by_id.get(int(admin_id))

    def get_by_username(self, username):
        return next((a for a in self._by_id.values() if a.username == username), None)

    def update_name(self, admin_id, *, name):
        a = self._by_id.get(admin_id)
        if not a:
            return False
        self._by_id[admin_id] = Admin(a.admin_id, a.username, a.password_hash, name, a.role, a.created_at)
        return True

    def update_password_hash(self, admin_id, *, password_hash):
        a = self._by_id.get(admin_id)
        if not a:
            return False
        self._by_id[admin_id] = Admin(a.admin_id, a.username, password_hash, a.name, a.role, a.created_at)
        return True


def _admin(password="secret1"):
    return Admin(
        admin_id=3,
        username="leader",
        password_hash=generate_password_hash(password),
        name="Group Leader",
        role=Role.ADMIN,
    )


def test_login_issues_token_carrying_identity():
    tokens = TokenService(SECRET)
    svc = AuthService(FakeAdminsRepo([_admin()]), tokens)

    result = svc.login("leader", "secret1")
    claims = tokens.verify(result.token)

    assert (claims.admin_id, claims.username, claims.role) == (3, "leader", Role.ADMIN)
    assert result.to_dict()["user"] == {"id": 3, "username": "leader", "name": "Group Leader", "role": "admin"}


@pytest.mark.parametrize("username,password", [("leader", "wrong"), ("nobody", "secret1")])
def test_login_rejects_bad_credentials(username, password):
    svc = AuthService(FakeAdminsRepo([_admin()]), TokenService(SECRET))

    with pytest.raises(AuthenticationError):
        svc.login(username, password)


def test_login_requires_both_fields():
    svc = AuthService(FakeAdminsRepo([_admin()]), TokenService(SECRET))

    with pytest.raises(ValidationError):
        svc.login("leader", "")


def test_login_tolerates_unusable_stored_hash():
    broken = Admin(admin_id=4, username="old", password_hash="not-a-hash", name="Old", role=Role.ADMIN)
    svc = AuthService(FakeAdminsRepo([broken]), TokenService(SECRET))

    with pytest.raises(AuthenticationError):
        svc.login("old", "anything")


def test_expired_and_forged_tokens_are_rejected():
    admin = _admin()

    expired = TokenService(SECRET, expires_hours=-1).issue(admin)
    with pytest.raises(AuthorizationError, match="expired"):
        TokenService(SECRET).verify(expired)

    forged = TokenService("another-secret-that-is-long-enough").issue(admin)
    with pytest.raises(AuthorizationError, match="invalid"):
        TokenService(SECRET).verify(forged)

    missing_claims = jwt.encode({"id": 1}, SECRET, algorithm="HS256")
    with pytest.raises(AuthorizationError):
        TokenService(SECRET).verify(missing_claims)


def test_empty_secret_is_refused():
    with pytest.raises(ValueError):
        TokenService("")


def test_change_password():
    repo = FakeAdminsRepo([_admin()])
    svc = ProfileService(repo)

    with pytest.raises(ValidationError, match="incorrect"):
        svc.change_password(3, current_password="nope", new_password="longenough")
    with pytest.raises(ValidationError, match="at least 6"):
        svc.change_password(3, current_password="secret1", new_password="short")

    svc.change_password(3, current_password="secret1", new_password="longenough")

    assert check_password_hash(repo.get_by_id(3).password_hash, "longenough")


def test_profile_updates():
    svc = ProfileService(FakeAdminsRepo([_admin()]))

    svc.update_name(3, "  New Name ")
    assert svc.get_profile(3).name == "New Name"

    with pytest.raises(ValidationError):
        svc.update_name(3, "")
    with pytest.raises(NotFoundError):
        svc.get_profile(99)


def test_sql_repository_round_trip(conn, profile):
    ensure_default_admin(conn)
    repo = SqlAdminRepository(conn)

    admin = repo.get_by_username("admin")
    assert admin.role == Role.SUPER_ADMIN
    assert repo.update_name(admin.admin_id, name="Root") is True
    assert repo.get_by_id(admin.admin_id).name == "Root"
    assert repo.update_name(999, name="Ghost") is False
    assert repo.get_by_username("ghost") is None
