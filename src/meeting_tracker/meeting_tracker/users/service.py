from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.validators import require_min_length, require_non_empty
from ..core.constants import MIN_PASSWORD_LENGTH
from ..core.exceptions import AuthenticationError, NotFoundError, ValidationError
from .model import Admin
from .repository import AdminRepository
from .tokens import TokenService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LoginResult:
    token: str
    admin: Admin

    def to_dict(self) -> dict:
        user = self.admin.to_dict()
        user.pop("created_at", None)
        return {"token": self.token, "user": user}


def _password_matches(password_hash: str, password: str) -> bool:
    try:
        return check_password_hash(password_hash, password)
    except ValueError:
        # e.g. placeholder or corrupted hashes
        return False


class AuthService:
    """Use case: exchange credentials for a bearer token."""

    def __init__(self, admins: AdminRepository, tokens: TokenService):
        self._admins = admins
        self._tokens = tokens

    def login(self, username: Any, password: Any) -> LoginResult:
        if not username or not password:
            raise ValidationError("Username and password are required")

        admin = self._admins.get_by_username(str(username))
        if not admin or not _password_matches(admin.password_hash, str(password)):
            logger.info("Failed login for %r", username)
            raise AuthenticationError("Invalid username or password")

        return LoginResult(token=self._tokens.issue(admin), admin=admin)


class ProfileService:
    """Use case: admin self-service."""

    def __init__(self, admins: AdminRepository):
        self._admins = admins

    def get_profile(self, admin_id: int) -> Admin:
        admin = self._admins.get_by_id(admin_id)
        if not admin:
            raise NotFoundError("User not found")
        return admin

    def update_name(self, admin_id: int, name: Any) -> None:
        name = require_non_empty(name, "name")
        if not self._admins.update_name(admin_id, name=name):
            raise NotFoundError("User not found")

    def change_password(self, admin_id: int, *, current_password: Any, new_password: Any) -> None:
        if not current_password or not new_password:
            raise ValidationError("Current and new password are required")
        require_min_length(str(new_password), "New password", MIN_PASSWORD_LENGTH)

        admin = self.get_profile(admin_id)
        if not _password_matches(admin.password_hash, str(current_password)):
            raise ValidationError("Current password is incorrect")

        self._admins.update_password_hash(admin_id, password_hash=generate_password_hash(str(new_password)))
        logger.info("Password changed for admin %s", admin_id)
