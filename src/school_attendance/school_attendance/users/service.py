from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional, Sequence

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.validators import optional_int, optional_str, require_choice, require_min_length, require_non_empty
from ..core.constants import MIN_PASSWORD_LENGTH
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, AuthorizationError, ValidationError
from .model import UserView
from .repository import UserRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionUser:
    """What we store into the Flask session after login."""

    user_id: int
    username: str
    name: str
    role: Role
    nip: Optional[str]


class AuthService:
    """Use case: authenticate user (login)."""

    def __init__(self, users: UserRepository):
        self._users = users

    def authenticate(self, username: str, password: str) -> SessionUser:
        user = self._users.get_by_username(optional_str(username) or "")
        if not user:
            raise AuthenticationError("Username atau password salah")

        try:
            ok = check_password_hash(user.password_hash, str(password or ""))
        except ValueError:
            # e.g. placeholder hashes like 'CHANGE_ME' or corrupted values
            ok = False

        if not ok:
            raise AuthenticationError("Username atau password salah")

        return SessionUser(
            user_id=user.user_id,
            username=user.username,
            name=user.name,
            role=user.role,
            nip=user.nip,
        )


class UserService:
    """Use case: manage users (admin)."""

    def __init__(self, users: UserRepository):
        self._users = users

    def list_users(self) -> Sequence[UserView]:
        return [UserView.of(u) for u in self._users.list_all()]

    def create_user(
        self,
        *,
        username: str,
        password: str,
        name: str,
        role: Any,
        nip: Optional[str] = None,
        class_id: Optional[int] = None,
    ) -> int:
        username = require_non_empty(username, "Username")
        name = require_non_empty(name, "Nama")
        password = require_min_length(password, "Password", MIN_PASSWORD_LENGTH)
        role = require_choice(role or Role.EMPLOYEE, Role, "Peran")

        if self._users.get_by_username(username):
            raise ValidationError("Username sudah digunakan")

        user_id = self._users.create_user(
            username=username,
            password_hash=generate_password_hash(password),
            name=name,
            role=role,
            nip=optional_str(nip),
            class_id=optional_int(class_id, "Kelas"),
        )
        logger.info("User %s created (%s, role=%s)", user_id, username, role.value)
        return user_id

    def update_user(
        self,
        *,
        user_id: int,
        username: str,
        name: str,
        role: Any,
        nip: Optional[str] = None,
        password: Optional[str] = None,
    ) -> None:
        username = require_non_empty(username, "Username")
        name = require_non_empty(name, "Nama")
        role = require_choice(role, Role, "Peran")

        if not self._users.get_by_id(int(user_id)):
            raise ValidationError("Pengguna tidak ditemukan")

        other = self._users.get_by_username(username)
        if other and other.user_id != int(user_id):
            raise ValidationError("Username sudah digunakan")

        password_hash = None
        if password:
            password = require_min_length(password, "Password", MIN_PASSWORD_LENGTH)
            password_hash = generate_password_hash(password)

        if not self._users.update_user(
            user_id=int(user_id),
            username=username,
            name=name,
            role=role,
            nip=optional_str(nip),
            password_hash=password_hash,
        ):
            raise ValidationError("Gagal memperbarui pengguna")

    def delete_user(self, *, current_user_id: int, user_id: int) -> None:
        if int(current_user_id) == int(user_id):
            raise AuthorizationError("Tidak dapat menghapus akun sendiri")

        if not self._users.get_by_id(int(user_id)):
            raise ValidationError("Pengguna tidak ditemukan")

        if not self._users.delete_by_id(int(user_id)):
            raise ValidationError("Gagal menghapus pengguna")
        logger.info("User %s deleted by %s", user_id, current_user_id)
