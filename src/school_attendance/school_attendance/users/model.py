from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Domain entity: a user account (admin, guru, pegawai).

    Note: plain data object, no DB access code.
    """

    user_id: int
    username: str
    password_hash: str
    name: str
    role: Role
    nip: Optional[str] = None
    class_id: Optional[int] = None


@dataclass(frozen=True)
class UserView:
    """Public shape of a user (never carries the password hash)."""

    user_id: int
    username: str
    name: str
    role: Role
    nip: Optional[str] = None
    class_id: Optional[int] = None

    @classmethod
    def of(cls, user: User) -> "UserView":
        return cls(
            user_id=user.user_id,
            username=user.username,
            name=user.name,
            role=user.role,
            nip=user.nip,
            class_id=user.class_id,
        )
