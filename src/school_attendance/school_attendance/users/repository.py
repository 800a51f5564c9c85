from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import Role
from .model import User


class UserRepository(Protocol):
    """Repository interface for User.

    Services depend on this interface, not on a concrete database.
    """

    def get_by_id(self, user_id: int) -> Optional[User]:
        raise NotImplementedError

    def get_by_username(self, username: str) -> Optional[User]:
        raise NotImplementedError

    def list_all(self) -> Sequence[User]:
        raise NotImplementedError

    def create_user(
        self,
        *,
        username: str,
        password_hash: str,
        name: str,
        role: Role,
        nip: Optional[str],
        class_id: Optional[int],
    ) -> int:
        raise NotImplementedError

    def update_user(
        self,
        *,
        user_id: int,
        username: str,
        name: str,
        role: Role,
        nip: Optional[str],
        password_hash: Optional[str] = None,
    ) -> bool:
        """Update profile fields; the password hash only when one is given."""

        raise NotImplementedError

    def delete_by_id(self, user_id: int) -> bool:
        raise NotImplementedError

    def count(self) -> int:
        raise NotImplementedError
