"""Authenticated principals.

A request is made either by the platform administrator, who has no row in
the users table, or by a registered user. Code that reads per-user
collections branches on the variant instead of comparing ids against a
reserved value.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Union

if TYPE_CHECKING:
    from legacy_vault.models.user import User


@dataclass(frozen=True)
class AdministratorPrincipal:
    email: str
    full_name: str = "System Administrator"

    @property
    def identity(self) -> str:
        return self.email


@dataclass(frozen=True)
class RegisteredUser:
    user: "User"

    @property
    def user_id(self) -> int:
        return self.user.id


Principal = Union[AdministratorPrincipal, RegisteredUser]


def owner_id(principal: Principal) -> int | None:
    """User id whose collections the principal may read; None for the administrator."""
    if isinstance(principal, AdministratorPrincipal):
        return None
    return principal.user_id
