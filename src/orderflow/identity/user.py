"""Authenticated caller identity.

Authentication happens upstream; OrderFlow trusts whatever user it is handed.
"""

from dataclasses import dataclass, field
from enum import Enum


class Role(Enum):
    CUSTOMER = "CUSTOMER"
    FLORIST = "FLORIST"
    ADMIN = "ADMIN"


@dataclass(frozen=True)
class User:
    id: str
    email: str | None = None
    username: str | None = None
    roles: frozenset[str] = field(default_factory=lambda: frozenset({Role.CUSTOMER.value}))

    def has_role(self, role: Role) -> bool:
        return role.value in self.roles

    @property
    def is_florist(self) -> bool:
        return self.has_role(Role.FLORIST) or self.has_role(Role.ADMIN)
