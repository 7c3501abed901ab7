"""Política de roles y capacidades del llamante."""

from dataclasses import dataclass
from enum import Enum


class Role(str, Enum):
    """Roles de usuario."""

    MEMBER = "MEMBER"
    EMPLOYEE = "EMPLOYEE"
    ADMIN = "ADMIN"


class Capability(str, Enum):
    """Acciones protegidas por rol."""

    RESERVE = "RESERVE"
    VIEW_ALL_RESERVATIONS = "VIEW_ALL_RESERVATIONS"
    MANAGE_RESERVATIONS = "MANAGE_RESERVATIONS"
    OVERRIDE_STATUS = "OVERRIDE_STATUS"


_STAFF_CAPABILITIES = frozenset(Capability)

ROLE_CAPABILITIES: dict[Role, frozenset[Capability]] = {
    Role.MEMBER: frozenset({Capability.RESERVE}),
    Role.EMPLOYEE: _STAFF_CAPABILITIES,
    Role.ADMIN: _STAFF_CAPABILITIES,
}


def has_capability(role: Role | None, capability: Capability) -> bool:
    """Única fuente de verdad para los chequeos de rol."""
    if role is None:
        return False
    return capability in ROLE_CAPABILITIES.get(role, frozenset())


@dataclass(frozen=True)
class CallerIdentity:
    """Identidad del llamante provista por el proveedor de sesión."""

    user_id: str
    role: Role

    @property
    def is_staff(self) -> bool:
        return has_capability(self.role, Capability.MANAGE_RESERVATIONS)

    def can(self, capability: Capability) -> bool:
        return has_capability(self.role, capability)

    def owns_or_manages(self, owner_id: str) -> bool:
        """El llamante es dueño del recurso o pertenece al staff."""
        return self.is_staff or self.user_id == owner_id
