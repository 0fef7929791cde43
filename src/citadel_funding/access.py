"""
AccessGate — capability and pause checks in front of every Funding mutation.

The funding core never stores roles itself. It asks an `Authorizer`:
  - has_role(role, principal): may `principal` use capability `role`?
  - is_denied(principal): is `principal` explicitly blocked from public entrypoints?
  - paused(): is the global kill-switch active?

`GlobalAccessControl` is the mapping-backed implementation used in tests and
the demo; production wiring can pass any object with the same three methods.

Guard order is fixed: pause first, then capability. A paused system therefore
reports SystemPaused even to callers that would also fail the role check.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict, Iterable, Optional, Protocol, Set

from .core.constants import KNOWN_ROLES
from .core.exc import AccessDenied, SystemPaused
from .log import get_logger

logger = get_logger(__name__)


class Authorizer(Protocol):
    """Capability-check interface consumed by the funding core."""

    def has_role(self, role: str, principal: str) -> bool:
        ...

    def is_denied(self, principal: str) -> bool:
        ...

    def paused(self) -> bool:
        ...


# ---------------------------------------------------------------------------
# Mapping-backed registries
# ---------------------------------------------------------------------------

@dataclass
class RoleRegistry:
    """role -> set of principals, plus an explicit deny-list."""

    members: Dict[str, Set[str]] = field(default_factory=dict)
    denied: Set[str] = field(default_factory=set)
    strict_roles: bool = True

    def _check_role(self, role: str) -> None:
        if self.strict_roles and role not in KNOWN_ROLES:
            raise ValueError(f"unknown role: {role}")

    def grant_role(self, role: str, principal: str) -> None:
        self._check_role(role)
        self.members.setdefault(role, set()).add(principal)
        logger.info("RoleGranted role=%s principal=%s", role, principal)

    def revoke_role(self, role: str, principal: str) -> None:
        self._check_role(role)
        self.members.get(role, set()).discard(principal)
        logger.info("RoleRevoked role=%s principal=%s", role, principal)

    def has_role(self, role: str, principal: str) -> bool:
        return principal in self.members.get(role, ())

    def deny(self, principal: str) -> None:
        self.denied.add(principal)
        logger.info("PrincipalDenied principal=%s", principal)

    def allow(self, principal: str) -> None:
        self.denied.discard(principal)

    def is_denied(self, principal: str) -> bool:
        return principal in self.denied


@dataclass
class PauseRegistry:
    """Global kill-switch shared by every contract wired to the same registry."""

    halted: bool = False
    reason: Optional[str] = None
    time: Optional[datetime] = None

    def pause(self, reason: str = "manual") -> None:
        self.halted = True
        self.reason = reason
        self.time = datetime.now(timezone.utc)
        logger.warning("Paused reason=%s", reason)

    def unpause(self) -> None:
        self.halted = False
        self.reason = None
        self.time = None
        logger.warning("Unpaused")

    def paused(self) -> bool:
        return self.halted


class GlobalAccessControl:
    """Authorizer combining a RoleRegistry and a PauseRegistry."""

    def __init__(self,
                 roles: Optional[RoleRegistry] = None,
                 pause: Optional[PauseRegistry] = None) -> None:
        self.roles = roles if roles is not None else RoleRegistry()
        self.pause_registry = pause if pause is not None else PauseRegistry()

    @classmethod
    def with_members(cls, grants: Dict[str, Iterable[str]]) -> "GlobalAccessControl":
        """Build a registry from {role: [principal, ...]}."""
        gac = cls()
        for role, principals in grants.items():
            for p in principals:
                gac.roles.grant_role(role, p)
        return gac

    # Authorizer interface
    def has_role(self, role: str, principal: str) -> bool:
        return self.roles.has_role(role, principal)

    def is_denied(self, principal: str) -> bool:
        return self.roles.is_denied(principal)

    def paused(self) -> bool:
        return self.pause_registry.paused()

    # Convenience passthroughs
    def grant_role(self, role: str, principal: str) -> None:
        self.roles.grant_role(role, principal)

    def revoke_role(self, role: str, principal: str) -> None:
        self.roles.revoke_role(role, principal)

    def pause(self, reason: str = "manual") -> None:
        self.pause_registry.pause(reason)

    def unpause(self) -> None:
        self.pause_registry.unpause()


# ---------------------------------------------------------------------------
# Guards
# ---------------------------------------------------------------------------

def require_not_paused(gate: Authorizer) -> None:
    if gate.paused():
        raise SystemPaused()


def require_not_denied(gate: Authorizer, principal: str) -> None:
    if gate.is_denied(principal):
        raise AccessDenied(principal, reason="GAC: principal is denied")


def require_role(gate: Authorizer, role: str, principal: str) -> None:
    """Pause check, then capability check for `role`."""
    require_not_paused(gate)
    if not gate.has_role(role, principal):
        raise AccessDenied(principal, role)


def require_role_or_address(gate: Authorizer, role: str, principal: str,
                            address: Optional[str]) -> None:
    """Like require_role, but `address` (if set) is accepted without the role."""
    require_not_paused(gate)
    if address is not None and principal == address:
        return
    if not gate.has_role(role, principal):
        raise AccessDenied(principal, role, reason="GAC: invalid-caller-role-or-address")


def require_public(gate: Authorizer, principal: str) -> None:
    """Guard for public entrypoints: pause check, then deny-list."""
    require_not_paused(gate)
    require_not_denied(gate, principal)


__all__ = [
    "Authorizer",
    "RoleRegistry",
    "PauseRegistry",
    "GlobalAccessControl",
    "require_not_paused",
    "require_not_denied",
    "require_role",
    "require_role_or_address",
    "require_public",
]
