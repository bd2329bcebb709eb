"""
Auth State Domain Model - Immutable snapshot of the global auth state.
"""

from dataclasses import dataclass, replace
from typing import Dict, Any, Optional
from enum import Enum

from mro_auth.domain.user import UserRecord


class BootPhase(Enum):
    """Bootstrap state machine phases."""
    IDLE = "idle"
    BOOTING = "booting"
    RESOLVED_LOCAL = "resolved_local"
    RESOLVED_FEDERATED = "resolved_federated"
    UNAUTHENTICATED = "unauthenticated"

    @property
    def is_resolved(self) -> bool:
        return self not in (BootPhase.IDLE, BootPhase.BOOTING)


@dataclass(frozen=True)
class AuthState:
    """
    Snapshot of the global auth state.

    is_booting, is_authenticated and auth_source are projections of phase.
    version increases on every commit to the owning store.
    """
    phase: BootPhase = BootPhase.IDLE
    user: Optional[UserRecord] = None
    token: Optional[str] = None
    version: int = 0

    @property
    def is_booting(self) -> bool:
        return not self.phase.is_resolved

    @property
    def is_authenticated(self) -> bool:
        return self.phase in (BootPhase.RESOLVED_LOCAL, BootPhase.RESOLVED_FEDERATED)

    @property
    def auth_source(self) -> Optional[str]:
        """'local', 'federated' or None when not authenticated."""
        if self.phase == BootPhase.RESOLVED_LOCAL:
            return "local"
        if self.phase == BootPhase.RESOLVED_FEDERATED:
            return "federated"
        return None

    def bump(self, **changes) -> "AuthState":
        """Copy with changes applied and the version incremented."""
        return replace(self, version=self.version + 1, **changes)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to dict (token omitted)."""
        return {
            "phase": self.phase.value,
            "user": self.user.to_dict() if self.user else None,
            "auth_source": self.auth_source,
            "is_booting": self.is_booting,
            "is_authenticated": self.is_authenticated,
            "version": self.version,
        }
