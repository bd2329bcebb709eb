"""
Domain Models - Pure business entities.

No infrastructure dependencies. Domain logic only.
"""

from mro_auth.domain.user import (
    AuthSource,
    Role,
    UserRecord,
    LocalUser,
    FederatedUser,
    Profile,
)
from mro_auth.domain.session import LocalSession
from mro_auth.domain.state import AuthState, BootPhase

__all__ = [
    "AuthSource",
    "Role",
    "UserRecord",
    "LocalUser",
    "FederatedUser",
    "Profile",
    "LocalSession",
    "AuthState",
    "BootPhase",
]
