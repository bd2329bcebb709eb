"""
SDK - Auth state, credential store, bootstrap orchestration and logout.
"""

from mro_auth.sdk.state_store import AuthStateStore, StateWriter, AvatarPatch
from mro_auth.sdk.credential_store import CredentialStore
from mro_auth.sdk.orchestrator import BootstrapOrchestrator
from mro_auth.sdk.logout import LogoutFlow
from mro_auth.sdk.guard import RouteGuard, GuardDecision
from mro_auth.sdk.client import AuthClient

__all__ = [
    "AuthStateStore",
    "StateWriter",
    "AvatarPatch",
    "CredentialStore",
    "BootstrapOrchestrator",
    "LogoutFlow",
    "RouteGuard",
    "GuardDecision",
    "AuthClient",
]
