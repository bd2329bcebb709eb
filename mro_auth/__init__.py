"""
MRO Auth - Session bootstrap & dual-credential reconciliation

Decides on every app load and navigation whether a persisted local
session token or a completed identity-provider redirect is authoritative,
and publishes the result as a single observable AuthState.

Usage:
    from mro_auth import AuthClient
    from mro_auth.adapters import HTTPSessionExchangeAdapter, RedisStorageAdapter

    client = AuthClient(
        identity=provider,
        exchange=HTTPSessionExchangeAdapter(api_url="https://mro.example.com/api"),
        storage=RedisStorageAdapter(),
        navigator=router,
    )

    # On every route change
    state = await client.on_navigation("/inventory")
    if not state.is_authenticated:
        ...
"""

__version__ = "0.1.0"

from mro_auth.config import BootstrapConfig
from mro_auth.sdk.client import AuthClient
from mro_auth.domain.user import UserRecord, AuthSource
from mro_auth.domain.session import LocalSession
from mro_auth.domain.state import AuthState, BootPhase

__all__ = [
    "AuthClient",
    "BootstrapConfig",
    "UserRecord",
    "AuthSource",
    "LocalSession",
    "AuthState",
    "BootPhase",
]
