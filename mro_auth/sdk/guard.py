"""
Route Guard - Read-only decision for protected routes.
"""

from enum import Enum
from typing import Optional

from mro_auth.config import BootstrapConfig
from mro_auth.sdk.credential_store import CredentialStore
from mro_auth.sdk.state_store import AuthStateStore


class GuardDecision(Enum):
    ALLOW = "allow"
    WAIT = "wait"          # show loading screen
    REDIRECT = "redirect"  # send to login route


class RouteGuard:
    """
    Decide whether a route may render.

    Never writes state. A pending suppression flag always redirects,
    even if a provider session still exists.
    """

    def __init__(
        self,
        store: AuthStateStore,
        credentials: CredentialStore,
        config: Optional[BootstrapConfig] = None,
    ):
        self._store = store
        self._credentials = credentials
        self._config = config or BootstrapConfig()

    @property
    def redirect_target(self) -> str:
        return self._config.login_route

    def check(self, path: str) -> GuardDecision:
        if self._config.is_public_route(path):
            return GuardDecision.ALLOW

        state = self._store.state
        if state.is_booting:
            return GuardDecision.WAIT
        if self._credentials.has_logout_flag():
            return GuardDecision.REDIRECT
        if state.is_authenticated:
            return GuardDecision.ALLOW
        return GuardDecision.REDIRECT
