"""
Logout Flow - Best-effort ordered sign-out.

Local state is always cleaned before the provider is involved. A step
that raises is logged and the remaining steps still run.
"""

import logging
from typing import Callable, List, Optional

from mro_auth.config import BootstrapConfig
from mro_auth.ports.identity_port import FederatedIdentityPort
from mro_auth.ports.ui_port import NavigatorPort
from mro_auth.sdk.credential_store import CredentialStore
from mro_auth.sdk.orchestrator import BootstrapOrchestrator

logger = logging.getLogger(__name__)


class LogoutFlow:
    """
    Sign-out sequence.

    1. Write the suppression flag
    2. Clear AuthState (via the orchestrator) and dependent caches
    3. Clear the credential store
    4. Federated sessions: provider redirect-logout, then stop
    5. Otherwise: navigate to the login route
    """

    def __init__(
        self,
        orchestrator: BootstrapOrchestrator,
        credentials: CredentialStore,
        identity: FederatedIdentityPort,
        navigator: NavigatorPort,
        config: Optional[BootstrapConfig] = None,
    ):
        self._orchestrator = orchestrator
        self._credentials = credentials
        self._identity = identity
        self._navigator = navigator
        self._config = config or BootstrapConfig()
        self._clear_hooks: List[Callable[[], None]] = []

    def add_clear_hook(self, hook: Callable[[], None]) -> None:
        """Register a callback that clears a feature cache on logout."""
        self._clear_hooks.append(hook)

    def _step(self, name: str, action: Callable[[], None]) -> bool:
        try:
            action()
            return True
        except Exception:
            logger.exception("Logout step failed: %s", name)
            return False

    async def logout(self) -> None:
        auth_source = self._orchestrator.state.auth_source

        self._step("set suppression flag", self._credentials.mark_logged_out)
        self._step("clear auth state", self._orchestrator.sign_out)
        for hook in self._clear_hooks:
            self._step(f"clear hook {getattr(hook, '__name__', hook)!r}", hook)
        self._step("clear credential store", self._credentials.clear_session)

        if auth_source == "federated":
            try:
                await self._identity.redirect_to_logout(self._config.post_logout_uri)
                logger.info("Redirecting to identity provider logout")
                return
            except Exception:
                logger.exception("Provider logout failed; falling back to local logout")

        self._step("navigate to login", lambda: self._navigator.navigate(self._config.login_route))
        logger.info("Logged out (source=%s)", auth_source)
