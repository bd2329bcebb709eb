"""
Auth Client - High-level SDK wiring bootstrap, logout and the route guard.

Simplifies integrating session bootstrap into a host application.
"""

import logging
from typing import Callable, Optional

from mro_auth.config import BootstrapConfig
from mro_auth.domain.state import AuthState
from mro_auth.ports.exchange_port import SessionExchangePort
from mro_auth.ports.identity_port import FederatedIdentityPort
from mro_auth.ports.profile_port import ProfileEnrichmentPort
from mro_auth.ports.storage_port import StoragePort
from mro_auth.ports.ui_port import NavigatorPort, NoticePort
from mro_auth.sdk.credential_store import CredentialStore
from mro_auth.sdk.guard import GuardDecision, RouteGuard
from mro_auth.sdk.logout import LogoutFlow
from mro_auth.sdk.orchestrator import BootstrapOrchestrator
from mro_auth.sdk.state_store import AuthStateStore

logger = logging.getLogger(__name__)


class AuthClient:
    """
    High-level auth client for the host application.

    Example:
        from mro_auth import AuthClient, BootstrapConfig

        config = BootstrapConfig.from_env()
        client = AuthClient(
            identity=msal_bridge,
            exchange=config.get_exchange_adapter(),
            storage=config.get_storage_adapter(),
            navigator=router,
            profile=config.get_profile_adapter(),
            config=config,
        )

        # On every route change
        state = await client.on_navigation("/inventory")

        # Logout
        await client.logout()
    """

    def __init__(
        self,
        identity: FederatedIdentityPort,
        exchange: SessionExchangePort,
        storage: StoragePort,
        navigator: NavigatorPort,
        profile: Optional[ProfileEnrichmentPort] = None,
        notices: Optional[NoticePort] = None,
        config: Optional[BootstrapConfig] = None,
    ):
        """
        Initialize auth client with adapters.

        Args:
            identity: Identity provider adapter (required)
            exchange: Backend session adapter (required)
            storage: Persistent key-value adapter (required)
            navigator: Router adapter (required)
            profile: Profile enrichment adapter (optional)
            notices: User notice adapter (optional)
            config: Bootstrap settings (default BootstrapConfig())
        """
        self._config = config or BootstrapConfig()
        self._identity = identity
        self._exchange = exchange
        self._navigator = navigator

        self.store = AuthStateStore()
        self.credentials = CredentialStore(storage, prefix=self._config.storage_prefix)
        self.orchestrator = BootstrapOrchestrator(
            store=self.store,
            credentials=self.credentials,
            identity=identity,
            exchange=exchange,
            navigator=navigator,
            profile=profile,
            notices=notices,
            config=self._config,
        )
        self.logout_flow = LogoutFlow(
            orchestrator=self.orchestrator,
            credentials=self.credentials,
            identity=identity,
            navigator=navigator,
            config=self._config,
        )
        self.guard = RouteGuard(self.store, self.credentials, self._config)

    @property
    def state(self) -> AuthState:
        return self.store.state

    def subscribe(self, listener: Callable[[AuthState], None]) -> Callable[[], None]:
        return self.store.subscribe(listener)

    async def on_navigation(self, path: Optional[str] = None) -> AuthState:
        """
        Run bootstrap for a route change or provider status change.

        Args:
            path: New route (default: navigator's current path)

        Returns:
            AuthState after the run
        """
        return await self.orchestrator.bootstrap(path)

    async def login_local(self, email: str, password: str) -> AuthState:
        """
        Log in with email and password.

        Persists the session, moves to the home route and lets bootstrap
        resolve it through the local token.

        Raises:
            LocalLoginFailed: If the backend rejects the credentials
        """
        session = await self._exchange.login_local(email, password)
        self.credentials.save_session(session)
        self._navigator.navigate(self._config.home_route)
        return await self.orchestrator.bootstrap(self._config.home_route)

    async def login_with_provider(self) -> None:
        """Start a redirect login at the identity provider."""
        await self._identity.redirect_to_login()

    async def logout(self) -> None:
        await self.logout_flow.logout()

    def handle_unauthorized(self) -> None:
        """
        React to a 401 on an authenticated API call.

        Clears the local session and sends the user to login.
        """
        logger.warning("Backend rejected the session token; signing out locally")
        self.credentials.clear_session()
        self.orchestrator.sign_out()
        self._navigator.navigate(self._config.login_route)

    def check_route(self, path: str) -> GuardDecision:
        return self.guard.check(path)

    async def close(self) -> None:
        """Wait for background enrichment to finish."""
        await self.orchestrator.wait_background()
