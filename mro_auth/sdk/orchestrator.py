"""
Bootstrap Orchestrator - Decides which credential source is authoritative.

Runs on every navigation or identity-provider status change:

    guard: interaction in progress  -> stay BOOTING
    guard: public route, no redirect -> UNAUTHENTICATED
    Case A: local token validates   -> RESOLVED_LOCAL / RESOLVED_FEDERATED
    Case B: federated exchange      -> RESOLVED_FEDERATED / UNAUTHENTICATED

A run is single-flight. Re-running with unchanged inputs is a no-op.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Optional, Set, Tuple

from mro_auth.config import BootstrapConfig
from mro_auth.domain.session import LocalSession
from mro_auth.domain.state import AuthState
from mro_auth.domain.token import is_expired
from mro_auth.domain.user import FederatedUser, Profile, UserRecord
from mro_auth.errors import (
    AuthError,
    ExchangeFailed,
    ExchangeTimeout,
    InvalidLocalToken,
    TokenAcquisitionFailed,
)
from mro_auth.ports.exchange_port import SessionExchangePort, ExchangeRequest
from mro_auth.ports.identity_port import FederatedIdentityPort, IdentityAccount
from mro_auth.ports.profile_port import ProfileEnrichmentPort
from mro_auth.ports.ui_port import NavigatorPort, NoticePort, Notice, NoticeKind
from mro_auth.sdk.credential_store import CredentialStore
from mro_auth.sdk.state_store import AuthStateStore

logger = logging.getLogger(__name__)

AUTH_FAILED_MESSAGE = "Authentication failed. Please sign in again."
CONNECTION_MESSAGE = "Sign-in is taking too long. Check your connection and try again."

Fingerprint = Tuple[Optional[str], bool, Tuple[str, ...], bool, bool]


@dataclass
class _Run:
    path: str
    epoch: int
    suppress_auto_login: bool = False


def _first(*values: Optional[str]) -> str:
    for value in values:
        if value:
            return value
    return ""


class BootstrapOrchestrator:
    """
    Session bootstrap state machine.

    Sole holder of the structural AuthState writer. Logout and the
    401 handler go through sign_out() instead of writing state themselves.
    """

    def __init__(
        self,
        store: AuthStateStore,
        credentials: CredentialStore,
        identity: FederatedIdentityPort,
        exchange: SessionExchangePort,
        navigator: NavigatorPort,
        profile: Optional[ProfileEnrichmentPort] = None,
        notices: Optional[NoticePort] = None,
        config: Optional[BootstrapConfig] = None,
    ):
        self._store = store
        self._writer = store.writer()
        self._avatar = store.avatar_patch()
        self._credentials = credentials
        self._identity = identity
        self._exchange = exchange
        self._navigator = navigator
        self._profile = profile
        self._notices = notices
        self._config = config or BootstrapConfig()

        self._inflight: Optional[asyncio.Task] = None
        self._background: Set[asyncio.Task] = set()
        self._fingerprint: Optional[Fingerprint] = None
        self._epoch = 0

    @property
    def state(self) -> AuthState:
        return self._store.state

    async def bootstrap(self, path: Optional[str] = None) -> AuthState:
        """
        Handle a trigger (navigation or provider status change).

        A trigger arriving while a run is in flight joins that run.

        Args:
            path: Route that triggered the run (default: navigator path)

        Returns:
            AuthState after the run
        """
        if self._inflight is not None and not self._inflight.done():
            logger.debug("Bootstrap already running; joining in-flight run")
            return await asyncio.shield(self._inflight)

        trigger_path = path if path is not None else self._navigator.current_path
        self._inflight = asyncio.get_running_loop().create_task(self._run(trigger_path))
        return await asyncio.shield(self._inflight)

    def sign_out(self) -> None:
        """Commit UNAUTHENTICATED and invalidate any in-flight resolution."""
        self._epoch += 1
        self._fingerprint = None
        self._writer.unauthenticated()

    async def wait_background(self) -> None:
        """Wait for pending enrichment tasks (shutdown, tests)."""
        while self._background:
            await asyncio.gather(*list(self._background), return_exceptions=True)

    async def _run(self, path: str) -> AuthState:
        if self._identity.interaction_in_progress:
            logger.debug("Identity interaction in progress; staying in boot")
            self._writer.booting()
            return self.state

        run = _Run(path=path, epoch=self._epoch)
        try:
            if self.state.phase.is_resolved and self._fingerprint_for(path) == self._fingerprint:
                return self.state

            run.suppress_auto_login = self._credentials.consume_logout_flag()
            await self._resolve(run)
            self._fingerprint = self._fingerprint_for(run.path)
        except Exception:
            logger.exception("Session bootstrap failed unexpectedly")
            # Inputs could not be read; the next trigger runs again
            self._fingerprint = None
            if not self._is_stale(run):
                self._discard_session()
                self._writer.unauthenticated()

        return self.state

    def _discard_session(self) -> None:
        try:
            self._credentials.clear_session()
        except Exception:
            logger.exception("Could not clear local session")

    def _fingerprint_for(self, path: str) -> Fingerprint:
        return (
            self._credentials.get_token(),
            self._identity.is_authenticated,
            tuple(account.home_account_id for account in self._identity.accounts),
            self._config.is_public_route(path),
            self._credentials.has_logout_flag(),
        )

    def _is_stale(self, run: _Run) -> bool:
        return run.epoch != self._epoch

    def _has_completed_redirect(self) -> bool:
        return self._identity.is_authenticated and len(self._identity.accounts) > 0

    async def _resolve(self, run: _Run) -> None:
        if self._config.is_public_route(run.path) and not self._has_completed_redirect():
            logger.debug("Public route %s without provider session; not resolving silently", run.path)
            self._writer.unauthenticated()
            return

        if await self._resolve_local(run):
            return

        await self._resolve_federated(run)

    async def _resolve_local(self, run: _Run) -> bool:
        """Case A. Returns True when the local token resolved the run."""
        session = self._credentials.load_session()
        if session is None:
            return False
        token = session.token

        try:
            if is_expired(token):
                raise InvalidLocalToken("Local token has expired")
            user = await self._exchange.validate_local_token(token)
        except AuthError as e:
            logger.warning("Local session rejected, trying federated sign-in: %s", e)
            if not self._is_stale(run):
                self._credentials.clear_session()
            return False
        except Exception:
            logger.exception("Local session check failed, trying federated sign-in")
            if not self._is_stale(run):
                self._credentials.clear_session()
            return False

        if self._is_stale(run):
            logger.info("Discarding local resolution superseded by sign-out")
            return True

        self._credentials.save_session(LocalSession(token=token, user=user))
        if user.is_federated_origin:
            self._writer.resolve_federated(user, token)
            self._spawn(self._enrich_avatar(user))
        else:
            self._writer.resolve_local(user, token)

        logger.info("Session restored from local token (user=%s, source=%s)", user.id, self.state.auth_source)
        return True

    async def _resolve_federated(self, run: _Run) -> None:
        """Case B."""
        if run.suppress_auto_login:
            logger.info("Suppressing automatic sign-in after logout")
            self._writer.unauthenticated()
            return

        accounts = self._identity.accounts
        if not self._identity.is_authenticated or not accounts:
            self._writer.unauthenticated()
            return

        try:
            session = await asyncio.wait_for(
                self._exchange_sequence(accounts[0]),
                timeout=self._config.exchange_timeout,
            )
        except asyncio.TimeoutError:
            self._fail(run, ExchangeTimeout(
                f"Federated sign-in exceeded {self._config.exchange_timeout}s"
            ))
            return
        except AuthError as e:
            self._fail(run, e)
            return
        except Exception as e:
            logger.exception("Federated sign-in raised an unexpected error")
            self._fail(run, ExchangeFailed(f"Federated sign-in failed: {e}"))
            return

        if self._is_stale(run):
            logger.info("Discarding federated resolution superseded by sign-out")
            return

        self._credentials.save_session(session)
        self._writer.resolve_federated(session.user, session.token)
        self._spawn(self._enrich_avatar(session.user))
        logger.info("Federated sign-in completed (user=%s)", session.user.id)

    async def _exchange_sequence(self, account: IdentityAccount) -> LocalSession:
        try:
            api_token = await self._identity.acquire_token_silent(self._config.api_scopes, account)
        except TokenAcquisitionFailed:
            raise
        except Exception as e:
            raise TokenAcquisitionFailed(f"Silent token acquisition failed: {e}") from e

        profile = await self._fetch_profile(account)

        request = ExchangeRequest(
            federated_token=api_token,
            object_id=_first(profile.id if profile else None, account.local_account_id),
            email=_first(profile.email if profile else None, account.username),
            name=_first(profile.display_name if profile else None, account.name),
        )
        session = await self._exchange.exchange_federated_token(request)

        if profile is not None and isinstance(session.user, FederatedUser):
            session = LocalSession(token=session.token, user=session.user.with_profile(profile))
        return session

    async def _fetch_profile(self, account: IdentityAccount) -> Optional[Profile]:
        if self._profile is None:
            return None
        try:
            token = await self._identity.acquire_token_silent(self._config.profile_scopes, account)
            return await self._profile.fetch_profile(token)
        except Exception as e:
            logger.warning("Profile enrichment failed, continuing without it: %s", e)
            return None

    def _fail(self, run: _Run, error: AuthError) -> None:
        if self._is_stale(run):
            logger.info("Ignoring failure of superseded federated sign-in: %s", error)
            return

        logger.error("Federated sign-in failed: %s", error)
        self._credentials.clear_session()
        self._writer.unauthenticated()

        if self._notices is not None:
            if isinstance(error, ExchangeTimeout):
                self._notices.notify(Notice(NoticeKind.CONNECTION, CONNECTION_MESSAGE))
            else:
                self._notices.notify(Notice(NoticeKind.AUTH_FAILED, AUTH_FAILED_MESSAGE))

        login_route = self._config.login_route
        if self._navigator.current_path != login_route:
            self._navigator.navigate(login_route)
        run.path = login_route

    def _spawn(self, coro) -> None:
        task = asyncio.get_running_loop().create_task(coro)
        self._background.add(task)
        task.add_done_callback(self._background.discard)

    async def _enrich_avatar(self, user: UserRecord) -> None:
        if self._profile is None:
            return
        accounts = self._identity.accounts
        if not accounts:
            logger.debug("No provider account cached; skipping avatar for user %s", user.id)
            return
        try:
            token = await self._identity.acquire_token_silent(self._config.profile_scopes, accounts[0])
            photo = await self._profile.fetch_photo(token)
        except Exception as e:
            logger.warning("Avatar enrichment failed: %s", e)
            return
        if photo:
            self._avatar.apply(user.id, photo)
