"""
Auth State Store - Observable container for the global AuthState.

Writes go through two capabilities:
- StateWriter: structural fields (phase, user, token). Claimable once.
- AvatarPatch: photo_url of the current user only.
"""

import logging
from typing import Callable, List, Optional

from mro_auth.domain.state import AuthState, BootPhase
from mro_auth.domain.user import UserRecord
from mro_auth.errors import WriterAlreadyClaimed

logger = logging.getLogger(__name__)

Listener = Callable[[AuthState], None]


class AuthStateStore:
    """
    Holds the current AuthState snapshot and notifies subscribers.

    Example:
        store = AuthStateStore()
        unsubscribe = store.subscribe(lambda state: print(state.phase))
        writer = store.writer()
        writer.unauthenticated()
    """

    def __init__(self, initial: Optional[AuthState] = None):
        self._state = initial or AuthState()
        self._listeners: List[Listener] = []
        self._writer_claimed = False

    @property
    def state(self) -> AuthState:
        return self._state

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Register a listener called after every commit.

        Returns:
            Function that removes the listener
        """
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def writer(self) -> "StateWriter":
        """
        Claim the structural writer.

        Raises:
            WriterAlreadyClaimed: If already claimed
        """
        if self._writer_claimed:
            raise WriterAlreadyClaimed("AuthState writer already claimed")
        self._writer_claimed = True
        return StateWriter(self)

    def avatar_patch(self) -> "AvatarPatch":
        return AvatarPatch(self)

    def _commit(self, state: AuthState) -> None:
        self._state = state
        for listener in list(self._listeners):
            try:
                listener(state)
            except Exception:
                logger.exception("AuthState listener failed")


class StateWriter:
    """Structural writer. Only the bootstrap orchestrator holds one."""

    def __init__(self, store: AuthStateStore):
        self._store = store

    def booting(self) -> None:
        """Enter BOOTING from IDLE. Resolved states are left untouched."""
        if self._store.state.phase == BootPhase.IDLE:
            self._store._commit(self._store.state.bump(phase=BootPhase.BOOTING))

    def resolve_local(self, user: UserRecord, token: str) -> None:
        self._resolve(BootPhase.RESOLVED_LOCAL, user, token)

    def resolve_federated(self, user: UserRecord, token: str) -> None:
        self._resolve(BootPhase.RESOLVED_FEDERATED, user, token)

    def unauthenticated(self) -> None:
        state = self._store.state
        if state.phase == BootPhase.UNAUTHENTICATED and state.user is None:
            return
        self._store._commit(state.bump(phase=BootPhase.UNAUTHENTICATED, user=None, token=None))

    def _resolve(self, phase: BootPhase, user: UserRecord, token: str) -> None:
        state = self._store.state
        if state.phase == phase and state.user == user and state.token == token:
            return
        self._store._commit(state.bump(phase=phase, user=user, token=token))


class AvatarPatch:
    """Narrow writer: sets photo_url on the current user and nothing else."""

    def __init__(self, store: AuthStateStore):
        self._store = store

    def apply(self, user_id: str, photo_url: str) -> bool:
        """
        Patch the avatar if user_id is still the authenticated user.

        Returns:
            True if the state changed
        """
        state = self._store.state
        if not state.is_authenticated or state.user is None or state.user.id != user_id:
            logger.debug("Dropping avatar patch for user %s (no longer current)", user_id)
            return False
        if state.user.photo_url == photo_url:
            return False
        self._store._commit(state.bump(user=state.user.with_photo(photo_url)))
        return True
