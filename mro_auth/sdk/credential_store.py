"""
Credential Store - Local session and logout flag on top of a StoragePort.

Keys (prefix defaults to "mro_"):
- {prefix}token            local session token
- {prefix}user             UserRecord as JSON
- {prefix}just_logged_out  one-shot auto-login suppression flag
"""

import json
import logging
from typing import Optional

from mro_auth.domain.session import LocalSession
from mro_auth.domain.user import UserRecord
from mro_auth.ports.storage_port import StoragePort

logger = logging.getLogger(__name__)


class CredentialStore:
    """
    Synchronous wrapper over the persistent store.

    A session is written as a unit: if either key fails to write,
    both are removed before the error propagates.
    """

    def __init__(self, storage: StoragePort, prefix: str = "mro_"):
        self._storage = storage
        self.token_key = f"{prefix}token"
        self.user_key = f"{prefix}user"
        self.flag_key = f"{prefix}just_logged_out"

    def get_token(self) -> Optional[str]:
        return self._storage.get(self.token_key) or None

    def get_user(self) -> Optional[UserRecord]:
        """Cached user, or None if absent or unreadable."""
        raw = self._storage.get(self.user_key)
        if not raw:
            return None
        try:
            return UserRecord.from_dict(json.loads(raw))
        except (ValueError, KeyError, TypeError) as e:
            logger.warning("Discarding unreadable cached user: %s", e)
            self.clear_session()
            return None

    def load_session(self) -> Optional[LocalSession]:
        """Full session, or None. A half-present session is cleared."""
        token = self.get_token()
        user = self.get_user()
        if token and user:
            return LocalSession(token=token, user=user)
        if token or user:
            logger.warning("Clearing partial local session")
            self.clear_session()
        return None

    def save_session(self, session: LocalSession) -> None:
        try:
            self._storage.set(self.user_key, json.dumps(session.user.to_dict()))
            self._storage.set(self.token_key, session.token)
        except Exception:
            self.clear_session()
            raise

    def clear_session(self) -> None:
        self._storage.delete(self.token_key)
        self._storage.delete(self.user_key)

    def mark_logged_out(self) -> None:
        self._storage.set(self.flag_key, "true")

    def has_logout_flag(self) -> bool:
        return self._storage.get(self.flag_key) == "true"

    def consume_logout_flag(self) -> bool:
        """
        Read and delete the suppression flag.

        Returns:
            True if the flag was set
        """
        was_set = self.has_logout_flag()
        self._storage.delete(self.flag_key)
        return was_set
