"""
Memory Identity Adapter - Scriptable identity provider (testing only).
"""

from typing import Dict, List, Optional, Sequence, Tuple

from mro_auth.errors import TokenAcquisitionFailed
from mro_auth.ports.identity_port import FederatedIdentityPort, IdentityAccount


class MemoryIdentityAdapter(FederatedIdentityPort):
    """
    In-memory identity provider.

    Tokens are looked up by scope tuple. Scopes without a configured
    token fail acquisition. Redirects are recorded, not performed.

    WARNING: Only for testing and local development.
    """

    def __init__(
        self,
        accounts: Optional[List[IdentityAccount]] = None,
        tokens: Optional[Dict[Tuple[str, ...], str]] = None,
        authenticated: Optional[bool] = None,
    ):
        self._accounts: List[IdentityAccount] = list(accounts or [])
        self._tokens: Dict[Tuple[str, ...], str] = dict(tokens or {})
        self._authenticated = bool(self._accounts) if authenticated is None else authenticated
        self._interaction_in_progress = False

        self.acquire_calls: List[Tuple[Tuple[str, ...], str]] = []
        self.login_redirects = 0
        self.logout_redirects: List[str] = []

    @property
    def is_authenticated(self) -> bool:
        return self._authenticated

    @property
    def accounts(self) -> List[IdentityAccount]:
        return list(self._accounts)

    @property
    def interaction_in_progress(self) -> bool:
        return self._interaction_in_progress

    def set_interaction(self, in_progress: bool) -> None:
        self._interaction_in_progress = in_progress

    def sign_in(self, account: IdentityAccount, tokens: Optional[Dict[Tuple[str, ...], str]] = None) -> None:
        """Simulate a completed redirect login."""
        self._accounts = [account]
        self._authenticated = True
        if tokens:
            self._tokens.update(tokens)

    def sign_out(self) -> None:
        self._accounts = []
        self._authenticated = False

    async def acquire_token_silent(
        self,
        scopes: Sequence[str],
        account: IdentityAccount,
    ) -> str:
        key = tuple(scopes)
        self.acquire_calls.append((key, account.home_account_id))
        if account not in self._accounts:
            raise TokenAcquisitionFailed(f"Account not cached: {account.home_account_id}")
        token = self._tokens.get(key)
        if token is None:
            raise TokenAcquisitionFailed(f"No token for scopes: {' '.join(key)}")
        return token

    async def redirect_to_login(self) -> None:
        self.login_redirects += 1

    async def redirect_to_logout(self, post_logout_uri: str) -> None:
        self.logout_redirects.append(post_logout_uri)
        self.sign_out()
