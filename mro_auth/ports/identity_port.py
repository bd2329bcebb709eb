"""
Federated Identity Port - Interface to the identity provider client.

Token acquisition mechanics are opaque to this package. Implementations
wrap a provider SDK (MSAL or similar) and expose only what bootstrap needs.

Implementations:
- MemoryIdentityAdapter: Scriptable provider (testing only)
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Sequence


@dataclass(frozen=True)
class IdentityAccount:
    """Cached provider account (one per signed-in identity)."""
    home_account_id: str
    username: str = ""        # usually the email / UPN
    name: str = ""
    local_account_id: str = ""  # provider object id


class FederatedIdentityPort(ABC):
    """Port: Federated identity provider client."""

    @property
    @abstractmethod
    def is_authenticated(self) -> bool:
        """True once a redirect login has completed."""
        pass

    @property
    @abstractmethod
    def accounts(self) -> List[IdentityAccount]:
        """Cached provider accounts."""
        pass

    @property
    @abstractmethod
    def interaction_in_progress(self) -> bool:
        """True while a redirect/popup interaction is still being processed."""
        pass

    @abstractmethod
    async def acquire_token_silent(
        self,
        scopes: Sequence[str],
        account: IdentityAccount,
    ) -> str:
        """
        Acquire an access token without user interaction.

        Args:
            scopes: Requested scopes
            account: Cached account to acquire for

        Returns:
            Access token string

        Raises:
            TokenAcquisitionFailed: If no token can be obtained silently
        """
        pass

    @abstractmethod
    async def redirect_to_login(self) -> None:
        """Start a redirect login. Terminates the current execution context."""
        pass

    @abstractmethod
    async def redirect_to_logout(self, post_logout_uri: str) -> None:
        """
        Start a redirect logout at the provider.

        Args:
            post_logout_uri: Where the provider sends the browser afterwards
        """
        pass
