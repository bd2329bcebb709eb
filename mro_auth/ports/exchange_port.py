"""
Session Exchange Port - Interface to the backend session endpoints.

Implementations:
- HTTPSessionExchangeAdapter: httpx client for the backend auth API
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from mro_auth.domain.user import UserRecord
from mro_auth.domain.session import LocalSession


@dataclass(frozen=True)
class ExchangeRequest:
    """Federated token plus best-available identity fields."""
    federated_token: str
    object_id: str = ""
    email: str = ""
    name: str = ""


class SessionExchangePort(ABC):
    """Port: Backend session exchange and validation."""

    @abstractmethod
    async def validate_local_token(self, token: str) -> UserRecord:
        """
        Validate a local session token and return its user.

        Raises:
            InvalidLocalToken: On any non-success response
            BackendUnavailable: On transport failure
        """
        pass

    @abstractmethod
    async def exchange_federated_token(self, request: ExchangeRequest) -> LocalSession:
        """
        Exchange a federated token for a local session.

        Raises:
            ExchangeFailed: On any non-success response
            BackendUnavailable: On transport failure
        """
        pass

    @abstractmethod
    async def login_local(self, email: str, password: str) -> LocalSession:
        """
        Email/password login.

        Raises:
            LocalLoginFailed: On any non-success response
            BackendUnavailable: On transport failure
        """
        pass
