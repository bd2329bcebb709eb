"""
HTTP Session Exchange Adapter - Backend auth API over httpx.

Endpoints:
- GET  /auth/me           (Bearer local token) -> user
- POST /auth/azure-login  {azureToken, userInfo} -> {token, expiresIn, user}
- POST /auth/login        {email, password}      -> {token, expiresIn, user}
"""

import logging
from typing import Any, Dict, Optional

import httpx

from mro_auth.domain.session import LocalSession
from mro_auth.domain.user import UserRecord
from mro_auth.errors import (
    BackendUnavailable,
    ExchangeFailed,
    InvalidLocalToken,
    LocalLoginFailed,
)
from mro_auth.ports.exchange_port import SessionExchangePort, ExchangeRequest

logger = logging.getLogger(__name__)


def _error_message(response: httpx.Response, default: str) -> str:
    """Pull {message} out of an error body if there is one."""
    try:
        body = response.json()
    except ValueError:
        return f"{default} (HTTP {response.status_code})"
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return f"{default} (HTTP {response.status_code})"


class HTTPSessionExchangeAdapter(SessionExchangePort):
    """
    Backend session exchange via REST.

    Every non-2xx response maps to the operation's failure type.
    Transport errors map to BackendUnavailable.
    """

    def __init__(
        self,
        api_url: str = "http://localhost:5000/api",
        timeout: float = 10.0,
        client: Optional[httpx.AsyncClient] = None,
    ):
        """
        Initialize backend adapter.

        Args:
            api_url: Backend API base URL
            timeout: Per-request timeout in seconds
            client: Preconfigured httpx.AsyncClient (base_url must be set)
        """
        self._api_url = api_url.rstrip("/")
        self._client = client or httpx.AsyncClient(base_url=self._api_url, timeout=timeout)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _send(self, method: str, path: str, **kwargs) -> httpx.Response:
        try:
            return await self._client.request(method, path, **kwargs)
        except httpx.TimeoutException as e:
            raise BackendUnavailable(f"Backend timed out on {path}") from e
        except httpx.HTTPError as e:
            raise BackendUnavailable(f"Backend unreachable on {path}: {e}") from e

    async def validate_local_token(self, token: str) -> UserRecord:
        response = await self._send(
            "GET",
            "/auth/me",
            headers={"Authorization": f"Bearer {token}"},
        )
        if not response.is_success:
            raise InvalidLocalToken(_error_message(response, "Local token rejected"))

        try:
            return UserRecord.from_backend(response.json())
        except (ValueError, KeyError, TypeError, AttributeError) as e:
            raise InvalidLocalToken(f"Malformed user payload: {e}") from e

    async def exchange_federated_token(self, request: ExchangeRequest) -> LocalSession:
        payload = {
            "azureToken": request.federated_token,
            "userInfo": {
                "objectId": request.object_id,
                "email": request.email,
                "name": request.name,
            },
        }
        response = await self._send("POST", "/auth/azure-login", json=payload)
        if not response.is_success:
            raise ExchangeFailed(_error_message(response, "Federated login rejected"))

        return self._session_from(response, ExchangeFailed)

    async def login_local(self, email: str, password: str) -> LocalSession:
        response = await self._send(
            "POST",
            "/auth/login",
            json={"email": email, "password": password},
        )
        if not response.is_success:
            raise LocalLoginFailed(_error_message(response, "Login failed"))

        return self._session_from(response, LocalLoginFailed)

    @staticmethod
    def _session_from(response: httpx.Response, error_cls) -> LocalSession:
        try:
            data: Dict[str, Any] = response.json()
            return LocalSession.from_backend(data)
        except (ValueError, KeyError, TypeError, AttributeError) as e:
            logger.error("Backend returned a malformed session payload: %s", e)
            raise error_cls(f"Malformed session payload: {e}") from e
