"""
Integration tests for the HTTP adapters against a mocked transport.

Exercises the real httpx request/response path without a network.
"""

import json

import httpx
import pytest

from mro_auth.adapters import GraphProfileAdapter, HTTPSessionExchangeAdapter
from mro_auth.domain.session import LocalSession
from mro_auth.domain.state import BootPhase
from mro_auth.domain.user import FederatedUser, LocalUser, UserRecord
from mro_auth.errors import (
    BackendUnavailable,
    ExchangeFailed,
    InvalidLocalToken,
    LocalLoginFailed,
    ProfileEnrichmentFailed,
)
from mro_auth.ports.exchange_port import ExchangeRequest
from mro_auth.ports.ui_port import NoticeKind
from mro_auth.sdk.credential_store import CredentialStore
from mro_auth.sdk.orchestrator import BootstrapOrchestrator
from mro_auth.sdk.state_store import AuthStateStore
from tests.helpers import backend_user

API_URL = "https://mro.example.com/api"
GRAPH_URL = "https://graph.example.com/v1.0"


def _backend(handler):
    client = httpx.AsyncClient(base_url=API_URL, transport=httpx.MockTransport(handler))
    return HTTPSessionExchangeAdapter(api_url=API_URL, client=client)


def _graph(handler):
    client = httpx.AsyncClient(base_url=GRAPH_URL, transport=httpx.MockTransport(handler))
    return GraphProfileAdapter(graph_url=GRAPH_URL, client=client)


class TestHTTPSessionExchangeAdapter:
    """Backend session API."""

    @pytest.mark.asyncio
    async def test_validate_local_token(self):
        seen = {}

        def handler(request):
            seen["path"] = request.url.path
            seen["auth"] = request.headers["Authorization"]
            return httpx.Response(200, json=backend_user())

        adapter = _backend(handler)
        user = await adapter.validate_local_token("local-abc")
        await adapter.aclose()

        assert isinstance(user, LocalUser)
        assert user.id == "7"
        assert seen == {"path": "/api/auth/me", "auth": "Bearer local-abc"}

    @pytest.mark.asyncio
    async def test_validate_rejected(self):
        adapter = _backend(lambda request: httpx.Response(401, json={"message": "Token expired"}))

        with pytest.raises(InvalidLocalToken, match="Token expired"):
            await adapter.validate_local_token("stale")

    @pytest.mark.asyncio
    async def test_validate_malformed_user(self):
        adapter = _backend(lambda request: httpx.Response(200, text="<html>"))

        with pytest.raises(InvalidLocalToken):
            await adapter.validate_local_token("tok")

    @pytest.mark.asyncio
    async def test_exchange_federated_token(self):
        """Test the exchange request body and session parsing."""
        bodies = []

        def handler(request):
            bodies.append(json.loads(request.content))
            return httpx.Response(200, json={
                "token": "from-sso",
                "expiresIn": 3600,
                "user": backend_user(auth_type=1),
            })

        adapter = _backend(handler)
        session = await adapter.exchange_federated_token(ExchangeRequest(
            federated_token="fed-api-token",
            object_id="oid-123",
            email="ana@contoso.com",
            name="Ana T.",
        ))

        assert session.token == "from-sso"
        assert isinstance(session.user, FederatedUser)
        assert bodies == [{
            "azureToken": "fed-api-token",
            "userInfo": {"objectId": "oid-123", "email": "ana@contoso.com", "name": "Ana T."},
        }]

    @pytest.mark.asyncio
    async def test_exchange_rejected(self):
        adapter = _backend(lambda request: httpx.Response(403, json={"message": "User not provisioned"}))

        with pytest.raises(ExchangeFailed, match="User not provisioned"):
            await adapter.exchange_federated_token(ExchangeRequest(federated_token="t"))

    @pytest.mark.asyncio
    async def test_exchange_without_token_in_response(self):
        adapter = _backend(lambda request: httpx.Response(200, json={"user": backend_user()}))

        with pytest.raises(ExchangeFailed):
            await adapter.exchange_federated_token(ExchangeRequest(federated_token="t"))

    @pytest.mark.asyncio
    async def test_login_local(self):
        def handler(request):
            body = json.loads(request.content)
            if body == {"email": "ana@example.com", "password": "pw"}:
                return httpx.Response(200, json={"token": "local-abc", "expiresIn": 3600, "user": backend_user()})
            return httpx.Response(401, json={"message": "Invalid email or password"})

        adapter = _backend(handler)

        session = await adapter.login_local("ana@example.com", "pw")
        assert session.token == "local-abc"

        with pytest.raises(LocalLoginFailed, match="Invalid email or password"):
            await adapter.login_local("ana@example.com", "wrong")

    @pytest.mark.asyncio
    async def test_error_without_body(self):
        adapter = _backend(lambda request: httpx.Response(500))

        with pytest.raises(LocalLoginFailed, match="HTTP 500"):
            await adapter.login_local("a", "b")

    @pytest.mark.asyncio
    async def test_transport_errors_map_to_backend_unavailable(self):
        def refused(request):
            raise httpx.ConnectError("connection refused", request=request)

        def slow(request):
            raise httpx.ReadTimeout("read timed out", request=request)

        with pytest.raises(BackendUnavailable):
            await _backend(refused).validate_local_token("tok")
        with pytest.raises(BackendUnavailable, match="timed out"):
            await _backend(slow).exchange_federated_token(ExchangeRequest(federated_token="t"))


class TestGraphProfileAdapter:
    """Profile and photo enrichment."""

    @pytest.mark.asyncio
    async def test_fetch_profile(self):
        def handler(request):
            assert request.url.path == "/v1.0/me"
            return httpx.Response(200, json={
                "id": "oid-123",
                "displayName": "Ana Torres",
                "mail": None,
                "userPrincipalName": "ana@contoso.com",
                "jobTitle": "Planner",
            })

        profile = await _graph(handler).fetch_profile("graph-token")

        assert profile.id == "oid-123"
        assert profile.email == "ana@contoso.com"
        assert profile.job_title == "Planner"

    @pytest.mark.asyncio
    async def test_fetch_profile_failure(self):
        with pytest.raises(ProfileEnrichmentFailed):
            await _graph(lambda request: httpx.Response(503)).fetch_profile("graph-token")

    @pytest.mark.asyncio
    async def test_fetch_photo_as_data_uri(self):
        def handler(request):
            assert request.url.path == "/v1.0/me/photo/$value"
            return httpx.Response(200, content=b"\xff\xd8", headers={"Content-Type": "image/jpeg"})

        photo = await _graph(handler).fetch_photo("graph-token")

        assert photo == "data:image/jpeg;base64,/9g="

    @pytest.mark.asyncio
    async def test_no_photo(self):
        """Test 404 means the user has no photo, not a failure."""
        photo = await _graph(lambda request: httpx.Response(404)).fetch_photo("graph-token")

        assert photo is None

    @pytest.mark.asyncio
    async def test_photo_timeout(self):
        def slow(request):
            raise httpx.ReadTimeout("read timed out", request=request)

        with pytest.raises(ProfileEnrichmentFailed, match="timed out"):
            await _graph(slow).fetch_photo("graph-token")


class TestMalformedBackendBodies:
    """Non-object JSON bodies map to the operation's failure type."""

    @pytest.mark.asyncio
    async def test_me_returns_list(self):
        adapter = _backend(lambda request: httpx.Response(200, json=["unexpected"]))

        with pytest.raises(InvalidLocalToken):
            await adapter.validate_local_token("tok")

    @pytest.mark.asyncio
    async def test_exchange_user_is_string(self):
        adapter = _backend(lambda request: httpx.Response(200, json={"token": "sso", "user": "oops"}))

        with pytest.raises(ExchangeFailed):
            await adapter.exchange_federated_token(ExchangeRequest(federated_token="t"))

    @pytest.mark.asyncio
    async def test_profile_is_list(self):
        with pytest.raises(ProfileEnrichmentFailed):
            await _graph(lambda request: httpx.Response(200, json=[1, 2])).fetch_profile("graph-token")


class TestBootstrapOverHTTP:
    """Orchestrator driven through the real HTTP backend adapter."""

    def _orchestrator(self, handler, identity, storage, navigator, notices, config):
        credentials = CredentialStore(storage)
        orchestrator = BootstrapOrchestrator(
            store=AuthStateStore(),
            credentials=credentials,
            identity=identity,
            exchange=_backend(handler),
            navigator=navigator,
            notices=notices,
            config=config,
        )
        return credentials, orchestrator

    @pytest.mark.asyncio
    async def test_garbled_me_response_falls_through_to_federated(
        self, signed_in_identity, storage, navigator, notices, config
    ):
        def handler(request):
            if request.url.path == "/api/auth/me":
                return httpx.Response(200, json=["unexpected"])
            return httpx.Response(200, json={"token": "from-sso", "user": backend_user(auth_type=1)})

        credentials, orchestrator = self._orchestrator(
            handler, signed_in_identity, storage, navigator, notices, config
        )
        credentials.save_session(LocalSession(token="local-abc", user=UserRecord.from_backend(backend_user())))

        state = await orchestrator.bootstrap("/")

        assert state.phase == BootPhase.RESOLVED_FEDERATED
        assert credentials.get_token() == "from-sso"

    @pytest.mark.asyncio
    async def test_garbled_exchange_response_redirects_to_login(
        self, signed_in_identity, storage, navigator, notices, config
    ):
        def handler(request):
            return httpx.Response(200, json={"token": "sso", "user": "oops"})

        credentials, orchestrator = self._orchestrator(
            handler, signed_in_identity, storage, navigator, notices, config
        )

        state = await orchestrator.bootstrap("/inventory")

        assert state.phase == BootPhase.UNAUTHENTICATED
        assert navigator.visited == ["/login"]
        assert [n.kind for n in notices.notices] == [NoticeKind.AUTH_FAILED]
        assert storage.keys() == []
