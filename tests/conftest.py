"""
Shared fixtures: in-memory adapters and a scriptable backend.
"""

import pytest

from mro_auth.config import BootstrapConfig
from mro_auth.ports.identity_port import IdentityAccount
from mro_auth.adapters import (
    MemoryStorageAdapter,
    MemoryIdentityAdapter,
    MemoryNavigatorAdapter,
    LoggingNoticeAdapter,
)
from mro_auth.sdk.credential_store import CredentialStore
from mro_auth.sdk.orchestrator import BootstrapOrchestrator
from mro_auth.sdk.state_store import AuthStateStore
from tests.helpers import API_SCOPES, PROFILE_SCOPES, FakeExchange


@pytest.fixture
def config():
    return BootstrapConfig(
        api_scopes=API_SCOPES,
        profile_scopes=PROFILE_SCOPES,
        exchange_timeout=0.5,
    )


@pytest.fixture
def account():
    return IdentityAccount(
        home_account_id="home-1",
        username="ana@contoso.com",
        name="Ana T.",
        local_account_id="oid-123",
    )


@pytest.fixture
def storage():
    return MemoryStorageAdapter()


@pytest.fixture
def credentials(storage, config):
    return CredentialStore(storage, prefix=config.storage_prefix)


@pytest.fixture
def identity():
    return MemoryIdentityAdapter()


@pytest.fixture
def signed_in_identity(account):
    return MemoryIdentityAdapter(
        accounts=[account],
        tokens={API_SCOPES: "fed-api-token", PROFILE_SCOPES: "fed-profile-token"},
    )


@pytest.fixture
def exchange():
    return FakeExchange()


@pytest.fixture
def navigator():
    return MemoryNavigatorAdapter("/")


@pytest.fixture
def notices():
    return LoggingNoticeAdapter()


@pytest.fixture
def make_orchestrator(credentials, exchange, navigator, notices, config):
    """Build an orchestrator around a fresh store for a given identity/profile."""

    def build(identity, profile=None):
        store = AuthStateStore()
        orchestrator = BootstrapOrchestrator(
            store=store,
            credentials=credentials,
            identity=identity,
            exchange=exchange,
            navigator=navigator,
            profile=profile,
            notices=notices,
            config=config,
        )
        return store, orchestrator

    return build
