"""
Ports - Interfaces for storage, identity, session exchange, enrichment and UI.

Hexagonal architecture: These define WHAT we need, not HOW.
Adapters provide the HOW.
"""

from mro_auth.ports.storage_port import StoragePort
from mro_auth.ports.identity_port import FederatedIdentityPort, IdentityAccount
from mro_auth.ports.exchange_port import SessionExchangePort, ExchangeRequest
from mro_auth.ports.profile_port import ProfileEnrichmentPort
from mro_auth.ports.ui_port import NavigatorPort, NoticePort, Notice, NoticeKind

__all__ = [
    # Persistence
    "StoragePort",
    # Identity provider
    "FederatedIdentityPort",
    "IdentityAccount",
    # Backend
    "SessionExchangePort",
    "ExchangeRequest",
    # Enrichment
    "ProfileEnrichmentPort",
    # UI
    "NavigatorPort",
    "NoticePort",
    "Notice",
    "NoticeKind",
]
