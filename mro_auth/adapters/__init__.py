"""
Adapters - Implementations of ports.

Storage:
- MemoryStorageAdapter: In-memory key-value store (testing)
- RedisStorageAdapter: Redis-backed key-value store

Identity provider:
- MemoryIdentityAdapter: Scriptable provider (testing)

Backend & enrichment:
- HTTPSessionExchangeAdapter: Backend auth API (httpx)
- GraphProfileAdapter: Microsoft Graph profile/photo (httpx)

UI:
- MemoryNavigatorAdapter: Recording router (testing, headless)
- LoggingNoticeAdapter: Notices to the log
"""

# Storage
from mro_auth.adapters.memory_storage import MemoryStorageAdapter
from mro_auth.adapters.redis_storage import RedisStorageAdapter

# Identity provider
from mro_auth.adapters.memory_identity import MemoryIdentityAdapter

# Backend & enrichment
from mro_auth.adapters.http_exchange import HTTPSessionExchangeAdapter
from mro_auth.adapters.graph_profile import GraphProfileAdapter

# UI
from mro_auth.adapters.memory_navigator import MemoryNavigatorAdapter
from mro_auth.adapters.logging_notice import LoggingNoticeAdapter

__all__ = [
    # Storage
    "MemoryStorageAdapter",
    "RedisStorageAdapter",
    # Identity provider
    "MemoryIdentityAdapter",
    # Backend & enrichment
    "HTTPSessionExchangeAdapter",
    "GraphProfileAdapter",
    # UI
    "MemoryNavigatorAdapter",
    "LoggingNoticeAdapter",
]
