"""
Bootstrap Configuration - Settings shared by the orchestrator and adapters.

Every field has a default. Use BootstrapConfig.from_env() to override
from environment variables (default prefix MRO_AUTH_).
"""

import os
from dataclasses import dataclass, field
from typing import Optional, Tuple


def _split(value: str) -> Tuple[str, ...]:
    return tuple(part.strip() for part in value.replace(",", " ").split() if part.strip())


@dataclass(frozen=True)
class BootstrapConfig:
    """
    Session bootstrap settings.

    Routes are matched exactly against the navigator path.
    Timeouts are in seconds.
    """
    api_url: str = "http://localhost:5000/api"
    graph_url: str = "https://graph.microsoft.com/v1.0"

    api_scopes: Tuple[str, ...] = ("api://mro-backend/access_as_user",)
    profile_scopes: Tuple[str, ...] = ("User.Read",)

    exchange_timeout: float = 10.0
    photo_timeout: float = 5.0

    login_route: str = "/login"
    home_route: str = "/"
    public_routes: Tuple[str, ...] = field(default=("/login", "/register"))
    post_logout_uri: str = "http://localhost:3000/login"

    storage_prefix: str = "mro_"
    redis_url: Optional[str] = None

    def is_public_route(self, path: str) -> bool:
        """Check if a path is a public entry route (login/registration)."""
        normalized = path.rstrip("/") or "/"
        return normalized in self.public_routes

    def get_exchange_adapter(self):
        """Backend session adapter for api_url."""
        from mro_auth.adapters.http_exchange import HTTPSessionExchangeAdapter
        return HTTPSessionExchangeAdapter(api_url=self.api_url, timeout=self.exchange_timeout)

    def get_profile_adapter(self):
        """Graph enrichment adapter for graph_url."""
        from mro_auth.adapters.graph_profile import GraphProfileAdapter
        return GraphProfileAdapter(graph_url=self.graph_url, photo_timeout=self.photo_timeout)

    def get_storage_adapter(self):
        """Redis storage when redis_url is set, otherwise in-memory."""
        if self.redis_url:
            from mro_auth.adapters.redis_storage import RedisStorageAdapter
            return RedisStorageAdapter(redis_url=self.redis_url)
        from mro_auth.adapters.memory_storage import MemoryStorageAdapter
        return MemoryStorageAdapter()

    @classmethod
    def from_env(cls, prefix: str = "MRO_AUTH_") -> "BootstrapConfig":
        """
        Build config from environment variables.

        Args:
            prefix: Environment variable prefix (default MRO_AUTH_)

        Returns:
            Config with defaults for unset variables
        """
        def env(name: str) -> Optional[str]:
            value = os.environ.get(f"{prefix}{name}")
            return value if value else None

        defaults = cls()
        api_scopes = env("API_SCOPES")
        profile_scopes = env("PROFILE_SCOPES")
        public_routes = env("PUBLIC_ROUTES")
        exchange_timeout = env("EXCHANGE_TIMEOUT")
        photo_timeout = env("PHOTO_TIMEOUT")

        return cls(
            api_url=env("API_URL") or defaults.api_url,
            graph_url=env("GRAPH_URL") or defaults.graph_url,
            api_scopes=_split(api_scopes) if api_scopes else defaults.api_scopes,
            profile_scopes=_split(profile_scopes) if profile_scopes else defaults.profile_scopes,
            exchange_timeout=float(exchange_timeout) if exchange_timeout else defaults.exchange_timeout,
            photo_timeout=float(photo_timeout) if photo_timeout else defaults.photo_timeout,
            login_route=env("LOGIN_ROUTE") or defaults.login_route,
            home_route=env("HOME_ROUTE") or defaults.home_route,
            public_routes=_split(public_routes) if public_routes else defaults.public_routes,
            post_logout_uri=env("POST_LOGOUT_URI") or defaults.post_logout_uri,
            storage_prefix=env("STORAGE_PREFIX") or defaults.storage_prefix,
            redis_url=env("REDIS_URL") or defaults.redis_url,
        )
