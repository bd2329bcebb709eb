"""
Graph Profile Adapter - Microsoft Graph profile and photo lookup.

Best-effort only: callers treat every failure as non-fatal.
"""

import base64
import logging
from typing import Optional

import httpx

from mro_auth.domain.user import Profile
from mro_auth.errors import ProfileEnrichmentFailed
from mro_auth.ports.profile_port import ProfileEnrichmentPort

logger = logging.getLogger(__name__)

GRAPH_ENDPOINT = "https://graph.microsoft.com/v1.0"


class GraphProfileAdapter(ProfileEnrichmentPort):
    """
    Microsoft Graph enrichment client.

    Photos are returned as data URIs so they can be stored and rendered
    without a second request.
    """

    def __init__(
        self,
        graph_url: str = GRAPH_ENDPOINT,
        timeout: float = 10.0,
        photo_timeout: float = 5.0,
        client: Optional[httpx.AsyncClient] = None,
    ):
        """
        Initialize Graph adapter.

        Args:
            graph_url: Graph API base URL
            timeout: Profile request timeout in seconds
            photo_timeout: Photo request timeout in seconds
            client: Preconfigured httpx.AsyncClient (base_url must be set)
        """
        self._graph_url = graph_url.rstrip("/")
        self._photo_timeout = photo_timeout
        self._client = client or httpx.AsyncClient(base_url=self._graph_url, timeout=timeout)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def fetch_profile(self, access_token: str) -> Optional[Profile]:
        try:
            response = await self._client.get(
                "/me",
                headers={"Authorization": f"Bearer {access_token}"},
            )
        except httpx.HTTPError as e:
            raise ProfileEnrichmentFailed(f"Profile request failed: {e}") from e

        if response.status_code == 404:
            return None
        if not response.is_success:
            raise ProfileEnrichmentFailed(f"Profile request failed: HTTP {response.status_code}")

        try:
            return Profile.from_graph(response.json())
        except (ValueError, AttributeError) as e:
            raise ProfileEnrichmentFailed(f"Malformed profile payload: {e}") from e

    async def fetch_photo(self, access_token: str) -> Optional[str]:
        try:
            response = await self._client.get(
                "/me/photo/$value",
                headers={"Authorization": f"Bearer {access_token}"},
                timeout=self._photo_timeout,
            )
        except httpx.TimeoutException as e:
            raise ProfileEnrichmentFailed(
                f"Photo request timed out after {self._photo_timeout}s"
            ) from e
        except httpx.HTTPError as e:
            raise ProfileEnrichmentFailed(f"Photo request failed: {e}") from e

        # 404 means no photo is set
        if response.status_code == 404:
            logger.debug("User has no profile photo")
            return None
        if not response.is_success:
            raise ProfileEnrichmentFailed(f"Photo request failed: HTTP {response.status_code}")

        content_type = response.headers.get("content-type", "image/jpeg").split(";")[0]
        encoded = base64.b64encode(response.content).decode("ascii")
        return f"data:{content_type};base64,{encoded}"
