"""
Profile Enrichment Port - Best-effort extended profile and avatar.

Implementations:
- GraphProfileAdapter: Microsoft Graph /me and /me/photo
"""

from abc import ABC, abstractmethod
from typing import Optional

from mro_auth.domain.user import Profile


class ProfileEnrichmentPort(ABC):
    """Port: Extended profile and avatar lookup with a profile-scoped token."""

    @abstractmethod
    async def fetch_profile(self, access_token: str) -> Optional[Profile]:
        """
        Fetch the signed-in user's extended profile.

        Returns:
            Profile, or None if the provider has none

        Raises:
            ProfileEnrichmentFailed: On request failure
        """
        pass

    @abstractmethod
    async def fetch_photo(self, access_token: str) -> Optional[str]:
        """
        Fetch the signed-in user's avatar.

        Returns:
            Image reference (data URI), or None if no photo is set

        Raises:
            ProfileEnrichmentFailed: On request failure or timeout
        """
        pass
