"""
Test helpers: scriptable backend and profile client.
"""

import asyncio
from typing import List, Optional

from mro_auth.domain.session import LocalSession
from mro_auth.domain.user import UserRecord, Profile
from mro_auth.errors import ExchangeFailed, InvalidLocalToken, LocalLoginFailed, ProfileEnrichmentFailed
from mro_auth.ports.exchange_port import SessionExchangePort, ExchangeRequest
from mro_auth.ports.profile_port import ProfileEnrichmentPort

API_SCOPES = ("api://mro-backend/access_as_user",)
PROFILE_SCOPES = ("User.Read",)


def backend_user(user_id=7, auth_type=0, **extra):
    payload = {
        "id": user_id,
        "name": "Ana Torres",
        "email": "ana@example.com",
        "role": 2,
        "roleName": "Keeper",
        "authType": auth_type,
        "departmentName": "Maintenance",
        "employeeId": "E-100",
        "warehouseId": 3,
    }
    payload.update(extra)
    return payload


class FakeExchange(SessionExchangePort):
    """Backend stand-in with call logs and injectable failures/delays."""

    def __init__(self):
        self.valid_tokens = {}
        self.exchange_result: Optional[LocalSession] = None
        self.exchange_error: Optional[Exception] = None
        self.exchange_delay = 0.0
        self.local_accounts = {}

        self.validate_calls: List[str] = []
        self.exchange_calls: List[ExchangeRequest] = []
        self.login_calls: List[str] = []

    async def validate_local_token(self, token: str) -> UserRecord:
        self.validate_calls.append(token)
        await asyncio.sleep(0)
        if token not in self.valid_tokens:
            raise InvalidLocalToken("401")
        return self.valid_tokens[token]

    async def exchange_federated_token(self, request: ExchangeRequest) -> LocalSession:
        self.exchange_calls.append(request)
        await asyncio.sleep(self.exchange_delay)
        if self.exchange_error is not None:
            raise self.exchange_error
        if self.exchange_result is None:
            raise ExchangeFailed("no session configured")
        return self.exchange_result

    async def login_local(self, email: str, password: str) -> LocalSession:
        self.login_calls.append(email)
        session = self.local_accounts.get((email, password))
        if session is None:
            raise LocalLoginFailed("Invalid credentials")
        return session


class FakeProfile(ProfileEnrichmentPort):
    def __init__(self, profile: Optional[Profile] = None, photo: Optional[str] = None,
                 fail_profile: bool = False, fail_photo: bool = False, photo_delay: float = 0.0):
        self.profile = profile
        self.photo = photo
        self.fail_profile = fail_profile
        self.fail_photo = fail_photo
        self.photo_delay = photo_delay
        self.photo_calls = 0

    async def fetch_profile(self, access_token: str) -> Optional[Profile]:
        if self.fail_profile:
            raise ProfileEnrichmentFailed("graph down")
        return self.profile

    async def fetch_photo(self, access_token: str) -> Optional[str]:
        self.photo_calls += 1
        await asyncio.sleep(self.photo_delay)
        if self.fail_photo:
            raise ProfileEnrichmentFailed("graph down")
        return self.photo


