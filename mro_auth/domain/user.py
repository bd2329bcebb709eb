"""
User Domain Model - Canonical identity resolved at bootstrap.
"""

from dataclasses import dataclass, replace
from typing import Dict, Any, Optional
from enum import Enum


class AuthSource(Enum):
    """Where an account originates (backend authType 0/1/2)."""
    LOCAL = "local"
    FEDERATED = "federated"
    BOTH = "both"

    @classmethod
    def from_backend(cls, value: Any) -> "AuthSource":
        """Map backend authType (int or string) to AuthSource."""
        by_code = {0: cls.LOCAL, 1: cls.FEDERATED, 2: cls.BOTH}
        if isinstance(value, int):
            return by_code.get(value, cls.LOCAL)
        if isinstance(value, str):
            if value.isdigit():
                return by_code.get(int(value), cls.LOCAL)
            lowered = value.lower()
            if lowered == "azure":
                return cls.FEDERATED
            try:
                return cls(lowered)
            except ValueError:
                return cls.LOCAL
        return cls.LOCAL


@dataclass(frozen=True)
class Role:
    """Numeric role id plus its display name."""
    id: int
    name: str = ""


@dataclass(frozen=True)
class UserRecord:
    """
    User entity - canonical shape shared by both account origins.

    Domain rules:
    - id is immutable
    - auth_source decides the concrete variant (LocalUser / FederatedUser)
    - photo_url is the only field background enrichment may change
    """
    id: str
    name: str
    email: str
    role: Role
    auth_source: AuthSource = AuthSource.LOCAL

    # Optional fields
    department: Optional[str] = None
    employee_id: Optional[str] = None
    warehouse_id: Optional[int] = None
    photo_url: Optional[str] = None

    @property
    def is_federated_origin(self) -> bool:
        """True when the account was issued through the identity provider."""
        return self.auth_source == AuthSource.FEDERATED

    def with_photo(self, photo_url: str) -> "UserRecord":
        """Copy with only the avatar reference replaced."""
        return replace(self, photo_url=photo_url)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to dict."""
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "role": self.role.id,
            "role_name": self.role.name,
            "auth_source": self.auth_source.value,
            "department": self.department,
            "employee_id": self.employee_id,
            "warehouse_id": self.warehouse_id,
            "photo_url": self.photo_url,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "UserRecord":
        """Deserialize from dict produced by to_dict()."""
        auth_source = AuthSource(data.get("auth_source", "local"))
        variant = FederatedUser if auth_source != AuthSource.LOCAL else LocalUser
        common = dict(
            id=str(data["id"]),
            name=data.get("name", ""),
            email=data.get("email", ""),
            role=Role(id=int(data.get("role", 0)), name=data.get("role_name", "")),
            auth_source=auth_source,
            department=data.get("department"),
            employee_id=data.get("employee_id"),
            warehouse_id=data.get("warehouse_id"),
            photo_url=data.get("photo_url"),
        )
        if variant is FederatedUser:
            return FederatedUser(
                object_id=data.get("object_id"),
                job_title=data.get("job_title"),
                mobile_phone=data.get("mobile_phone"),
                office_location=data.get("office_location"),
                **common,
            )
        return LocalUser(**common)

    @classmethod
    def from_backend(cls, payload: Dict[str, Any]) -> "UserRecord":
        """
        Normalize a backend user payload into the canonical shape.

        Accepts camelCase backend fields (roleName, authType, employeeId,
        departmentName/department, warehouseId).

        Raises:
            KeyError: If the payload has no id
            ValueError: If the payload is not a JSON object
        """
        if not isinstance(payload, dict):
            raise ValueError(f"User payload must be an object, got {type(payload).__name__}")
        auth_source = AuthSource.from_backend(payload.get("authType", payload.get("authSource")))
        warehouse_id = payload.get("warehouseId", payload.get("warehouse"))
        employee_id = payload.get("employeeId")
        common = dict(
            id=str(payload["id"]),
            name=payload.get("name") or "",
            email=payload.get("email") or "",
            role=Role(id=int(payload.get("role") or 0), name=payload.get("roleName") or ""),
            auth_source=auth_source,
            department=payload.get("departmentName") or payload.get("department"),
            employee_id=str(employee_id) if employee_id is not None else None,
            warehouse_id=int(warehouse_id) if warehouse_id is not None else None,
            photo_url=payload.get("photoUrl"),
        )
        if auth_source == AuthSource.LOCAL:
            return LocalUser(**common)
        return FederatedUser(object_id=payload.get("objectId"), **common)


@dataclass(frozen=True)
class LocalUser(UserRecord):
    """Email/password account. Carries only the canonical fields."""


@dataclass(frozen=True)
class FederatedUser(UserRecord):
    """Account linked to the identity provider (authType federated or both)."""
    object_id: Optional[str] = None
    job_title: Optional[str] = None
    mobile_phone: Optional[str] = None
    office_location: Optional[str] = None

    def with_profile(self, profile: Optional["Profile"]) -> "FederatedUser":
        """Merge provider profile fields, keeping backend values where present."""
        if profile is None:
            return self
        return replace(
            self,
            object_id=self.object_id or profile.id or None,
            job_title=profile.job_title or self.job_title,
            mobile_phone=profile.mobile_phone or self.mobile_phone,
            office_location=profile.office_location or self.office_location,
            department=self.department or profile.department,
        )

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data.update({
            "object_id": self.object_id,
            "job_title": self.job_title,
            "mobile_phone": self.mobile_phone,
            "office_location": self.office_location,
        })
        return data


@dataclass(frozen=True)
class Profile:
    """Extended profile returned by the profile enrichment client."""
    id: str = ""
    display_name: str = ""
    mail: str = ""
    user_principal_name: str = ""
    job_title: Optional[str] = None
    mobile_phone: Optional[str] = None
    office_location: Optional[str] = None
    department: Optional[str] = None

    @property
    def email(self) -> str:
        """Mail, falling back to the user principal name."""
        return self.mail or self.user_principal_name

    @classmethod
    def from_graph(cls, data: Dict[str, Any]) -> "Profile":
        """Deserialize a Graph /me payload."""
        return cls(
            id=data.get("id") or "",
            display_name=data.get("displayName") or "",
            mail=data.get("mail") or "",
            user_principal_name=data.get("userPrincipalName") or "",
            job_title=data.get("jobTitle"),
            mobile_phone=data.get("mobilePhone"),
            office_location=data.get("officeLocation"),
            department=data.get("department"),
        )
