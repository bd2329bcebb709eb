"""
UI Ports - Navigation and user-visible notices.

The host application owns routing and rendering; bootstrap only
asks it to change route or show a blocking notice.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum


class NoticeKind(Enum):
    """User-visible failure notices."""
    AUTH_FAILED = "auth_failed"
    CONNECTION = "connection"


@dataclass(frozen=True)
class Notice:
    kind: NoticeKind
    message: str


class NavigatorPort(ABC):
    """Port: Application router."""

    @property
    @abstractmethod
    def current_path(self) -> str:
        """Path of the active route."""
        pass

    @abstractmethod
    def navigate(self, path: str, replace: bool = True) -> None:
        """Change route."""
        pass


class NoticePort(ABC):
    """Port: Blocking user notice (alert, toast, modal)."""

    @abstractmethod
    def notify(self, notice: Notice) -> None:
        pass
