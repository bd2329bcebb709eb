"""
Memory Navigator Adapter - Records route changes (testing and headless use).
"""

from typing import List
from mro_auth.ports.ui_port import NavigatorPort


class MemoryNavigatorAdapter(NavigatorPort):
    """Router stand-in that records every navigate() call."""

    def __init__(self, path: str = "/"):
        self._path = path
        self.visited: List[str] = []

    @property
    def current_path(self) -> str:
        return self._path

    def navigate(self, path: str, replace: bool = True) -> None:
        self._path = path
        self.visited.append(path)

    def go(self, path: str) -> None:
        """Simulate a user-initiated route change (not recorded)."""
        self._path = path
