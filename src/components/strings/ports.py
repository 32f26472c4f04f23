"""
Strings component port definitions.
"""

from __future__ import annotations

from typing import Any, Protocol


class StringsPort(Protocol):
    """Localized string lookup."""

    def get_string(self, identifier: str, component: str = "facetoface", a: Any = None) -> str:
        """Resolve a string identifier for the current language."""
        ...
