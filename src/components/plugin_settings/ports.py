"""
Plugin settings port definitions.
"""

from __future__ import annotations

from typing import Protocol

from src.domain.entities import CustomField, ProfileField, Role, SiteNotice


class ConfigRepoPort(Protocol):
    """Repository interface for stored plugin configuration."""

    def get_all(self) -> dict[str, str]:
        """Get all stored values keyed by full setting name."""
        ...

    def save(self, values: dict[str, str]) -> dict[str, str]:
        """Upsert the given values and return the full stored mapping."""
        ...

    def clear(self) -> None:
        """Remove all stored values."""
        ...


class RoleProviderPort(Protocol):
    def get_all_roles(self) -> list[Role]:
        ...


class ProfileFieldProviderPort(Protocol):
    def get_custom_profile_fields(self) -> list[ProfileField]:
        ...


class CustomFieldProviderPort(Protocol):
    def get_customfields(self) -> list[CustomField]:
        ...


class SiteNoticeProviderPort(Protocol):
    def get_sitenotices(self) -> list[SiteNotice]:
        ...
