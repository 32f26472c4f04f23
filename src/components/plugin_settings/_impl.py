"""
Plugin settings registry and configuration service.

Provides the admin settings page registry (declaration order, visibility
dependencies), parameter cleaning, per-setting write validation and a
service that reads and updates stored configuration.

Key behaviors:
- GET always returns a value for every writable setting (defaults fill gaps)
- PUT validates every submitted key before anything is persisted
- Multi-select writes silently drop keys that are not valid choices
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterator, Mapping
from typing import Any

from .models import (
    PARAM_EMAIL,
    PARAM_INT,
    PARAM_NOTAGS,
    PARAM_RAW,
    PARAM_TEXT,
    AdminSetting,
    ConfigCheckbox,
    ConfigMultiSelect,
    ConfigText,
    DuplicateSettingError,
    HideCondition,
    HideIfRule,
    SettingValidationError,
    SettingView,
    UnknownSettingError,
)
from .ports import ConfigRepoPort

logger = logging.getLogger(__name__)

# --- Parameter Cleaning ---

_TAG = re.compile(r"<[^>]*>")
_MULTILANG_TAG = re.compile(r"</?span(\s+(lang|class)=\"[^\"]*\")*\s*>", re.IGNORECASE)
_EMAIL = re.compile(r"^[A-Za-z0-9.!#$%&'*+/=?^_`{|}~-]+@[A-Za-z0-9-]+(\.[A-Za-z0-9-]+)+$")


def _strip_tags(value: str, keep_multilang: bool = False) -> str:
    def replace(match: re.Match[str]) -> str:
        if keep_multilang and _MULTILANG_TAG.fullmatch(match.group(0)):
            return match.group(0)
        return ""

    return _TAG.sub(replace, value)


def validate_email(value: str) -> bool:
    return bool(_EMAIL.match(value))


def clean_param(value: Any, paramtype: str) -> Any:
    """
    Clean a submitted value for the given parameter type.

    Raises ValueError for an unknown parameter type.
    """
    if paramtype == PARAM_RAW:
        return value
    if paramtype == PARAM_INT:
        try:
            return int(str(value).strip())
        except ValueError:
            return 0

    text = "" if value is None else str(value)
    if paramtype == PARAM_TEXT:
        return _strip_tags(text, keep_multilang=True)
    if paramtype == PARAM_NOTAGS:
        return _strip_tags(text)
    if paramtype == PARAM_EMAIL:
        text = text.strip()
        return text if validate_email(text) else ""

    raise ValueError(f"Unknown parameter type: {paramtype}")


# --- Writing ---


def _invalid(setting: AdminSetting, code: str, message: str) -> SettingValidationError:
    return SettingValidationError(field=setting.name, code=code, message=message)


def write_setting(
    setting: AdminSetting,
    data: Any,
) -> tuple[str | None, SettingValidationError | None]:
    """
    Convert submitted data into the stored value for a setting.

    Returns:
        Tuple of (stored_value, error). Exactly one of them is None,
        except for headings which store nothing and never fail.
    """
    if isinstance(setting, ConfigText):
        if isinstance(data, (list, dict)):
            return None, _invalid(setting, "invalid_type", f"Field '{setting.name}' must be text")
        text = "" if data is None else str(data)
        if setting.paramtype == PARAM_RAW:
            return text, None
        cleaned = clean_param(text, setting.paramtype)
        if str(cleaned) != text:
            return None, _invalid(
                setting,
                "invalid_value",
                f"Field '{setting.name}' is not a valid {setting.paramtype} value",
            )
        return text, None

    if isinstance(setting, ConfigCheckbox):
        checked = str(data).strip().lower() in (setting.yes, "true", "on", "yes")
        return (setting.yes if checked else setting.no), None

    if isinstance(setting, ConfigMultiSelect):
        if data is None:
            selected: list[Any] = []
        elif isinstance(data, str):
            selected = [part for part in data.split(",") if part]
        elif isinstance(data, (list, tuple, set)):
            selected = list(data)
        else:
            return None, _invalid(
                setting, "invalid_type", f"Field '{setting.name}' must be a list of choices"
            )
        keys = {str(key) for key in setting.choices}
        kept = [str(item) for item in selected if str(item) in keys]
        if len(kept) != len(selected):
            logger.warning("Dropped unknown choices for %s", setting.name)
        return ",".join(kept), None

    return None, None


# --- Settings Page ---


class AdminSettingsPage:
    """
    Ordered registry of settings for one admin page.

    Settings keep their registration order; visibility dependencies are
    recorded with hide_if and evaluated against stored values.
    """

    def __init__(self, name: str, visiblename: str = "") -> None:
        self.name = name
        self.visiblename = visiblename or name
        self._settings: dict[str, AdminSetting] = {}
        self._hide_rules: list[HideIfRule] = []

    def add(self, setting: AdminSetting) -> AdminSetting:
        if setting.name in self._settings:
            raise DuplicateSettingError(f"Setting already registered: {setting.name}")
        self._settings[setting.name] = setting
        return setting

    def get(self, name: str) -> AdminSetting:
        try:
            return self._settings[name]
        except KeyError:
            raise UnknownSettingError(name) from None

    def __contains__(self, name: object) -> bool:
        return name in self._settings

    def __iter__(self) -> Iterator[AdminSetting]:
        return iter(self._settings.values())

    def __len__(self) -> int:
        return len(self._settings)

    def names(self) -> list[str]:
        return list(self._settings)

    def hide_if(
        self,
        dependent: str,
        dependenton: str,
        condition: HideCondition = "notchecked",
        value: str = "1",
    ) -> HideIfRule:
        """Hide `dependent` while `dependenton` meets `condition`."""
        self.get(dependent)
        self.get(dependenton)
        rule = HideIfRule(dependent, dependenton, condition, value)
        self._hide_rules.append(rule)
        return rule

    @property
    def hide_rules(self) -> list[HideIfRule]:
        return list(self._hide_rules)

    def defaults(self) -> dict[str, str]:
        """Default stored value for every writable setting."""
        return {
            setting.name: value
            for setting in self
            if setting.writable and (value := setting.default_value()) is not None
        }

    def is_hidden(self, name: str, values: Mapping[str, Any] | None = None) -> bool:
        self.get(name)
        current = self.defaults()
        current.update(values or {})
        return any(
            rule.applies(current.get(rule.dependenton))
            for rule in self._hide_rules
            if rule.dependent == name
        )

    def describe(self, values: Mapping[str, Any] | None = None) -> list[SettingView]:
        current = self.defaults()
        current.update(values or {})
        views = []
        for setting in self:
            choices = {}
            if isinstance(setting, ConfigMultiSelect):
                choices = {str(k): str(v) for k, v in setting.choices.items()}
            views.append(
                SettingView(
                    name=setting.name,
                    kind=setting.kind,
                    visiblename=str(setting.visiblename),
                    description=str(setting.description),
                    default=setting.default_value(),
                    value=current.get(setting.name) if setting.writable else None,
                    hidden=self.is_hidden(setting.name, current),
                    choices=choices,
                )
            )
        return views


# --- Config Service ---


class PluginConfigService:
    """
    Plugin configuration service.

    Provides:
    - Get stored configuration with defaults filled in
    - Update configuration with per-setting validation
    - Reset to declared defaults
    """

    def __init__(self, page: AdminSettingsPage, repo: ConfigRepoPort) -> None:
        """
        Initialize config service.

        Args:
            page: Declared settings
            repo: Stored configuration repository
        """
        self._page = page
        self._repo = repo

    @property
    def page(self) -> AdminSettingsPage:
        return self._page

    def get(self) -> dict[str, str]:
        """Current configuration. Always returns a value for every writable setting."""
        values = self._page.defaults()
        stored = self._repo.get_all()
        values.update({k: v for k, v in stored.items() if k in values})
        return values

    def update(
        self,
        updates: dict[str, Any],
    ) -> tuple[dict[str, str], list[SettingValidationError]]:
        """
        Update configuration.

        Returns:
            Tuple of (configuration, validation_errors).
            If validation_errors is non-empty, nothing was saved.
        """
        errors: list[SettingValidationError] = []
        to_save: dict[str, str] = {}

        for name, data in updates.items():
            if name not in self._page:
                errors.append(
                    SettingValidationError(
                        field=name,
                        code="unknown_setting",
                        message=f"Setting '{name}' does not exist",
                    )
                )
                continue

            setting = self._page.get(name)
            if not setting.writable:
                errors.append(
                    SettingValidationError(
                        field=name,
                        code="not_writable",
                        message=f"Setting '{name}' cannot be changed",
                    )
                )
                continue

            value, error = write_setting(setting, data)
            if error is not None:
                errors.append(error)
            elif value is not None:
                to_save[name] = value

        if errors:
            logger.warning("Rejected config update: %s", ", ".join(e.field for e in errors))
            return self.get(), errors

        self._repo.save(to_save)
        logger.info("Updated plugin config: %s", ", ".join(sorted(to_save)))
        return self.get(), []

    def reset_to_defaults(self) -> dict[str, str]:
        self._repo.clear()
        self._repo.save(self._page.defaults())
        logger.info("Reset plugin config to defaults")
        return self.get()

    def describe(self) -> list[SettingView]:
        return self._page.describe(self.get())
