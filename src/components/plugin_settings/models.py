"""
Plugin settings models.

Setting declarations mirror the host admin framework: each entry has a
full name ("plugin/key" or a bare core key), a label, a description and a
default. Stored values are always strings.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, ClassVar, Literal

from src.components.strings import LazyString

Label = str | LazyString

# --- Parameter Types ---

PARAM_RAW = "raw"
PARAM_TEXT = "text"
PARAM_NOTAGS = "notags"
PARAM_EMAIL = "email"
PARAM_INT = "int"

ParamType = Literal["raw", "text", "notags", "email", "int"]

HideCondition = Literal["notchecked", "checked", "eq", "neq"]


# --- Errors ---


class DuplicateSettingError(ValueError):
    """Raised when a setting name is registered twice."""


class UnknownSettingError(KeyError):
    """Raised when a setting name is not registered on the page."""


@dataclass(frozen=True)
class SettingValidationError:
    """Validation error with actionable message."""

    field: str
    code: str
    message: str


# --- Settings ---


@dataclass
class AdminSetting:
    """Base declaration shared by every setting kind."""

    kind: ClassVar[str] = "setting"
    writable: ClassVar[bool] = True

    name: str
    visiblename: Label
    description: Label

    @property
    def plugin(self) -> str | None:
        if "/" in self.name:
            return self.name.split("/", 1)[0]
        return None

    @property
    def key(self) -> str:
        return self.name.split("/", 1)[-1]

    def default_value(self) -> str | None:
        return None


@dataclass
class ConfigText(AdminSetting):
    kind: ClassVar[str] = "text"

    default: Label = ""
    paramtype: ParamType = PARAM_RAW
    size: int | None = None

    def default_value(self) -> str:
        return str(self.default)


@dataclass
class ConfigCheckbox(AdminSetting):
    kind: ClassVar[str] = "checkbox"

    default: int | str = 0
    yes: str = "1"
    no: str = "0"

    def default_value(self) -> str:
        return self.yes if str(self.default) == self.yes else self.no


@dataclass
class ConfigMultiSelect(AdminSetting):
    kind: ClassVar[str] = "multiselect"

    default: list[str] = field(default_factory=list)
    choices: dict[str, Label] = field(default_factory=dict)

    def default_value(self) -> str:
        return ",".join(str(key) for key in self.default)


@dataclass
class Heading(AdminSetting):
    """Section heading; carries markup in its description, stores nothing."""

    kind: ClassVar[str] = "heading"
    writable: ClassVar[bool] = False


@dataclass(frozen=True)
class HideIfRule:
    """Hide `dependent` depending on the stored value of `dependenton`."""

    dependent: str
    dependenton: str
    condition: HideCondition = "notchecked"
    value: str = "1"

    def applies(self, current: Any) -> bool:
        current = "" if current is None else str(current)
        if self.condition == "notchecked":
            return current != "1"
        if self.condition == "checked":
            return current == "1"
        if self.condition == "eq":
            return current == self.value
        return current != self.value


@dataclass(frozen=True)
class SettingView:
    """Rendered view of a setting for admin clients."""

    name: str
    kind: str
    visiblename: str
    description: str
    default: str | None
    value: str | None
    hidden: bool
    choices: dict[str, str] = field(default_factory=dict)
