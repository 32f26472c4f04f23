"""
StringManager - Localized string lookup.

Loads a YAML string catalog per language and resolves identifiers by
component, substituting {$a} and {$a->key} placeholders.

Key behaviors:
- Unknown identifiers render as [[identifier]] and log a warning
- LazyString defers the lookup until the value is rendered
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger(__name__)

LANG_DIR = Path(__file__).parent / "lang"
DEFAULT_COMPONENT = "facetoface"

_PLACEHOLDER = re.compile(r"\{\$a(?:->(\w+))?\}")


def load_catalog(lang: str = "en", lang_dir: Path = LANG_DIR) -> dict[str, dict[str, str]]:
    """
    Load the string catalog for a language.

    Raises FileNotFoundError if the catalog is missing.
    Raises ValueError if the YAML is invalid or not a mapping of components.
    """
    path = lang_dir / f"{lang}.yaml"
    if not path.exists():
        raise FileNotFoundError(f"String catalog not found at: {path}")

    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML syntax in string catalog: {e}") from e

    if not isinstance(data, dict):
        raise ValueError(f"String catalog {path} must map components to strings")

    return {
        str(component): {str(k): "" if v is None else str(v) for k, v in (strings or {}).items()}
        for component, strings in data.items()
    }


def _substitute(template: str, a: Any) -> str:
    if a is None:
        return template

    def replace(match: re.Match[str]) -> str:
        key = match.group(1)
        if key is None:
            return str(a)
        if isinstance(a, dict):
            return str(a.get(key, match.group(0)))
        return str(getattr(a, key, match.group(0)))

    return _PLACEHOLDER.sub(replace, template)


class StringManager:
    """
    Localized string lookup.

    Implements StringsPort.
    """

    def __init__(self, catalog: dict[str, dict[str, str]]) -> None:
        self._catalog = catalog

    @classmethod
    def for_lang(cls, lang: str = "en") -> StringManager:
        return cls(load_catalog(lang))

    def string_exists(self, identifier: str, component: str = DEFAULT_COMPONENT) -> bool:
        return identifier in self._catalog.get(component, {})

    def get_string(
        self,
        identifier: str,
        component: str = DEFAULT_COMPONENT,
        a: Any = None,
    ) -> str:
        """
        Get a localized string.

        Args:
            identifier: String key within the component
            component: Catalog section ("facetoface", "core", ...)
            a: Optional placeholder value (scalar, dict or object)

        Returns:
            The resolved string, or [[identifier]] when not defined
        """
        strings = self._catalog.get(component, {})
        if identifier not in strings:
            logger.warning("Missing string %s in component %s", identifier, component)
            return f"[[{identifier}]]"
        return _substitute(strings[identifier], a)

    def lazy(
        self,
        identifier: str,
        component: str = DEFAULT_COMPONENT,
        a: Any = None,
    ) -> LazyString:
        return LazyString(self, identifier, component, a)


class LazyString:
    """A string lookup resolved when the value is rendered."""

    def __init__(
        self,
        manager: StringManager,
        identifier: str,
        component: str = DEFAULT_COMPONENT,
        a: Any = None,
    ) -> None:
        self._manager = manager
        self.identifier = identifier
        self.component = component
        self._a = a

    def __str__(self) -> str:
        return self._manager.get_string(self.identifier, self.component, self._a)

    def __repr__(self) -> str:
        return f"LazyString({self.identifier!r}, {self.component!r})"

    def __eq__(self, other: object) -> bool:
        # Equal to, and hashed as, the rendered text
        if isinstance(other, (LazyString, str)):
            return str(self) == str(other)
        return NotImplemented

    def __hash__(self) -> int:
        return hash(str(self))
