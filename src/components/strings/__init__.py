"""
Strings component - Localized string lookup.
"""

from ._impl import (
    DEFAULT_COMPONENT,
    LANG_DIR,
    LazyString,
    StringManager,
    load_catalog,
)
from .ports import StringsPort

__all__ = [
    "DEFAULT_COMPONENT",
    "LANG_DIR",
    "LazyString",
    "StringManager",
    "StringsPort",
    "load_catalog",
]
