"""
HTML writer - Markup and URL building for server-rendered tables.

Key behaviors:
- Attribute values are always escaped; None attributes are skipped
- Tag contents are inserted verbatim (callers pass formatted markup)
- Tables render with positional cell classes (c0, c1, ..., lastcol)
"""

from __future__ import annotations

import html
from dataclasses import dataclass, field
from typing import Any
from urllib.parse import urlencode

# --- Escaping ---


def escape(text: Any) -> str:
    """Escape HTML special characters, quotes included."""
    return html.escape(str(text), quote=True)


def format_string(text: Any) -> str:
    """Format user-supplied text for display inside element content."""
    return html.escape(str(text), quote=False)


# --- Tags ---


def _attributes(attributes: dict[str, Any] | None) -> str:
    if not attributes:
        return ""
    parts = [
        f'{name}="{escape(value)}"'
        for name, value in attributes.items()
        if value is not None
    ]
    return (" " + " ".join(parts)) if parts else ""


def start_tag(name: str, attributes: dict[str, Any] | None = None) -> str:
    return f"<{name}{_attributes(attributes)}>"


def end_tag(name: str) -> str:
    return f"</{name}>"


def empty_tag(name: str, attributes: dict[str, Any] | None = None) -> str:
    return f"<{name}{_attributes(attributes)} />"


def tag(name: str, contents: Any, attributes: dict[str, Any] | None = None) -> str:
    return f"{start_tag(name, attributes)}{contents}{end_tag(name)}"


# --- URLs and Links ---


@dataclass
class Url:
    """Relative or absolute URL with ordered query parameters."""

    path: str
    params: dict[str, Any] = field(default_factory=dict)

    def out(self) -> str:
        if not self.params:
            return self.path
        return f"{self.path}?{urlencode({k: str(v) for k, v in self.params.items()})}"

    def __str__(self) -> str:
        return self.out()


def link(url: Url | str, text: Any, attributes: dict[str, Any] | None = None) -> str:
    attrs = {"href": str(url)}
    attrs.update(attributes or {})
    return tag("a", text, attrs)


@dataclass
class PixIcon:
    """Icon reference by key, e.g. "t/edit"."""

    key: str
    alt: str
    attributes: dict[str, Any] = field(default_factory=dict)


class HtmlWriter:
    """
    Output helpers that depend on site configuration.

    Holds the icon base URL so action icons resolve to concrete images.
    """

    def __init__(self, pix_base_url: str = "/pix") -> None:
        self._pix_base_url = pix_base_url.rstrip("/")

    def pix_url(self, key: str) -> str:
        return f"{self._pix_base_url}/{key}.svg"

    def render_icon(self, icon: PixIcon) -> str:
        attrs: dict[str, Any] = {
            "class": "icon",
            "src": self.pix_url(icon.key),
            "alt": icon.alt,
            "title": icon.alt,
        }
        attrs.update(icon.attributes)
        return empty_tag("img", attrs)

    def action_icon(
        self,
        url: Url | str,
        icon: PixIcon,
        attributes: dict[str, Any] | None = None,
    ) -> str:
        """Render an icon wrapped in a link."""
        return link(url, self.render_icon(icon), attributes)


# --- Tables ---


@dataclass
class HtmlTableRow:
    cells: list[Any] = field(default_factory=list)
    attributes: dict[str, Any] = field(default_factory=dict)


@dataclass
class HtmlTable:
    head: list[Any] = field(default_factory=list)
    data: list[HtmlTableRow | list[Any]] = field(default_factory=list)
    attributes: dict[str, Any] = field(default_factory=dict)


def _join_class(*names: str | None) -> str:
    return " ".join(name for name in names if name)


def _cell_class(base: str, index: int, count: int) -> str:
    return _join_class(base, f"c{index}", "lastcol" if index == count - 1 else None)


def render_table(table: HtmlTable) -> str:
    """
    Render a table.

    Header cells and row cells are inserted verbatim.
    """
    attrs = dict(table.attributes)
    attrs["class"] = _join_class("generaltable", attrs.get("class"))

    parts = [start_tag("table", attrs)]

    if table.head:
        count = len(table.head)
        header_cells = "".join(
            tag("th", heading, {"class": _cell_class("header", i, count), "scope": "col"})
            for i, heading in enumerate(table.head)
        )
        parts.append(tag("thead", tag("tr", header_cells)))

    parts.append(start_tag("tbody"))
    for row_index, row in enumerate(table.data):
        if not isinstance(row, HtmlTableRow):
            row = HtmlTableRow(cells=list(row))
        row_attrs = dict(row.attributes)
        is_last = row_index == len(table.data) - 1
        row_class = _join_class(row_attrs.get("class"), "lastrow" if is_last else None)
        row_attrs["class"] = row_class or None

        count = len(row.cells)
        cells = "".join(
            tag("td", cell, {"class": _cell_class("cell", i, count)})
            for i, cell in enumerate(row.cells)
        )
        parts.append(tag("tr", cells, row_attrs))
    parts.append(end_tag("tbody"))

    parts.append(end_tag("table"))
    return "".join(parts)
