"""
HTML component - Markup, URL and table building.
"""

from ._impl import (
    HtmlTable,
    HtmlTableRow,
    HtmlWriter,
    PixIcon,
    Url,
    empty_tag,
    end_tag,
    escape,
    format_string,
    link,
    render_table,
    start_tag,
    tag,
)

__all__ = [
    "HtmlTable",
    "HtmlTableRow",
    "HtmlWriter",
    "PixIcon",
    "Url",
    "empty_tag",
    "end_tag",
    "escape",
    "format_string",
    "link",
    "render_table",
    "start_tag",
    "tag",
]
