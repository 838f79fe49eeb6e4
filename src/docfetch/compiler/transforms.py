"""Post-processing transforms applied to the markdown parser.

Each transform receives the ``MarkdownIt`` instance and registers rules or
options on it, the same way markdown-it plugins do.
"""

from __future__ import annotations

import logging
from typing import Callable, Sequence

from markdown_it import MarkdownIt
from markdown_it.rules_core import StateCore
from markdown_it.token import Token
from mdit_py_plugins.anchors import anchors_plugin
from pygments import highlight
from pygments.formatters import HtmlFormatter
from pygments.lexers import get_lexer_by_name
from pygments.util import ClassNotFound

LOGGER = logging.getLogger(__name__)

Transform = Callable[[MarkdownIt], None]

_FORMATTER = HtmlFormatter(nowrap=True)


def _highlight(code: str, lang: str, attrs: str) -> str:
    if not lang:
        return ""
    try:
        lexer = get_lexer_by_name(lang)
    except ClassNotFound:
        LOGGER.debug("No lexer for language %r, leaving code block plain", lang)
        return ""
    return highlight(code, lexer, _FORMATTER)


def highlight_code(md: MarkdownIt) -> None:
    """Highlight fenced code blocks with Pygments."""
    md.options["highlight"] = _highlight


def heading_slugs(md: MarkdownIt) -> None:
    """Give every heading an ``id`` slug."""
    anchors_plugin(md, min_level=1, max_level=6)


def _autolink_rule(state: StateCore) -> None:
    tokens = state.tokens
    for idx, token in enumerate(tokens):
        if token.type != "heading_open":
            continue
        slug = token.attrGet("id")
        inline = tokens[idx + 1] if idx + 1 < len(tokens) else None
        if not slug or inline is None or inline.type != "inline":
            continue
        children = inline.children or []
        if any(child.type == "link_open" for child in children):
            # <a> elements cannot nest
            continue
        link_open = Token("link_open", "a", 1)
        link_open.attrSet("href", f"#{slug}")
        inline.children = [link_open, *children, Token("link_close", "a", -1)]


def autolink_headings(md: MarkdownIt) -> None:
    """Wrap heading content in a link to its own slug.

    Runs after ``heading_slugs``; headings without an ``id`` or that already
    contain a link are left alone.
    """
    if "anchor" in md.core.ruler.get_all_rules():
        md.core.ruler.after("anchor", "autolink_headings", _autolink_rule)
    else:
        md.core.ruler.push("autolink_headings", _autolink_rule)


DEFAULT_TRANSFORMS: Sequence[Transform] = (highlight_code, heading_slugs, autolink_headings)
