"""Embeddable components available to documents as JSX-style tags."""

from __future__ import annotations

import html
import re
from typing import Any, Callable, Dict, Mapping

Component = Callable[..., str]

COMPONENT_TAG = re.compile(r"^\s*<([A-Z][A-Za-z0-9]*)((?:\s+[^<>]*?)?)\s*/>\s*$", re.DOTALL)
_PROP = re.compile(
    r"""([A-Za-z_:][\w:.-]*)(?:\s*=\s*(?:"([^"]*)"|'([^']*)'|\{([^}]*)\}))?"""
)


def _expression_value(expression: str) -> Any:
    """Evaluate the small subset of JSX expressions documents use in props."""
    value = expression.strip()
    if len(value) >= 2 and value[0] == value[-1] and value[0] in "\"'`":
        return value[1:-1]
    if value in {"true", "false"}:
        return value == "true"
    try:
        return int(value)
    except ValueError:
        pass
    try:
        return float(value)
    except ValueError:
        return value


def parse_props(source: str) -> Dict[str, Any]:
    """Parse tag attributes into component props.

    ``a="x"`` and ``a='x'`` give strings, ``a={...}`` a literal value and a
    bare ``a`` gives ``True``.
    """
    props: Dict[str, Any] = {}
    for match in _PROP.finditer(source):
        name, double, single, expression = match.groups()
        if double is not None:
            props[name] = double
        elif single is not None:
            props[name] = single
        elif expression is not None:
            props[name] = _expression_value(expression)
        else:
            props[name] = True
    return props


def match_component(source: str, components: Mapping[str, Component]) -> tuple[str, Dict[str, Any]] | None:
    """Return ``(name, props)`` if ``source`` is a self-closing registered component tag."""
    match = COMPONENT_TAG.match(source)
    if match is None or match.group(1) not in components:
        return None
    return match.group(1), parse_props(match.group(2))


def _attrs(**values: Any) -> str:
    parts = [
        f'{name}="{html.escape(str(value), quote=True)}"'
        for name, value in values.items()
        if value is not None and value is not False
    ]
    return " ".join(parts)


def image(src: str = "", alt: str = "", title: str | None = None, width: Any = None, height: Any = None, **_: Any) -> str:
    img = f"<img {_attrs(src=src, alt=alt, width=width, height=height, loading='lazy')} />"
    if not title:
        return f'<figure class="image">{img}</figure>'
    return f'<figure class="image">{img}<figcaption>{html.escape(str(title))}</figcaption></figure>'


def callout(text: str = "", type: str = "note", **_: Any) -> str:
    return f'<aside class="callout callout-{html.escape(str(type))}">{html.escape(str(text))}</aside>'


DEFAULT_COMPONENTS: Dict[str, Component] = {
    "Image": image,
    "Callout": callout,
}
