"""Document compiler: front matter + markdown body with embedded components.

Uses markdown-it-py for parsing and rendering, mdit-py-plugins for front
matter and heading anchors, and PyYAML for the metadata block.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, MutableMapping, Protocol, Sequence

import yaml
from markdown_it import MarkdownIt
from markdown_it.rules_block import StateBlock
from markdown_it.rules_core import StateCore
from markdown_it.token import Token
from markdown_it.tree import SyntaxTreeNode
from mdit_py_plugins.front_matter import front_matter_plugin

from docfetch.compiler.components import Component, match_component
from docfetch.compiler.transforms import Transform

LOGGER = logging.getLogger(__name__)


class CompileError(ValueError):
    """Raised when a document cannot be split into metadata and body."""


@dataclass(slots=True)
class RenderedBody:
    """Renderable body of a compiled document."""

    tokens: List[Token]
    html: str

    def tree(self) -> SyntaxTreeNode:
        return SyntaxTreeNode(self.tokens)


@dataclass(slots=True)
class CompileResult:
    frontmatter: Dict[str, Any] = field(default_factory=dict)
    body: RenderedBody = field(default_factory=lambda: RenderedBody(tokens=[], html=""))


class DocumentCompiler(Protocol):
    def compile(
        self,
        source: str,
        *,
        components: Mapping[str, Component],
        transforms: Sequence[Transform],
    ) -> CompileResult: ...


_TIMESTAMP_TAG = "tag:yaml.org,2002:timestamp"


class _FrontMatterLoader(yaml.SafeLoader):
    """SafeLoader that keeps unquoted dates and times as the declared text."""


_FrontMatterLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag != _TIMESTAMP_TAG]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


def _load_front_matter(source: str) -> Dict[str, Any]:
    try:
        data = yaml.load(source, Loader=_FrontMatterLoader)
    except (yaml.YAMLError, ValueError) as exc:
        # constructors such as an explicit !!timestamp raise plain ValueError
        raise CompileError(f"Invalid front matter: {exc}") from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise CompileError(f"Front matter must be a mapping, got {type(data).__name__}")
    return data


def _component_plugin(md: MarkdownIt, components: Mapping[str, Component]) -> None:
    """Turn self-closing tags naming a registered component into ``component`` tokens.

    A tag alone on a line is a block component, even when text follows on the
    next line; a tag inside a paragraph is an inline component.
    """

    def _block_rule(state: StateBlock, startLine: int, endLine: int, silent: bool) -> bool:
        if state.sCount[startLine] - state.blkIndent >= 4:
            return False
        line = state.src[state.bMarks[startLine] + state.tShift[startLine] : state.eMarks[startLine]]
        found = match_component(line, components)
        if found is None:
            return False
        if silent:
            return True
        name, props = found
        token = state.push("component", "", 0)
        token.map = [startLine, startLine + 1]
        token.content = line
        token.meta = {"name": name, "props": props}
        state.line = startLine + 1
        return True

    def _inline_rule(state: StateCore) -> None:
        for token in state.tokens:
            if token.type != "inline" or not token.children:
                continue
            for child in token.children:
                if child.type != "html_inline":
                    continue
                found = match_component(child.content, components)
                if found is not None:
                    child.type = "component"
                    child.meta = {"name": found[0], "props": found[1]}

    def _render(self: Any, tokens: Sequence[Token], idx: int, options: Any, env: MutableMapping) -> str:
        token = tokens[idx]
        rendered = components[token.meta["name"]](**token.meta["props"])
        return rendered + "\n" if token.block else rendered

    md.block.ruler.before(
        "html_block",
        "component_block",
        _block_rule,
        {"alt": ["paragraph", "reference", "blockquote"]},
    )
    md.core.ruler.push("components", _inline_rule)
    md.add_render_rule("component", _render)


class MdxCompiler:
    """Compile MDX-style posts into front matter and rendered HTML."""

    def _build_parser(
        self, components: Mapping[str, Component], transforms: Sequence[Transform]
    ) -> MarkdownIt:
        md = MarkdownIt("commonmark").enable(["table", "strikethrough"])
        md.use(front_matter_plugin)
        _component_plugin(md, components)
        for transform in transforms:
            transform(md)
        return md

    def compile(
        self,
        source: str,
        *,
        components: Mapping[str, Component],
        transforms: Sequence[Transform],
    ) -> CompileResult:
        md = self._build_parser(components, transforms)
        env: Dict[str, Any] = {}
        tokens = md.parse(source, env)

        frontmatter: Dict[str, Any] = {}
        body_tokens: List[Token] = []
        for token in tokens:
            if token.type == "front_matter":
                frontmatter = _load_front_matter(token.content)
            else:
                body_tokens.append(token)

        html = md.renderer.render(body_tokens, md.options, env)
        LOGGER.debug("Compiled document with %d body tokens", len(body_tokens))
        return CompileResult(frontmatter=frontmatter, body=RenderedBody(tokens=body_tokens, html=html))
