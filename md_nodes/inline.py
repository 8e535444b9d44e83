"""Inline renderer: inline tokens to display nodes and text runs."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import assert_never

from md_nodes.config import DEFAULT_CONFIG, RenderConfig
from md_nodes.nodes import Child, Node, NodeKind
from md_nodes.tokens import (
    Blockquote,
    Br,
    Code,
    Codespan,
    Del,
    Em,
    Escape,
    FormattedText,
    Heading,
    Hr,
    Html,
    Image,
    Link,
    List,
    Other,
    Paragraph,
    PlainText,
    Space,
    Strong,
    Table,
    Token,
)


def render_inline(
    tokens: Iterable[Token],
    config: RenderConfig = DEFAULT_CONFIG,
    start: int = 0,
) -> Iterator[Child]:
    """Render inline tokens in order.

    Text runs are yielded as plain strings, everything else as ``Node``.
    Node keys are consecutive, starting at ``start``; tokens that produce
    nothing do not consume a key.

    Args:
        tokens: Inline tokens
        config: Rendering configuration
        start: Key of the first emitted node

    Yields:
        Nodes and text runs
    """
    key = start
    for token in tokens:
        child = _render_token(token, key, config)
        if child is None:
            continue
        yield child
        if isinstance(child, Node):
            key += 1


def _wrap(kind: NodeKind, key: int, tokens: Iterable[Token], config: RenderConfig) -> Node:
    return Node(kind=kind, key=key, children=tuple(render_inline(tokens, config)))


def _render_token(token: Token, key: int, config: RenderConfig) -> Child | None:
    match token:
        case Br():
            return Node(kind=NodeKind.LINE_BREAK, key=key)
        case Codespan(text=text):
            return Node(kind=NodeKind.INLINE_CODE, key=key, content=text)
        case Del(tokens=children):
            return _wrap(NodeKind.STRIKETHROUGH, key, children, config)
        case Em(tokens=children):
            return _wrap(NodeKind.EMPHASIS, key, children, config)
        case Strong(tokens=children):
            return _wrap(NodeKind.STRONG, key, children, config)
        case Escape(text=text):
            # Already decoded by the parser
            return text
        case Image(href=href, title=title, text=alt):
            attrs = {'src': href, 'alt': alt}
            if title:
                attrs['title'] = title
            return Node(kind=NodeKind.IMAGE, key=key, attrs=attrs)
        case Link(href=href, title=title, tokens=children):
            attrs = {'href': href}
            if title:
                attrs['title'] = title
            return Node(
                kind=NodeKind.LINK,
                key=key,
                children=tuple(render_inline(children, config)),
                attrs=attrs,
            )
        case PlainText(text=text):
            return text
        case FormattedText(tokens=children):
            return _wrap(NodeKind.SPAN, key, children, config)
        case (
            Other()
            | Blockquote()
            | Code()
            | Heading()
            | Hr()
            | Html()
            | List()
            | Paragraph()
            | Space()
            | Table()
        ):
            # Unknown kinds and block tokens in inline position
            return token.raw or None
        case _:
            assert_never(token)
