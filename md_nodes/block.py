"""Block renderer: top-level dispatch over block tokens."""

from __future__ import annotations

from collections.abc import Iterable
import logging
from typing import assert_never

from md_nodes.code_block import present_code
from md_nodes.config import DEFAULT_CONFIG, RenderConfig
from md_nodes.inline import render_inline
from md_nodes.nodes import Child, Node, NodeKind
from md_nodes.table import build_table_model
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
    ListItem,
    Other,
    Paragraph,
    PlainText,
    Space,
    Strong,
    Table,
    Token,
)

LOGGER = logging.getLogger(__name__)


def render_blocks(
    tokens: Iterable[Token], config: RenderConfig = DEFAULT_CONFIG
) -> tuple[Node, ...]:
    """Render a sequence of block tokens.

    Tokens that render to nothing (``space``, unknown kinds without raw text)
    do not consume a key, so keys are always 0..n-1.

    Args:
        tokens: Block tokens
        config: Rendering configuration

    Returns:
        Rendered nodes in source order
    """
    nodes: list[Node] = []
    for token in tokens:
        node = render_block(token, len(nodes), config)
        if node is not None:
            nodes.append(node)
    return tuple(nodes)


def render_document(
    tokens: Iterable[Token], config: RenderConfig = DEFAULT_CONFIG
) -> tuple[Node, ...]:
    """Render a whole document's top-level tokens."""
    nodes = render_blocks(tokens, config)
    LOGGER.debug('Rendered document into %d nodes', len(nodes))
    return nodes


def render_block(token: Token, key: int, config: RenderConfig = DEFAULT_CONFIG) -> Node | None:
    """Render one block token.

    Args:
        token: Block token
        key: Key of the node within its parent
        config: Rendering configuration

    Returns:
        Rendered node, or None for tokens that have no visual output
    """
    match token:
        case Blockquote(tokens=children):
            return Node(
                kind=NodeKind.BLOCKQUOTE, key=key, children=render_blocks(children, config)
            )
        case Code(text=text, lang=lang):
            return present_code(text, lang, key, config)
        case Heading(depth=depth, tokens=children):
            return Node(
                kind=NodeKind.HEADING,
                key=key,
                children=tuple(render_inline(children, config)),
                attrs={'level': depth},
            )
        case Hr():
            return Node(kind=NodeKind.DIVIDER, key=key)
        case Html(text=text):
            # Injected verbatim, sanitization is up to the document source
            return Node(kind=NodeKind.RAW_HTML, key=key, content=text)
        case List():
            return _render_list(token, key, config)
        case Paragraph(tokens=children):
            return Node(
                kind=NodeKind.PARAGRAPH, key=key, children=tuple(render_inline(children, config))
            )
        case Space():
            return None
        case Table(align=align, header=header, rows=rows):
            model = build_table_model(header, align, rows, config)
            return Node(kind=NodeKind.TABLE, key=key, attrs={'model': model})
        case (
            Other()
            | PlainText()
            | FormattedText()
            | Strong()
            | Em()
            | Del()
            | Codespan()
            | Link()
            | Image()
            | Escape()
            | Br()
        ):
            # Unknown kinds and inline tokens in block position
            if token.raw:
                return Node(kind=NodeKind.RAW, key=key, content=token.raw)
            return None
        case _:
            assert_never(token)


def _render_list(token: List, key: int, config: RenderConfig) -> Node:
    attrs: dict[str, object] = {}
    if token.ordered:
        attrs['start'] = 1 if token.start is None else token.start
    return Node(
        kind=NodeKind.ORDERED_LIST if token.ordered else NodeKind.UNORDERED_LIST,
        key=key,
        children=tuple(_render_list_item(item, i, config) for i, item in enumerate(token.items)),
        attrs=attrs,
    )


def _render_list_item(item: ListItem, key: int, config: RenderConfig) -> Node:
    """Render a list item.

    Text with nested inline tokens (how tight list items arrive) is rendered
    inline in place, without a paragraph around it.
    """
    children: list[Child] = []
    next_key = 0
    for child in item.tokens:
        if isinstance(child, FormattedText) and child.tokens:
            for inline in render_inline(child.tokens, config, start=next_key):
                children.append(inline)
                if isinstance(inline, Node):
                    next_key += 1
            continue

        node = render_block(child, next_key, config)
        if node is not None:
            children.append(node)
            next_key += 1

    attrs = {'checked': item.checked} if item.task else {}
    return Node(kind=NodeKind.LIST_ITEM, key=key, children=tuple(children), attrs=attrs)
