"""Entry points: Markdown text or token dicts to display nodes."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from md_nodes.block import render_document
from md_nodes.config import DEFAULT_CONFIG, RenderConfig
from md_nodes.nodes import Node, to_dict
from md_nodes.parser import parse_markdown
from md_nodes.tokens import Token, tokens_from_dicts


def tokens_to_nodes(
    tokens: Iterable[Token],
    config: RenderConfig | None = None,
) -> tuple[Node, ...]:
    """Render already parsed tokens."""
    return render_document(tokens, config or DEFAULT_CONFIG)


def markdown_to_nodes(
    markdown_text: str,
    config: RenderConfig | None = None,
) -> tuple[Node, ...]:
    """Convert Markdown text to display nodes.

    Args:
        markdown_text: Input Markdown text
        config: Optional configuration for rendering (uses default if None)

    Returns:
        Top-level display nodes. Empty input gives an empty tuple.

    Examples:
        >>> nodes = markdown_to_nodes('# Title')
        >>> nodes[0].kind
        <NodeKind.HEADING: 'heading'>
        >>> nodes[0].attrs['level']
        1
    """
    config = config or DEFAULT_CONFIG

    return render_document(parse_markdown(markdown_text, config), config)


def marked_to_nodes(
    token_dicts: Any,
    config: RenderConfig | None = None,
) -> tuple[Node, ...]:
    """Render a marked-shaped token list (as stored in JSON bundles)."""
    return tokens_to_nodes(tokens_from_dicts(token_dicts), config)


def nodes_to_data(nodes: Iterable[Node]) -> list[Any]:
    """Serialize display nodes into JSON-ready data."""
    return [to_dict(node) for node in nodes]
