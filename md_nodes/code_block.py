"""Code block presenter."""

from __future__ import annotations

from md_nodes.clipboard import Clipboard
from md_nodes.config import DEFAULT_CONFIG, RenderConfig
from md_nodes.nodes import Node, NodeKind


def present_code(
    text: str,
    lang: str | None,
    key: int,
    config: RenderConfig = DEFAULT_CONFIG,
) -> Node:
    """Package code text and its language for display.

    The text is kept verbatim: no escaping and no highlighting.

    Args:
        text: Raw code text
        lang: Language tag, falls back to ``config.default_code_language``
        key: Key of the node within its parent
        config: Rendering configuration

    Returns:
        Code block node with a label child and a code child
    """
    language = lang or config.default_code_language
    return Node(
        kind=NodeKind.CODE_BLOCK,
        key=key,
        children=(
            Node(kind=NodeKind.CODE_LABEL, key=0, content=language),
            Node(kind=NodeKind.CODE, key=1, content=text),
        ),
        attrs={'language': language, 'text': text},
    )


def copy_code(node: Node, clipboard: Clipboard) -> bool:
    """Copy a code block's raw text through the clipboard collaborator.

    Returns:
        Clipboard result; False for nodes that are not code blocks
    """
    if node.kind is not NodeKind.CODE_BLOCK:
        return False
    return clipboard.copy(node.attrs.get('text', ''))
