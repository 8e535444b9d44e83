"""Output display nodes produced by the renderers."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import StrEnum
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, TypeAlias

if TYPE_CHECKING:
    from md_nodes.table import TableModel


class NodeKind(StrEnum):
    """Kinds of display nodes understood by the presentation layer."""

    # Block level
    BLOCKQUOTE = 'blockquote'
    CODE_BLOCK = 'code_block'
    CODE_LABEL = 'code_label'
    CODE = 'code'
    HEADING = 'heading'
    DIVIDER = 'divider'
    RAW_HTML = 'raw_html'
    ORDERED_LIST = 'ordered_list'
    UNORDERED_LIST = 'unordered_list'
    LIST_ITEM = 'list_item'
    PARAGRAPH = 'paragraph'
    TABLE = 'table'
    RAW = 'raw'

    # Inline level
    LINE_BREAK = 'line_break'
    INLINE_CODE = 'inline_code'
    STRIKETHROUGH = 'strikethrough'
    EMPHASIS = 'emphasis'
    STRONG = 'strong'
    IMAGE = 'image'
    LINK = 'link'
    SPAN = 'span'


@dataclass(frozen=True)
class Node:
    """One node of the display tree.

    Nodes are created once per render and never mutated afterwards.

    Attributes:
        kind: Node kind
        key: Index among the nodes emitted for the same parent
        content: Primitive content for leaf nodes (code text, raw markup, ...)
        children: Child nodes; plain strings stand for text runs
        attrs: Kind-specific metadata (heading level, link href, table model)
    """

    kind: NodeKind
    key: int
    content: str | None = None
    children: tuple[Child, ...] = ()
    attrs: Mapping[str, Any] = field(default_factory=dict, hash=False)

    def __post_init__(self) -> None:
        # Read-only copy, callers may keep mutating the dict they passed
        object.__setattr__(self, 'attrs', MappingProxyType(dict(self.attrs)))


Child: TypeAlias = Node | str


def to_dict(node: Child) -> dict[str, Any] | str:
    """Convert a node into JSON-ready data.

    Table cells are rendered through the table model at this point, so the
    result is fully materialized.

    Args:
        node: Node or text run

    Returns:
        Plain dict (or the string itself for text runs)
    """
    if isinstance(node, str):
        return node

    data: dict[str, Any] = {'kind': node.kind.value, 'key': node.key}
    if node.content is not None:
        data['content'] = node.content

    attrs = dict(node.attrs)
    model: TableModel | None = attrs.pop('model', None)
    if attrs:
        data['attrs'] = attrs
    if model is not None:
        data['table'] = model.to_dict()
    if node.children:
        data['children'] = [to_dict(child) for child in node.children]
    return data
