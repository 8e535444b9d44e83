"""Markdown token tree to display node converter.

This module renders parsed Markdown (Mistune AST, or marked-shaped token dicts
from a documentation bundle) into an immutable tree of typed display nodes for
a presentation layer.

Example:
    >>> from md_nodes import markdown_to_nodes
    >>> nodes = markdown_to_nodes('**Bold** and *italic* text')
    >>> nodes[0].kind
    <NodeKind.PARAGRAPH: 'paragraph'>
    >>> nodes[0].children[0].kind
    <NodeKind.STRONG: 'strong'>
"""

from md_nodes.config import DEFAULT_CONFIG, RenderConfig
from md_nodes.converter import markdown_to_nodes, marked_to_nodes, tokens_to_nodes
from md_nodes.nodes import Node, NodeKind

__version__ = '0.1.0'

__all__ = [
    'markdown_to_nodes',
    'marked_to_nodes',
    'tokens_to_nodes',
    'Node',
    'NodeKind',
    'RenderConfig',
    'DEFAULT_CONFIG',
]
