"""Parse Markdown text with Mistune and convert its AST into typed tokens.

Mistune's AST is a tree of plain dicts (``{'type': ..., 'children': ...,
'attrs': ..., 'raw': ...}``). This module is the only place that knows about
that shape; everything downstream works on ``md_nodes.tokens``.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
import logging
import re
from typing import TYPE_CHECKING, Any

import mistune

from md_nodes.config import DEFAULT_CONFIG, RenderConfig
from md_nodes.tokens import (
    Blockquote,
    Br,
    Code,
    Codespan,
    Del,
    Em,
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
    TableCell,
    Token,
    clamp_depth,
    normalize_alignment,
    plain_text,
)

if TYPE_CHECKING:
    from mistune.block_parser import BlockParser
    from mistune.core import BlockState

LOGGER = logging.getLogger(__name__)


def _attrs(token: Mapping[str, Any]) -> Mapping[str, Any]:
    attrs = token.get('attrs', {})
    return attrs if isinstance(attrs, Mapping) else {}


def _raw(token: Mapping[str, Any]) -> str:
    raw = token.get('raw', '')
    return raw if isinstance(raw, str) else ''


def _child_dicts(token: Mapping[str, Any]) -> list[Mapping[str, Any]]:
    children = token.get('children', [])
    # Normalize to list for consistent handling
    if not isinstance(children, list):
        children = [children]
    return [child for child in children if isinstance(child, Mapping)]


def _children(token: Mapping[str, Any]) -> tuple[Token, ...]:
    return tokens_from_mistune(_child_dicts(token))


def _language(token: Mapping[str, Any]) -> str | None:
    info = _attrs(token).get('info')
    if info and isinstance(info, str):
        return info.split()[0]
    return None


def _list_item(token: Mapping[str, Any]) -> ListItem:
    is_task = token.get('type') == 'task_list_item'
    return ListItem(
        tokens=_children(token),
        task=is_task,
        checked=is_task and _attrs(token).get('checked') is True,
    )


def _list(token: Mapping[str, Any]) -> List:
    attrs = _attrs(token)
    ordered = attrs.get('ordered') is True
    start = attrs.get('start')
    if not isinstance(start, int) or isinstance(start, bool):
        # Mistune leaves out start for lists beginning at 1
        start = 1 if ordered else None
    items = tuple(
        _list_item(child)
        for child in _child_dicts(token)
        if child.get('type') in ('list_item', 'task_list_item')
    )
    return List(ordered=ordered, start=start if ordered else None, items=items)


def _cell(token: Mapping[str, Any]) -> TableCell:
    tokens = _children(token)
    return TableCell(text=plain_text(tokens).strip(), tokens=tokens)


def _table(token: Mapping[str, Any]) -> Table:
    """Convert a table.

    Note: In Mistune, table_head contains cells directly (no table_row wrapper),
    while table_body contains table_row tokens.
    """
    children = _child_dicts(token)
    table_head = next((c for c in children if c.get('type') == 'table_head'), None)
    table_body = next((c for c in children if c.get('type') == 'table_body'), None)

    head_cells = _child_dicts(table_head) if table_head is not None else []
    header = tuple(_cell(cell) for cell in head_cells)
    align = tuple(normalize_alignment(_attrs(cell).get('align')) for cell in head_cells)

    rows = ()
    if table_body is not None:
        rows = tuple(
            tuple(_cell(cell) for cell in _child_dicts(row))
            for row in _child_dicts(table_body)
            if row.get('type') == 'table_row'
        )
    return Table(align=align, header=header, rows=rows)


def _image(token: Mapping[str, Any]) -> Image:
    attrs = _attrs(token)
    title = attrs.get('title')
    return Image(
        href=attrs.get('url', '') if isinstance(attrs.get('url'), str) else '',
        title=title if isinstance(title, str) and title else None,
        # Alt text is in children for images
        text=plain_text(_children(token)),
    )


def _link(token: Mapping[str, Any]) -> Link:
    attrs = _attrs(token)
    url = attrs.get('url', '')
    title = attrs.get('title')
    return Link(
        href=url if isinstance(url, str) else '',
        title=title if isinstance(title, str) and title else None,
        tokens=_children(token),
    )


def from_mistune(token: Mapping[str, Any]) -> Token:
    """Convert one Mistune AST token.

    Args:
        token: Mistune token dict

    Returns:
        Typed token; unknown types become ``Other`` carrying the raw text
    """
    token_type = token.get('type')

    match token_type:
        # Block elements
        case 'block_quote':
            return Blockquote(tokens=_children(token))
        case 'block_code':
            # Mistune keeps the closing newline, the display shows the code only
            return Code(text=_raw(token).removesuffix('\n'), lang=_language(token))
        case 'heading':
            level = clamp_depth(_attrs(token).get('level'))
            return Heading(depth=level, tokens=_children(token))
        case 'thematic_break':
            return Hr()
        case 'block_html':
            return Html(text=_raw(token), raw=_raw(token))
        case 'list':
            return _list(token)
        case 'paragraph':
            return Paragraph(tokens=_children(token))
        case 'block_text':
            # Tight list item content: inline tokens without a paragraph
            return FormattedText(tokens=_children(token))
        case 'blank_line':
            return Space()
        case 'table':
            return _table(token)

        # Inline elements
        case 'text':
            return PlainText(text=_raw(token), raw=_raw(token))
        case 'softbreak':
            return PlainText(text='\n', raw='\n')
        case 'linebreak':
            return Br()
        case 'emphasis':
            return Em(tokens=_children(token))
        case 'strong':
            return Strong(tokens=_children(token))
        case 'strikethrough':
            return Del(tokens=_children(token))
        case 'codespan':
            return Codespan(text=_raw(token), raw=_raw(token))
        case 'link':
            return _link(token)
        case 'image':
            return _image(token)
        case 'inline_html':
            return Other(kind='html', raw=_raw(token) or None)
        case _:
            LOGGER.debug('Unknown mistune token type %r', token_type)
            return Other(kind=str(token_type or ''), raw=_raw(token) or None)


def tokens_from_mistune(tokens: Iterable[Mapping[str, Any]]) -> tuple[Token, ...]:
    """Convert a sequence of Mistune AST tokens."""
    return tuple(from_mistune(token) for token in tokens if isinstance(token, Mapping))


# ============================================================================
# Table rule
# ============================================================================

PIPE_TABLE_PATTERN = r'^ {0,3}\|[^\n]*\|[ \t]*(?:\n|$)'
NP_TABLE_PATTERN = r'^ {0,3}\S[^\n]*\|[^\n]*(?:\n|$)'

_DELIMITER_CELL = re.compile(r'^(:?)-+(:?)$')
_CELL_SEPARATOR = re.compile(r'(?<!\\)\|')


def _line_at(src: str, pos: int) -> str:
    end = src.find('\n', pos)
    return src[pos:] if end == -1 else src[pos : end + 1]


def _split_table_row(line: str) -> list[str] | None:
    text = line.strip()
    if '|' not in text:
        return None
    if text.startswith('|'):
        text = text[1:]
    if text.endswith('|') and not text.endswith('\\|'):
        text = text[:-1]
    return [cell.strip() for cell in _CELL_SEPARATOR.split(text)]


def _alignments(cells: list[str]) -> list[str | None] | None:
    aligns: list[str | None] = []
    for cell in cells:
        m = _DELIMITER_CELL.match(cell)
        if m is None:
            return None
        left, right = m.groups()
        if left and right:
            aligns.append('center')
        elif left:
            aligns.append('left')
        elif right:
            aligns.append('right')
        else:
            aligns.append(None)
    return aligns


def _table_cell(text: str, align: str | None, head: bool) -> dict[str, Any]:
    return {'type': 'table_cell', 'text': text, 'attrs': {'align': align, 'head': head}}


def _parse_table(block: BlockParser, m: re.Match[str], state: BlockState) -> int | None:
    """Parse a GFM table, fitting every body row to the header width.

    Mistune's own table rule drops the whole table when a body row has a
    different number of cells. Here short rows are padded with empty cells
    and long rows are cut, so the table survives.
    """
    header = _split_table_row(m.group(0))
    pos = m.end()
    delimiter = _split_table_row(_line_at(state.src, pos))
    if header is None or delimiter is None or len(header) != len(delimiter):
        return None
    aligns = _alignments(delimiter)
    if aligns is None:
        return None
    pos += len(_line_at(state.src, pos))

    width = len(header)
    rows = []
    while pos < state.cursor_max:
        line = _line_at(state.src, pos)
        cells = _split_table_row(line)
        if cells is None:
            break
        if len(cells) != width:
            LOGGER.debug('Table row has %d cells, header has %d', len(cells), width)
            cells = cells[:width] + [''] * (width - len(cells))
        rows.append(
            {
                'type': 'table_row',
                'children': [_table_cell(text, aligns[i], False) for i, text in enumerate(cells)],
            }
        )
        pos += len(line)

    thead = {
        'type': 'table_head',
        'children': [_table_cell(text, aligns[i], True) for i, text in enumerate(header)],
    }
    state.append_token(
        {'type': 'table', 'children': [thead, {'type': 'table_body', 'children': rows}]}
    )
    return pos


def padded_table(md: mistune.Markdown) -> None:
    """Mistune plugin: GFM tables that tolerate rows of the wrong width."""
    md.block.register('table', PIPE_TABLE_PATTERN, _parse_table, before='paragraph')
    md.block.register('nptable', NP_TABLE_PATTERN, _parse_table, before='paragraph')


def _plugins(config: RenderConfig) -> list[Any]:
    return [padded_table if name == 'table' else name for name in config.mistune_plugins]


def create_parser(config: RenderConfig = DEFAULT_CONFIG) -> mistune.Markdown:
    """Create a Mistune instance that returns the AST instead of HTML."""
    return mistune.create_markdown(renderer='ast', plugins=_plugins(config))


def parse_markdown(
    markdown_text: str,
    config: RenderConfig = DEFAULT_CONFIG,
) -> tuple[Token, ...]:
    """Parse Markdown text into typed tokens.

    Args:
        markdown_text: Input Markdown text
        config: Configuration (selects Mistune plugins)

    Returns:
        Top-level block tokens
    """
    # Normalize line endings
    text = markdown_text.replace('\r\n', '\n').replace('\r', '\n')
    if not text.endswith('\n'):
        text += '\n'

    md = create_parser(config)
    ast = md(text)
    return tokens_from_mistune(ast if isinstance(ast, list) else [])
