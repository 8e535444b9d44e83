"""Token model for parsed Markdown documents.

Every token kind is a frozen dataclass, so a parsed tree is immutable for the
duration of a render and works naturally with ``match`` statements. Child
sequences are tuples.

Text tokens come in two shapes that are decided once, at ingest:

- ``PlainText``: a leaf string
- ``FormattedText``: a container of further inline tokens (e.g. the body of a
  tight list item)

``from_dict`` ingests marked-shaped token dicts (``{'type': 'paragraph',
'tokens': [...], ...}``), which is what the documentation bundle stores.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
import logging
from typing import Any, Literal, TypeAlias

LOGGER = logging.getLogger(__name__)

# Deepest token nesting kept when ingesting marked trees
MAX_NESTED_LEVEL = 64

Alignment: TypeAlias = Literal['left', 'center', 'right'] | None

_ALIGNMENTS = frozenset({'left', 'center', 'right'})


# ============================================================================
# Block tokens
# ============================================================================


@dataclass(frozen=True)
class Blockquote:
    tokens: tuple[Token, ...] = ()
    raw: str | None = None


@dataclass(frozen=True)
class Code:
    """Fenced or indented code block. ``lang`` is the info string's first word."""

    text: str = ''
    lang: str | None = None
    raw: str | None = None


@dataclass(frozen=True)
class Heading:
    depth: int = 1
    tokens: tuple[Token, ...] = ()
    raw: str | None = None


@dataclass(frozen=True)
class Hr:
    raw: str | None = None


@dataclass(frozen=True)
class Html:
    """Raw HTML passed through verbatim. Not sanitized."""

    text: str = ''
    raw: str | None = None


@dataclass(frozen=True)
class ListItem:
    """One list item.

    Attributes:
        tokens: Block-level children. Tight items start with ``FormattedText``.
        task: True for GFM task list items (``- [ ] ...``)
        checked: Checkbox state, meaningful only when ``task`` is set
    """

    tokens: tuple[Token, ...] = ()
    task: bool = False
    checked: bool = False
    raw: str | None = None


@dataclass(frozen=True)
class List:
    ordered: bool = False
    start: int | None = None
    items: tuple[ListItem, ...] = ()
    raw: str | None = None


@dataclass(frozen=True)
class Paragraph:
    tokens: tuple[Token, ...] = ()
    raw: str | None = None


@dataclass(frozen=True)
class Space:
    raw: str | None = None


@dataclass(frozen=True)
class TableCell:
    """Table cell: ``text`` is the cell's plain text, ``tokens`` its inline content."""

    text: str = ''
    tokens: tuple[Token, ...] = ()


@dataclass(frozen=True)
class Table:
    align: tuple[Alignment, ...] = ()
    header: tuple[TableCell, ...] = ()
    rows: tuple[tuple[TableCell, ...], ...] = ()
    raw: str | None = None


# ============================================================================
# Inline tokens
# ============================================================================


@dataclass(frozen=True)
class PlainText:
    text: str = ''
    raw: str | None = None


@dataclass(frozen=True)
class FormattedText:
    """Text that owns nested inline tokens instead of a plain string."""

    tokens: tuple[Token, ...] = ()
    text: str = ''
    raw: str | None = None


@dataclass(frozen=True)
class Strong:
    tokens: tuple[Token, ...] = ()
    raw: str | None = None


@dataclass(frozen=True)
class Em:
    tokens: tuple[Token, ...] = ()
    raw: str | None = None


@dataclass(frozen=True)
class Del:
    tokens: tuple[Token, ...] = ()
    raw: str | None = None


@dataclass(frozen=True)
class Codespan:
    text: str = ''
    raw: str | None = None


@dataclass(frozen=True)
class Link:
    href: str = ''
    title: str | None = None
    tokens: tuple[Token, ...] = ()
    raw: str | None = None


@dataclass(frozen=True)
class Image:
    """Image; ``text`` is the alt text."""

    href: str = ''
    title: str | None = None
    text: str = ''
    raw: str | None = None


@dataclass(frozen=True)
class Escape:
    text: str = ''
    raw: str | None = None


@dataclass(frozen=True)
class Br:
    raw: str | None = None


@dataclass(frozen=True)
class Other:
    """Any token kind the ingest layer does not know about."""

    kind: str = ''
    raw: str | None = None


BlockToken: TypeAlias = (
    Blockquote | Code | Heading | Hr | Html | List | Paragraph | Space | Table
)
InlineToken: TypeAlias = (
    PlainText | FormattedText | Strong | Em | Del | Codespan | Link | Image | Escape | Br
)
Token: TypeAlias = BlockToken | InlineToken | Other


# ============================================================================
# Helpers
# ============================================================================


def plain_text(tokens: Iterable[Token]) -> str:
    """Flatten inline tokens to their visible text.

    Used for table header labels and image alt text.

    Examples:
        >>> plain_text([PlainText('a'), Strong((PlainText('b'),))])
        'ab'
    """
    parts: list[str] = []
    for token in tokens:
        match token:
            case PlainText(text=text) | Codespan(text=text) | Escape(text=text):
                parts.append(text)
            case Image(text=text):
                parts.append(text)
            case Br():
                parts.append('\n')
            case FormattedText() | Strong() | Em() | Del() | Link():
                parts.append(plain_text(token.tokens))
            case _:
                pass
    return ''.join(parts)


def normalize_alignment(value: Any) -> Alignment:
    """Map a raw alignment value to one of left/center/right/None."""
    if isinstance(value, str) and value.lower() in _ALIGNMENTS:
        return value.lower()  # type: ignore[return-value]
    return None


def clamp_depth(value: Any) -> int:
    """Clamp a heading depth into 1..6; non-integers become 1."""
    if isinstance(value, bool) or not isinstance(value, int):
        return 1
    return max(1, min(6, value))


# ============================================================================
# Ingest of marked-shaped dicts
# ============================================================================


def _str(data: Mapping[str, Any], key: str, default: str = '') -> str:
    value = data.get(key, default)
    return value if isinstance(value, str) else default


def _opt_str(data: Mapping[str, Any], key: str) -> str | None:
    value = data.get(key)
    return value if isinstance(value, str) and value else None


def _dict_list(value: Any) -> list[Mapping[str, Any]]:
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, Mapping)]


def _children(data: Mapping[str, Any], level: int) -> tuple[Token, ...]:
    return tuple(from_dict(child, level + 1) for child in _dict_list(data.get('tokens')))


def _cell(data: Any, level: int) -> TableCell:
    if isinstance(data, str):
        return TableCell(text=data, tokens=(PlainText(data),) if data else ())
    if not isinstance(data, Mapping):
        LOGGER.debug('Malformed table cell: %r', data)
        return TableCell()
    return TableCell(text=_str(data, 'text'), tokens=_children(data, level))


def _list_item(data: Mapping[str, Any], level: int) -> ListItem:
    return ListItem(
        tokens=_children(data, level),
        task=data.get('task') is True,
        checked=data.get('checked') is True,
        raw=_opt_str(data, 'raw'),
    )


def _start(data: Mapping[str, Any]) -> int | None:
    start = data.get('start')
    if isinstance(start, bool) or not isinstance(start, int):
        return None
    return start


def _rows(value: Any, level: int) -> tuple[tuple[TableCell, ...], ...]:
    if not isinstance(value, list):
        return ()
    rows = []
    for row in value:
        if isinstance(row, list):
            rows.append(tuple(_cell(cell, level) for cell in row))
        else:
            LOGGER.debug('Malformed table row: %r', row)
            rows.append(())
    return tuple(rows)


def from_dict(data: Mapping[str, Any], level: int = 0) -> Token:
    """Build a typed token from a marked-shaped token dict.

    Missing or malformed fields fall back to empty values; unknown kinds become
    ``Other``. Tokens nested deeper than ``MAX_NESTED_LEVEL`` become ``Other``
    carrying their raw text. This function never raises for mapping input.

    Args:
        data: Token dict with a ``type`` key
        level: Nesting level of ``data`` (0 for top-level tokens)

    Returns:
        Typed token
    """
    kind = _str(data, 'type')
    raw = _opt_str(data, 'raw')

    if level > MAX_NESTED_LEVEL:
        LOGGER.debug('Token %r nested deeper than %d levels', kind, MAX_NESTED_LEVEL)
        return Other(kind=kind, raw=raw)

    match kind:
        case 'blockquote':
            return Blockquote(tokens=_children(data, level), raw=raw)
        case 'code':
            return Code(text=_str(data, 'text'), lang=_opt_str(data, 'lang'), raw=raw)
        case 'heading':
            depth = clamp_depth(data.get('depth'))
            return Heading(depth=depth, tokens=_children(data, level), raw=raw)
        case 'hr':
            return Hr(raw=raw)
        case 'html' if data.get('block') is False:
            # Inline HTML: rendered through the raw passthrough
            return Other(kind=kind, raw=raw)
        case 'html':
            return Html(text=_str(data, 'text', raw or ''), raw=raw)
        case 'list':
            items = tuple(_list_item(item, level) for item in _dict_list(data.get('items')))
            ordered = data.get('ordered') is True
            return List(
                ordered=ordered, start=_start(data) if ordered else None, items=items, raw=raw
            )
        case 'paragraph':
            return Paragraph(tokens=_children(data, level), raw=raw)
        case 'space':
            return Space(raw=raw)
        case 'table':
            align_value = data.get('align')
            align = (
                tuple(normalize_alignment(a) for a in align_value)
                if isinstance(align_value, list)
                else ()
            )
            header_value = data.get('header')
            header = (
                tuple(_cell(cell, level) for cell in header_value)
                if isinstance(header_value, list)
                else ()
            )
            return Table(align=align, header=header, rows=_rows(data.get('rows'), level), raw=raw)
        case 'text':
            children = _children(data, level)
            if children:
                return FormattedText(tokens=children, text=_str(data, 'text'), raw=raw)
            return PlainText(text=_str(data, 'text', raw or ''), raw=raw)
        case 'strong':
            return Strong(tokens=_children(data, level), raw=raw)
        case 'em':
            return Em(tokens=_children(data, level), raw=raw)
        case 'del':
            return Del(tokens=_children(data, level), raw=raw)
        case 'codespan':
            return Codespan(text=_str(data, 'text'), raw=raw)
        case 'link':
            return Link(
                href=_str(data, 'href'),
                title=_opt_str(data, 'title'),
                tokens=_children(data, level),
                raw=raw,
            )
        case 'image':
            return Image(
                href=_str(data, 'href'),
                title=_opt_str(data, 'title'),
                text=_str(data, 'text'),
                raw=raw,
            )
        case 'escape':
            return Escape(text=_str(data, 'text'), raw=raw)
        case 'br':
            return Br(raw=raw)
        case _:
            LOGGER.debug('Unknown token kind %r', kind)
            return Other(kind=kind, raw=raw)


def tokens_from_dicts(data: Any) -> tuple[Token, ...]:
    """Ingest a list of marked-shaped token dicts, skipping non-mapping entries.

    Anything that is not a list of tokens (``None``, a string, a single dict)
    gives an empty document.
    """
    if not isinstance(data, Iterable) or isinstance(data, (str, bytes, Mapping)):
        LOGGER.debug('Not a token list: %r', data)
        return ()
    tokens = []
    for item in data:
        if isinstance(item, Mapping):
            tokens.append(from_dict(item))
        else:
            LOGGER.debug('Skipping non-mapping token: %r', item)
    return tuple(tokens)
