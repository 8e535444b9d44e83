"""Tests for md_nodes inline renderer - dispatch and recursion."""

from collections.abc import Iterator

import pytest

from md_nodes.inline import render_inline
from md_nodes.nodes import Node, NodeKind
from md_nodes.tokens import (
    Br,
    Codespan,
    Del,
    Em,
    Escape,
    FormattedText,
    Image,
    Link,
    Other,
    Paragraph,
    PlainText,
    Strong,
)

# ============================================================================
# Basic kinds
# ============================================================================


@pytest.mark.parametrize(
    ('token_class', 'expected_kind'),
    [
        (Strong, NodeKind.STRONG),
        (Em, NodeKind.EMPHASIS),
        (Del, NodeKind.STRIKETHROUGH),
    ],
)
def test_wrapping_kinds(token_class: type, expected_kind: NodeKind) -> None:
    """Strong, em and del wrap their recursively rendered children."""
    (node,) = render_inline([token_class((PlainText('x'),))])

    assert node == Node(kind=expected_kind, key=0, children=('x',))


def test_nested_formatting_recurses() -> None:
    """Emphasis inside strong inside a link renders as nested nodes."""
    tokens = [Link(href='https://example.com', tokens=(Strong((Em((PlainText('deep'),)),)),))]
    (link,) = render_inline(tokens)

    assert isinstance(link, Node)
    assert link.kind == NodeKind.LINK
    strong = link.children[0]
    assert isinstance(strong, Node) and strong.kind == NodeKind.STRONG
    em = strong.children[0]
    assert isinstance(em, Node) and em.kind == NodeKind.EMPHASIS
    assert em.children == ('deep',)


def test_br_and_codespan() -> None:
    out = list(render_inline([Codespan(text='a < b'), Br()]))

    assert out == [
        Node(kind=NodeKind.INLINE_CODE, key=0, content='a < b'),
        Node(kind=NodeKind.LINE_BREAK, key=1),
    ]


def test_escape_yields_literal_character() -> None:
    """Escapes are emitted as decoded literal text."""
    assert list(render_inline([Escape(text='*', raw='\\*')])) == ['*']


# ============================================================================
# Links and images
# ============================================================================


@pytest.mark.parametrize(
    ('title', 'expected_attrs'),
    [
        (None, {'href': 'https://example.com'}),
        ('Home', {'href': 'https://example.com', 'title': 'Home'}),
    ],
)
def test_link_attrs(title: str | None, expected_attrs: dict) -> None:
    link = Link(href='https://example.com', title=title, tokens=(PlainText('x'),))
    (node,) = render_inline([link])

    assert isinstance(node, Node)
    assert dict(node.attrs) == expected_attrs
    assert node.children == ('x',)


@pytest.mark.parametrize(
    ('title', 'expected_attrs'),
    [
        (None, {'src': 'a.png', 'alt': 'Alt'}),
        ('Pic', {'src': 'a.png', 'alt': 'Alt', 'title': 'Pic'}),
    ],
)
def test_image_attrs(title: str | None, expected_attrs: dict) -> None:
    (node,) = render_inline([Image(href='a.png', title=title, text='Alt')])

    assert isinstance(node, Node)
    assert node.kind == NodeKind.IMAGE
    assert dict(node.attrs) == expected_attrs


# ============================================================================
# Text polymorphism
# ============================================================================


def test_plain_text_is_emitted_as_string() -> None:
    assert list(render_inline([PlainText('hello')])) == ['hello']


def test_formatted_text_recurses_into_children() -> None:
    """Text owning nested tokens renders those tokens inside a span."""
    token = FormattedText(tokens=(PlainText('a '), Strong((PlainText('b'),))), text='a **b**')
    (span,) = render_inline([token])

    assert isinstance(span, Node)
    assert span.kind == NodeKind.SPAN
    assert span.children == ('a ', Node(kind=NodeKind.STRONG, key=0, children=('b',)))


# ============================================================================
# Fallbacks and ordering
# ============================================================================


def test_unknown_kind_passes_raw_through() -> None:
    out = list(render_inline([Other(kind='html', raw='<kbd>'), PlainText('x')]))

    assert out == ['<kbd>', 'x']


def test_unknown_kind_without_raw_is_skipped() -> None:
    out = list(render_inline([Br(), Other(kind='mystery'), Br()]))

    assert [n.key for n in out if isinstance(n, Node)] == [0, 1]


def test_block_token_in_inline_position_uses_raw() -> None:
    out = list(render_inline([Paragraph(tokens=(PlainText('p'),), raw='p\n')]))

    assert out == ['p\n']


def test_keys_skip_text_runs_and_honor_start() -> None:
    """Only nodes consume keys; numbering starts at ``start``."""
    tokens = [PlainText('a'), Br(), PlainText('b'), Codespan(text='c')]
    out = list(render_inline(tokens, start=4))

    assert [n.key for n in out if isinstance(n, Node)] == [4, 5]


def test_result_is_a_single_pass_iterator() -> None:
    """The renderer yields lazily and cannot be restarted."""
    out = render_inline([PlainText('a'), PlainText('b')])

    assert isinstance(out, Iterator)
    assert list(out) == ['a', 'b']
    assert list(out) == []
