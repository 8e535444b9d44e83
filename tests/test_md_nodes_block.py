"""Tests for md_nodes block renderer - dispatch, ordering keys and list items."""

import pytest

from md_nodes.block import render_block, render_document
from md_nodes.inline import render_inline
from md_nodes.nodes import Node, NodeKind
from md_nodes.tokens import (
    Blockquote,
    Code,
    Em,
    FormattedText,
    Heading,
    Hr,
    Html,
    List,
    ListItem,
    Other,
    Paragraph,
    PlainText,
    Space,
    Strong,
    Table,
    TableCell,
)


def _para(text: str) -> Paragraph:
    return Paragraph(tokens=(PlainText(text),))


# ============================================================================
# Top-level ordering
# ============================================================================


def test_one_node_per_non_space_token_in_order() -> None:
    """Every non-space token yields exactly one node, in source order."""
    tokens = [_para('a'), Space(), Hr(), Space(), Heading(depth=2, tokens=(PlainText('h'),))]
    nodes = render_document(tokens)

    assert [n.kind for n in nodes] == [NodeKind.PARAGRAPH, NodeKind.DIVIDER, NodeKind.HEADING]


def test_space_tokens_leave_no_gap_in_keys() -> None:
    """Space tokens are dropped without consuming an ordering key."""
    tokens = [Space(), _para('a'), Space(), Space(), _para('b'), Space()]
    nodes = render_document(tokens)

    assert [n.key for n in nodes] == [0, 1]


def test_unknown_kind_with_raw_passes_through() -> None:
    """Unknown kind carrying raw text yields a passthrough node with exactly that text."""
    nodes = render_document([Other(kind='footnote', raw='X')])

    assert len(nodes) == 1
    assert nodes[0].kind == NodeKind.RAW
    assert nodes[0].content == 'X'


@pytest.mark.parametrize('raw', [None, ''])
def test_unknown_kind_without_raw_is_skipped(raw: str | None) -> None:
    """Unknown kind without raw text renders nothing and does not shift siblings."""
    nodes = render_document([_para('a'), Other(kind='mystery', raw=raw), _para('b')])

    assert [n.key for n in nodes] == [0, 1]
    assert [n.children for n in nodes] == [('a',), ('b',)]


def test_rendering_is_idempotent() -> None:
    """Rendering the same token tree twice gives equal output."""
    tokens = [
        Heading(depth=1, tokens=(PlainText('Title'),)),
        _para('text'),
        List(items=(ListItem(tokens=(FormattedText(tokens=(Em((PlainText('b'),)),)),)),)),
        Table(
            align=('left',),
            header=(TableCell('A', (PlainText('A'),)),),
            rows=((TableCell('1', (PlainText('1'),)),),),
        ),
        Code(text='x = 1', lang='python'),
    ]

    assert render_document(tokens) == render_document(tokens)


def test_rendered_nodes_are_read_only() -> None:
    (node,) = render_document([Heading(depth=2, tokens=(PlainText('h'),))])

    with pytest.raises(TypeError):
        node.attrs['level'] = 9  # type: ignore[index]
    assert node.attrs == {'level': 2}
    assert hash(node) == hash(render_document([Heading(depth=2, tokens=(PlainText('h'),))])[0])


def test_node_copies_attrs_mapping() -> None:
    attrs = {'level': 1}
    node = Node(kind=NodeKind.HEADING, key=0, attrs=attrs)
    attrs['level'] = 5

    assert node.attrs['level'] == 1


# ============================================================================
# Block kinds
# ============================================================================


@pytest.mark.parametrize('depth', [1, 2, 3, 4, 5, 6])
def test_heading_depth_maps_to_level(depth: int) -> None:
    """Heading depth d maps 1:1 to output level d."""
    node = render_block(Heading(depth=depth, tokens=(PlainText('T'),)), 0)

    assert node is not None
    assert node.kind == NodeKind.HEADING
    assert node.attrs['level'] == depth
    assert node.children == ('T',)


def test_blockquote_renders_children_recursively() -> None:
    """Blockquote wraps recursively rendered block children."""
    token = Blockquote(tokens=(_para('a'), Space(), Blockquote(tokens=(_para('b'),))))
    node = render_block(token, 3)

    assert node is not None
    assert node.key == 3
    assert [c.kind for c in node.children] == [NodeKind.PARAGRAPH, NodeKind.BLOCKQUOTE]
    assert [c.key for c in node.children] == [0, 1]


def test_code_defaults_language_to_text() -> None:
    """Code block without a language is labelled 'text'."""
    node = render_block(Code(text='plain'), 0)

    assert node is not None
    assert node.kind == NodeKind.CODE_BLOCK
    assert node.attrs['language'] == 'text'


def test_html_is_passed_through_verbatim() -> None:
    """Raw HTML is injected as-is."""
    markup = '<div class="x">\n<b>hi</b>\n</div>'
    node = render_block(Html(text=markup), 0)

    assert node is not None
    assert node.kind == NodeKind.RAW_HTML
    assert node.content == markup


def test_hr_is_void_divider() -> None:
    node = render_block(Hr(), 0)

    assert node == Node(kind=NodeKind.DIVIDER, key=0)


def test_table_renders_model_node() -> None:
    token = Table(
        align=('center',),
        header=(TableCell('A', (PlainText('A'),)),),
        rows=((TableCell('1', (PlainText('1'),)),),),
    )
    node = render_block(token, 0)

    assert node is not None
    assert node.kind == NodeKind.TABLE
    model = node.attrs['model']
    assert model.columns[0].align == 'center'
    assert model.cell(0, 0) == ('1',)


def test_malformed_tokens_render_empty_content() -> None:
    """Tokens with default (empty) payloads still render without errors."""
    nodes = render_document(
        [Paragraph(), Heading(), Blockquote(), List(), Table(), Code(), Html()]
    )

    assert len(nodes) == 7
    assert nodes[0].children == ()
    assert nodes[4].attrs['model'].columns == ()


# ============================================================================
# Lists
# ============================================================================


@pytest.mark.parametrize(
    ('ordered', 'start', 'expected_kind', 'expected_attrs'),
    [
        (False, None, NodeKind.UNORDERED_LIST, {}),
        (False, 5, NodeKind.UNORDERED_LIST, {}),
        (True, 3, NodeKind.ORDERED_LIST, {'start': 3}),
        (True, None, NodeKind.ORDERED_LIST, {'start': 1}),
    ],
)
def test_list_kind_and_start(
    ordered: bool, start: int | None, expected_kind: NodeKind, expected_attrs: dict
) -> None:
    """Start offset is only present on ordered lists."""
    token = List(ordered=ordered, start=start, items=(ListItem(tokens=(_para('a'),)),))
    node = render_block(token, 0)

    assert node is not None
    assert node.kind == expected_kind
    assert dict(node.attrs) == expected_attrs


def test_tight_list_item_renders_inline_without_paragraph() -> None:
    """First child text with nested tokens renders exactly like inline rendering."""
    nested = (Em((PlainText('b'),)),)
    item = ListItem(tokens=(FormattedText(tokens=nested),))
    node = render_block(List(items=(item,)), 0)

    assert node is not None
    item_node = node.children[0]
    assert isinstance(item_node, Node)
    assert item_node.children == tuple(render_inline(nested))
    assert all(
        not isinstance(c, Node) or c.kind != NodeKind.PARAGRAPH for c in item_node.children
    ), 'Tight list item must not be wrapped in a paragraph'


def test_loose_list_item_keeps_paragraph() -> None:
    """Any other first-child kind follows the block path."""
    item = ListItem(tokens=(_para('a'),))
    node = render_block(List(items=(item,)), 0)

    assert node is not None
    item_node = node.children[0]
    assert isinstance(item_node, Node)
    assert item_node.children[0].kind == NodeKind.PARAGRAPH


def test_plain_text_first_child_uses_block_path() -> None:
    """Text without nested tokens is not inlined; it goes through the raw passthrough."""
    item = ListItem(tokens=(PlainText('just text', raw='just text'),))
    node = render_block(List(items=(item,)), 0)

    assert node is not None
    item_node = node.children[0]
    assert isinstance(item_node, Node)
    assert item_node.children == (Node(kind=NodeKind.RAW, key=0, content='just text'),)


def test_list_item_keys_continue_after_inline_content() -> None:
    """Nested list after tight text gets the next key after the inline nodes."""
    nested_list = List(items=(ListItem(tokens=(_para('inner'),)),))
    item = ListItem(
        tokens=(
            FormattedText(tokens=(PlainText('a '), Strong((PlainText('b'),)))),
            nested_list,
        )
    )
    node = render_block(List(items=(item,)), 0)

    assert node is not None
    item_node = node.children[0]
    assert isinstance(item_node, Node)
    kinds_and_keys = [(c.kind, c.key) for c in item_node.children if isinstance(c, Node)]
    assert kinds_and_keys == [(NodeKind.STRONG, 0), (NodeKind.UNORDERED_LIST, 1)]


def test_task_list_item_has_checked_attr() -> None:
    items = (
        ListItem(tokens=(_para('done'),), task=True, checked=True),
        ListItem(tokens=(_para('todo'),), task=True, checked=False),
        ListItem(tokens=(_para('plain'),)),
    )
    node = render_block(List(items=items), 0)

    assert node is not None
    assert [dict(c.attrs) for c in node.children if isinstance(c, Node)] == [
        {'checked': True},
        {'checked': False},
        {},
    ]
