"""Table model builder.

Turns header cells, column alignment and body rows into a column-indexed model.
Cell content stays as tokens until the display layer asks for it, so building
a model for a large table is cheap.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
import logging
from typing import Any

from md_nodes.config import DEFAULT_CONFIG, RenderConfig
from md_nodes.inline import render_inline
from md_nodes.nodes import Child, to_dict
from md_nodes.tokens import Alignment, TableCell, Token, plain_text

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class Row:
    """Body row; ``key`` is the row index, cells are padded to the column count."""

    key: int
    cells: tuple[tuple[Token, ...], ...]


@dataclass(frozen=True)
class Column:
    index: int
    label: str
    align: Alignment

    def cell(self, row: Row) -> tuple[Token, ...]:
        """Return this column's cell tokens for ``row`` (empty if the row is short)."""
        if self.index < len(row.cells):
            return row.cells[self.index]
        return ()


@dataclass(frozen=True)
class TableModel:
    """Column-indexed table model with deferred cell rendering.

    Attributes:
        columns: Exactly one column per header cell
        rows: Body rows in source order
        config: Configuration used when cells are rendered
    """

    columns: tuple[Column, ...]
    rows: tuple[Row, ...]
    config: RenderConfig = DEFAULT_CONFIG

    def render_cell(self, row: Row, column: Column) -> tuple[Child, ...]:
        """Render one cell through the inline renderer."""
        return tuple(render_inline(column.cell(row), self.config))

    def cell(self, row_key: int, column_index: int) -> tuple[Child, ...]:
        """Render the cell at (row_key, column_index).

        Out-of-range coordinates render as empty content.
        """
        if not 0 <= row_key < len(self.rows) or not 0 <= column_index < len(self.columns):
            return ()
        return self.render_cell(self.rows[row_key], self.columns[column_index])

    def to_dict(self) -> dict[str, Any]:
        """Materialize every cell into JSON-ready data."""
        return {
            'columns': [
                {'index': column.index, 'label': column.label, 'align': column.align}
                for column in self.columns
            ],
            'rows': [
                {
                    'key': row.key,
                    'cells': [
                        [to_dict(child) for child in self.render_cell(row, column)]
                        for column in self.columns
                    ],
                }
                for row in self.rows
            ],
        }


def build_table_model(
    header: Sequence[TableCell],
    align: Sequence[Alignment],
    rows: Sequence[Sequence[TableCell]],
    config: RenderConfig = DEFAULT_CONFIG,
) -> TableModel:
    """Build a table model from parsed table parts.

    The header drives the column count. Short rows are padded with empty cells
    and extra cells are dropped. Missing alignments default to
    ``config.default_alignment``.

    Args:
        header: Header cells
        align: Alignment per column
        rows: Body rows of cells
        config: Rendering configuration

    Returns:
        Table model
    """
    width = len(header)

    columns = tuple(
        Column(
            index=i,
            label=cell.text or plain_text(cell.tokens),
            align=(align[i] if i < len(align) else None) or config.default_alignment,
        )
        for i, cell in enumerate(header)
    )

    model_rows = []
    for row_key, row in enumerate(rows):
        if len(row) != width:
            LOGGER.debug(
                'Table row %d has %d cells, expected %d', row_key, len(row), width
            )
        cells = tuple(row[i].tokens if i < len(row) else () for i in range(width))
        model_rows.append(Row(key=row_key, cells=cells))

    return TableModel(columns=columns, rows=tuple(model_rows), config=config)
