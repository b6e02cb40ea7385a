"""Read-only model of an HTML table and its visual grid.

:func:`read_table` snapshots the rows and cells a classifier or extractor needs
from a ``bs4`` table tag: only the rows owned by the table itself (rows of
tables nested inside cells are ignored) and only the direct ``th``/``td``
children of each row.  Each :class:`RawCell` keeps its tag so extractors can
reach nested paragraphs, images and labels through CSS selection.

:func:`expand_grid` resolves ``colspan``/``rowspan`` into the row x column
matrix the reader sees, which is what rowspan carry-forward walks.
"""

from dataclasses import dataclass, field
from functools import cached_property

from bs4 import Tag

from responsive_tables.conversion.patterns import FIRST_COLUMN_CLASS
from responsive_tables.conversion.text import nested_text, node_text, paragraph_texts

# Spans beyond this are authoring errors; clamp them to keep the grid bounded
MAX_SPAN = 1000


def parse_span(raw: object) -> int:
    """Read a colspan/rowspan attribute; missing, malformed or non-positive means 1."""
    if raw is None:
        return 1
    try:
        span = int(str(raw).strip())
    except ValueError:
        return 1
    return min(max(span, 1), MAX_SPAN)


@dataclass(frozen=True)
class RawCell:
    """A ``th`` or ``td`` with the attributes the shape heuristics look at."""

    node: Tag = field(repr=False, compare=False)
    is_header: bool = False
    colspan: int = 1
    rowspan: int = 1
    scope: str | None = None
    classes: tuple[str, ...] = ()
    style: str = ""

    @classmethod
    def from_tag(cls, tag: Tag) -> "RawCell":
        scope = tag.get("scope")
        return cls(
            node=tag,
            is_header=tag.name == "th",
            colspan=parse_span(tag.get("colspan")),
            rowspan=parse_span(tag.get("rowspan")),
            scope=scope.strip().lower() if isinstance(scope, str) else None,
            classes=tuple(tag.get("class") or ()),
            style=tag.get("style") or "",
        )

    @property
    def text(self) -> str:
        return node_text(self.node)

    @property
    def label(self) -> str:
        """Text with nested labels / paragraphs joined by single spaces."""
        return nested_text(self.node)

    @property
    def markup(self) -> str:
        """Inner markup of the cell."""
        return self.node.decode_contents()

    @property
    def outer_markup(self) -> str:
        return str(self.node)

    @property
    def paragraphs(self) -> list[str]:
        return paragraph_texts(self.node)

    def has_class(self, name: str) -> bool:
        return name in self.classes

    def find(self, *args, **kwargs) -> Tag | None:
        return self.node.find(*args, **kwargs)

    def find_all(self, *args, **kwargs) -> list[Tag]:
        return self.node.find_all(*args, **kwargs)

    def has_image(self) -> bool:
        return self.node.find("img") is not None


@dataclass(frozen=True)
class RawRow:
    """One ``tr`` and its direct cells, in document order."""

    node: Tag = field(repr=False, compare=False)
    cells: tuple[RawCell, ...] = ()

    def __len__(self) -> int:
        return len(self.cells)

    def cell(self, index: int) -> RawCell | None:
        """Return the cell at *index*, or None past the end of the row."""
        return self.cells[index] if 0 <= index < len(self.cells) else None

    @property
    def headers(self) -> list[RawCell]:
        return [cell for cell in self.cells if cell.is_header]

    @property
    def data_cells(self) -> list[RawCell]:
        return [cell for cell in self.cells if not cell.is_header]

    def first(self, predicate) -> RawCell | None:
        """Return the first cell satisfying *predicate*, or None."""
        return next((cell for cell in self.cells if predicate(cell)), None)

    @property
    def leading_cell(self) -> RawCell | None:
        """The row's first-column data cell (``td.first``), else its first cell."""
        marked = self.first(lambda cell: not cell.is_header and cell.has_class(FIRST_COLUMN_CLASS))
        return marked or self.cell(0)


@dataclass(frozen=True)
class GridSlot:
    """Occupant of one visual grid position.

    ``carried`` is True when the cell was placed by a rowspan from a row above;
    ``offset`` is the column offset inside the cell's colspan.
    """

    cell: RawCell
    origin_row: int
    carried: bool = False
    offset: int = 0


@dataclass(frozen=True)
class RawTable:
    """A table's rows plus the table-level attributes used by the heuristics."""

    node: Tag = field(repr=False, compare=False)
    rows: tuple[RawRow, ...] = ()
    classes: tuple[str, ...] = ()

    def __len__(self) -> int:
        return len(self.rows)

    def row(self, index: int) -> RawRow | None:
        """Return the row at *index*, or None when the table is shorter."""
        return self.rows[index] if 0 <= index < len(self.rows) else None

    def cells(self) -> list[RawCell]:
        return [cell for row in self.rows for cell in row.cells]

    def has_class(self, name: str) -> bool:
        return name in self.classes

    def contains_class(self, name: str) -> bool:
        """True if the table itself or any descendant carries class *name*."""
        return self.has_class(name) or self.node.find(class_=name) is not None

    @cached_property
    def grid(self) -> list[list[GridSlot | None]]:
        return expand_grid(self.rows)


def _owning_table(row: Tag) -> Tag | None:
    return row.find_parent("table")


def read_table(tag: Tag) -> RawTable:
    """Snapshot the rows and cells owned by the table *tag*."""
    rows: list[RawRow] = []
    for tr in tag.find_all("tr"):
        # Rows of a table nested inside one of our cells belong to that table
        if _owning_table(tr) is not tag:
            continue
        cells = tuple(RawCell.from_tag(cell) for cell in tr.find_all(["th", "td"], recursive=False))
        rows.append(RawRow(node=tr, cells=cells))
    return RawTable(node=tag, rows=tuple(rows), classes=tuple(tag.get("class") or ()))


def expand_grid(rows: tuple[RawRow, ...] | list[RawRow]) -> list[list[GridSlot | None]]:
    """Place every cell over the columns and rows it spans.

    Returns one list per physical row.  A cell with ``rowspan=N`` occupies its
    column in N consecutive rows (the later ones as ``carried`` slots); a cell
    with ``colspan=N`` occupies N consecutive columns.  Positions no cell
    reaches (ragged rows left of a carried cell) are None.
    """
    carried: dict[int, list] = {}  # column -> [slot, rows still to fill]
    grid: list[list[GridSlot | None]] = []

    for row_idx, row in enumerate(rows):
        line: list[GridSlot | None] = []
        pending = list(row.cells)
        col = 0
        while pending or any(c >= col for c in carried):
            span = carried.get(col)
            if span is not None:
                slot: GridSlot = span[0]
                line.append(GridSlot(cell=slot.cell, origin_row=slot.origin_row, carried=True, offset=slot.offset))
                span[1] -= 1
                if span[1] == 0:
                    del carried[col]
                col += 1
                continue
            if not pending:
                # A carried cell further right still needs its place
                line.append(None)
                col += 1
                continue
            cell = pending.pop(0)
            for offset in range(cell.colspan):
                placed = GridSlot(cell=cell, origin_row=row_idx, offset=offset)
                line.append(placed)
                if cell.rowspan > 1:
                    carried[col] = [placed, cell.rowspan - 1]
                col += 1
        grid.append(line)

    return grid
