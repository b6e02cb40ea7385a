"""Structural shape classification for authored HTML tables.

Each ``is_*`` predicate takes a :class:`RawTable` and returns True/False for
one structural signature.  :data:`SHAPE_RULES` orders the predicates; several
signatures overlap, so the first match wins and :func:`classify` falls back to
``regular`` when nothing matches.
"""

import logging
from collections.abc import Callable

from bs4 import Tag

from responsive_tables.conversion.patterns import (
    ARTICLE_HEADER_CLASS,
    BACKGROUND_COLOR_RE,
    CONTENT_CELL_CLASS,
    FIRST_COLUMN_CLASS,
    HEADER_CLASS,
    SHADOW_CLASS,
    TWO_COLUMN_LAYOUT_CLASS,
    WHITE_TEXT_RE,
)
from responsive_tables.conversion.raw import RawCell, RawRow, RawTable, read_table
from responsive_tables.conversion.schema import TableShape

logger = logging.getLogger(__name__)


# ─── Cell Helpers ────────────────────────────────────────────────────────────


def _has_colspan(cell: RawCell) -> bool:
    return cell.colspan > 1


def _has_rowspan(cell: RawCell) -> bool:
    return cell.rowspan > 1


def _nests_content_cell(cell: RawCell | None) -> bool:
    return cell is not None and cell.find(class_=CONTENT_CELL_CLASS) is not None


def is_header_styled(cell: RawCell) -> bool:
    """Return True if the cell is painted like a header (background, white text, or header class)."""
    if BACKGROUND_COLOR_RE.search(cell.style):
        return True
    if cell.has_class(HEADER_CLASS):
        return True
    for span in cell.find_all("span"):
        if WHITE_TEXT_RE.search(span.get("style") or ""):
            return True
    return False


def is_lone_header_row(row: RawRow) -> bool:
    """A row holding nothing but one header cell (a section title)."""
    return len(row) == 1 and row.cells[0].is_header


def _row_width(row: RawRow) -> int:
    return sum(cell.colspan for cell in row.cells)


# ─── Shape Predicates ────────────────────────────────────────────────────────


def is_empty(table: RawTable) -> bool:
    """Return True if the table has no rows at all."""
    return not table.rows


def is_two_header(table: RawTable) -> bool:
    """Two styled header cells over two value cells and one shared footer (button) cell."""
    if len(table) != 3:
        return False
    head, body, foot = table.rows
    if len(head) != 2 or len(body) != 2:
        return False
    if not all(is_header_styled(cell) for cell in head.cells):
        return False
    return any(not cell.is_header and cell.colspan == 2 for cell in foot.cells)


def is_complex_hierarchical(table: RawTable) -> bool:
    """Column-scoped group headers over sub-headers, with rowspan data cells."""
    head, sub = table.row(0), table.row(1)
    if head is None or sub is None:
        return False
    if not any(cell.is_header and cell.scope == "col" for cell in head.cells):
        return False
    if not any(not cell.is_header and _has_rowspan(cell) for cell in table.cells()):
        return False
    if len(sub) != len(head):
        return False
    return any(cell.text and not _has_rowspan(cell) for cell in sub.cells)


def is_route(table: RawTable) -> bool:
    """A titled two-column table: colspan=2 title, then a two-header row."""
    head, sub = table.row(0), table.row(1)
    if head is None or sub is None or len(table) < 3:
        return False
    if not any(cell.is_header and cell.colspan == 2 for cell in head.cells):
        return False
    return len(sub.headers) == 2


def is_structured_content(table: RawTable) -> bool:
    """Two-column editor layout whose headers and first-column cells wrap content cells."""
    if not table.has_class(TWO_COLUMN_LAYOUT_CLASS):
        return False
    head = table.rows[0] if table.rows else None
    if head is None or not head.headers:
        return False
    if not all(_nests_content_cell(cell) for cell in head.headers):
        return False
    first_column = [cell for cell in table.cells() if not cell.is_header and cell.has_class(FIRST_COLUMN_CLASS)]
    return bool(first_column) and all(_nests_content_cell(cell) for cell in first_column)


def is_grouped_headers(table: RawTable) -> bool:
    """Colspan group headers over a header row, with content-cell row titles."""
    head, sub = table.row(0), table.row(1)
    if head is None or sub is None:
        return False
    if not any(cell.is_header and _has_colspan(cell) for cell in head.cells):
        return False
    if not sub.headers:
        return False
    return any(_nests_content_cell(row.leading_cell) for row in table.rows[1:])


def is_complex_mixed(table: RawTable) -> bool:
    """Card-style table mixing content cells with full-width (colspan=3) note rows."""
    if not table.contains_class(SHADOW_CLASS):
        return False
    if table.node.find(class_=CONTENT_CELL_CLASS) is None:
        return False
    tail = table.rows[-2:]
    if not any(not cell.is_header and cell.colspan == 3 for row in tail for cell in row.cells):
        return False
    return any(cell.is_header and _has_colspan(cell) for cell in table.rows[0].cells)


def is_image(table: RawTable) -> bool:
    """Return True if any row starts with an image."""
    for row in table.rows:
        first = row.cell(0)
        if first is not None and first.has_image():
            return True
    return False


def is_rowspan(table: RawTable) -> bool:
    """First row opens with a rowspan title next to ordinary header cells."""
    head = table.row(0)
    if head is None:
        return False
    if head.first(_has_rowspan) is None:
        return False
    return any(cell.is_header and not _has_rowspan(cell) for cell in head.cells)


def is_matrix(table: RawTable) -> bool:
    """Row headers on every row and column headers on the first."""
    if not table.rows:
        return False
    if not all(any(cell.is_header and cell.scope == "row" for cell in row.cells) for row in table.rows):
        return False
    return any(cell.is_header and cell.scope == "col" for cell in table.rows[0].cells)


def is_single_header_colspan(table: RawTable) -> bool:
    """One colspan-N title header, a row of N sub-labels, then rows of N values."""
    head = table.row(0)
    if head is None or len(table) < 3:
        return False
    title = head.first(lambda cell: cell.is_header and _has_colspan(cell))
    if title is None:
        return False
    return len(table.rows[1]) == title.colspan and len(table.rows[2].data_cells) == title.colspan


def is_regular_with_colspan(table: RawTable) -> bool:
    """Return True if any data cell after the first row spans columns."""
    return any(not cell.is_header and _has_colspan(cell) for row in table.rows[1:] for cell in row.cells)


def is_single_header(table: RawTable) -> bool:
    """Return True if the first row carries more than one header cell."""
    return bool(table.rows) and len(table.rows[0].headers) > 1


def is_simple(table: RawTable) -> bool:
    """Plain grid: no header cells and no spans anywhere."""
    cells = table.cells()
    if any(cell.is_header for cell in cells):
        return False
    return not any(_has_colspan(cell) or _has_rowspan(cell) for cell in cells)


def is_article_header(table: RawTable) -> bool:
    """Row headers whose titles are marked up as ArticleHeader spans."""
    if not any(cell.is_header and cell.scope == "row" for cell in table.cells()):
        return False
    return table.node.find("span", class_=ARTICLE_HEADER_CLASS) is not None


def is_hierarchical_header(table: RawTable) -> bool:
    """Colspan title, a two-row header band, then headers again on row three."""
    if len(table) < 3:
        return False
    head, sub, third = table.rows[0], table.rows[1], table.rows[2]
    if not any(cell.is_header and _has_colspan(cell) for cell in head.cells):
        return False
    if not any(cell.is_header and cell.rowspan == 2 for cell in sub.cells):
        return False
    return bool(third.headers)


def is_nested_content(table: RawTable) -> bool:
    """Full-width title, then sections: a lone header row followed by data rows."""
    if len(table) < 3:
        return False
    head, body = table.rows[0], table.rows[1:]
    if len(head) != 1 or not head.cells[0].is_header:
        return False
    title = head.cells[0]
    widest = max(_row_width(row) for row in body)
    if not _has_colspan(title) or title.colspan < widest:
        return False
    if not is_lone_header_row(body[0]):
        return False
    if not all(is_lone_header_row(row) or not row.headers for row in body):
        return False
    # At least one section must actually hold data
    return any(is_lone_header_row(prev) and not cur.headers for prev, cur in zip(body, body[1:]))


# ─── Classification ──────────────────────────────────────────────────────────

SHAPE_RULES: tuple[tuple[TableShape, Callable[[RawTable], bool]], ...] = (
    (TableShape.EMPTY, is_empty),
    (TableShape.TWO_HEADER, is_two_header),
    (TableShape.COMPLEX_HIERARCHICAL, is_complex_hierarchical),
    (TableShape.ROUTE, is_route),
    (TableShape.STRUCTURED_CONTENT, is_structured_content),
    (TableShape.GROUPED_HEADERS, is_grouped_headers),
    (TableShape.COMPLEX_MIXED, is_complex_mixed),
    (TableShape.IMAGE, is_image),
    (TableShape.ROWSPAN, is_rowspan),
    (TableShape.MATRIX, is_matrix),
    (TableShape.SINGLE_HEADER_COLSPAN, is_single_header_colspan),
    (TableShape.REGULAR_WITH_COLSPAN, is_regular_with_colspan),
    (TableShape.SINGLE_HEADER, is_single_header),
    (TableShape.SIMPLE, is_simple),
    (TableShape.ARTICLE_HEADER, is_article_header),
    (TableShape.HIERARCHICAL_HEADER, is_hierarchical_header),
    (TableShape.NESTED_CONTENT, is_nested_content),
)


def classify(table: RawTable | Tag) -> TableShape:
    """Return the first shape in :data:`SHAPE_RULES` whose predicate matches, else ``regular``."""
    raw = table if isinstance(table, RawTable) else read_table(table)
    for shape, predicate in SHAPE_RULES:
        if predicate(raw):
            logger.debug("Classified table (%d rows) as %s", len(raw), shape.value)
            return shape
    logger.debug("Classified table (%d rows) as %s (fallback)", len(raw), TableShape.REGULAR.value)
    return TableShape.REGULAR
