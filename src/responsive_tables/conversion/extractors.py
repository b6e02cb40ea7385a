"""Per-shape extraction of mobile items from a classified table.

Every ``extract_*`` function takes a :class:`RawTable` and returns the ordered
list of :class:`Item` its shape implies.  Extractors raise
:class:`StructuralMismatch` when a row or cell their shape needs is missing;
:func:`extract` turns that (and an empty result) into None so the caller leaves
the table untouched.

The shared building blocks at the top (header harvesting, row titles,
category/value interleaving) are the only places that decide how a header
label lines up with a data cell.
"""

import logging
from collections.abc import Callable, Iterable

from bs4 import Comment, NavigableString, Tag

from responsive_tables.conversion.classifiers import classify, is_lone_header_row
from responsive_tables.conversion.errors import StructuralMismatch
from responsive_tables.conversion.patterns import ARTICLE_HEADER_CLASS, FIRST_COLUMN_CLASS
from responsive_tables.conversion.raw import GridSlot, RawCell, RawRow, RawTable, read_table
from responsive_tables.conversion.schema import (
    ContentBlock,
    Item,
    TableShape,
    category_header,
    group_header,
    value,
)
from responsive_tables.conversion.text import clean_text, clean_texts, is_placeholder, nested_text, node_text

logger = logging.getLogger(__name__)

CellReader = Callable[[RawCell | None], list[str]]


# ─── Shared Building Blocks ──────────────────────────────────────────────────


def expand_columns(cells: Iterable[RawCell]) -> list[RawCell]:
    """Repeat every cell once per column it spans."""
    return [cell for cell in cells for _ in range(cell.colspan)]


def harvest_column_headers(row: RawRow | None, skip: int = 0, scope: str | None = None) -> list[str]:
    """Labels of the header cells in *row*, one per column they cover.

    *skip* drops leading header cells (usually the corner above the row titles);
    *scope* keeps only headers with that ``scope`` attribute.
    """
    if row is None:
        return []
    headers = [cell for cell in row.headers if scope is None or cell.scope == scope]
    return [cell.label for cell in expand_columns(headers[skip:])]


def row_title(row: RawRow) -> str:
    """Normalised text of the row's leading cell."""
    cell = row.leading_cell
    return cell.label if cell is not None else ""


def cell_values(cell: RawCell | None) -> list[str]:
    """One value per paragraph of *cell*, or its text when it has none; dashes dropped."""
    if cell is None:
        return []
    texts = cell.paragraphs or clean_texts([cell.text])
    return [text for text in texts if not is_placeholder(text)]


def label_values(cell: RawCell | None) -> list[str]:
    """The cell's nested label as a single value."""
    if cell is None:
        return []
    return [text for text in clean_texts([cell.label]) if not is_placeholder(text)]


def interleave(headers: list[str], cells: list[RawCell], read: CellReader = cell_values) -> list[ContentBlock]:
    """Emit a category block per header, each followed by the values of its aligned cell."""
    blocks: list[ContentBlock] = []
    for index, header in enumerate(headers):
        if header:
            blocks.append(category_header(header))
        cell = cells[index] if index < len(cells) else None
        blocks.extend(value(text) for text in read(cell))
    return blocks


def distinct_cells(line: list[GridSlot | None]) -> list[RawCell]:
    """Cells of one visual grid row in column order, each listed once."""
    seen: list[RawCell] = []
    for slot in line:
        if slot is not None and not any(slot.cell is cell for cell in seen):
            seen.append(slot.cell)
    return seen


def make_item(title: str, blocks: list[ContentBlock], header_image: str | None = None) -> Item | None:
    """Build an item, or None when there is nothing to show."""
    if not blocks and not header_image:
        return None
    return Item(title=title, header_image=header_image, content=tuple(blocks))


def _collect(candidates: Iterable[Item | None]) -> list[Item]:
    return [item for item in candidates if item is not None]


def _require_rows(table: RawTable, count: int, shape: TableShape) -> None:
    if len(table) < count:
        raise StructuralMismatch(f"{shape.value} needs at least {count} rows, table has {len(table)}")


def _element_blocks(cell: RawCell | None, skip_text: str = "") -> list[ContentBlock]:
    """One markup value per non-empty child element of *cell*, plus its loose text."""
    if cell is None:
        return []
    blocks: list[ContentBlock] = []
    for child in cell.node.children:
        if isinstance(child, Tag):
            text = node_text(child)
            if text and text != skip_text:
                blocks.append(value(str(child), markup=True))
        elif isinstance(child, NavigableString) and not isinstance(child, Comment):
            blocks.extend(value(text) for text in clean_texts([str(child)]))
    return blocks


# ─── Shape Extractors ────────────────────────────────────────────────────────


def extract_empty(table: RawTable) -> list[Item]:  # pylint: disable=unused-argument
    raise StructuralMismatch("table has no rows")


def extract_two_header(table: RawTable) -> list[Item]:
    """One item per header cell: its value below, then the shared footer cell as markup."""
    _require_rows(table, 3, TableShape.TWO_HEADER)
    head, body, foot = table.rows[0], table.rows[1], table.rows[2]
    button = foot.first(lambda cell: not cell.is_header and cell.colspan == 2) or foot.cell(0)

    items = []
    for index, header in enumerate(head.cells):
        blocks = [value(text) for text in cell_values(body.cell(index))]
        if button is not None and button.text:
            blocks.append(value(button.outer_markup, markup=True))
        items.append(make_item(header.text, blocks))
    return _collect(items)


def extract_complex_hierarchical(table: RawTable) -> list[Item]:
    """Group headers over sub-headers; rowspan data cells repeat in every row they cover."""
    _require_rows(table, 3, TableShape.COMPLEX_HIERARCHICAL)
    grid = table.grid
    group_cells = expand_columns(
        [cell for cell in table.rows[0].headers if cell.scope == "col"][1:]
    )
    sub_labels = [slot.cell.label if slot is not None else "" for slot in grid[1][1:]]
    width = max(len(group_cells), len(sub_labels))

    items = []
    for line in grid[2:]:
        title = line[0].cell.label if line and line[0] is not None else ""
        blocks: list[ContentBlock] = []
        current_group: RawCell | None = None
        for column in range(width):
            group = group_cells[column] if column < len(group_cells) else None
            if group is not None and group is not current_group and group.label:
                blocks.append(group_header(group.label))
            current_group = group
            sub = sub_labels[column] if column < len(sub_labels) else ""
            if sub:
                blocks.append(category_header(sub))
            slot = line[column + 1] if column + 1 < len(line) else None
            blocks.extend(value(text) for text in cell_values(slot.cell if slot else None))
        items.append(make_item(title, blocks))
    return _collect(items)


def extract_route(table: RawTable) -> list[Item]:
    """Two-column rows under a titled header pair: the second header labels every value."""
    _require_rows(table, 3, TableShape.ROUTE)
    headers = [cell.text for cell in table.rows[1].headers]
    if len(headers) < 2:
        raise StructuralMismatch("route table needs two headers in its second row")
    value_header = headers[1]

    items = []
    for row in table.rows[2:]:
        cells = row.data_cells
        if len(cells) < 2:
            logger.debug("Skipping route row with %d data cells", len(cells))
            continue
        blocks = [category_header(value_header)] if value_header else []
        blocks.extend(value(text) for text in cell_values(cells[1]))
        items.append(make_item(cells[0].text, blocks))
    return _collect(items)


def extract_structured_content(table: RawTable) -> list[Item]:
    """Editor two-column layout: nested header labels, ``td.first`` titles, colspan notes as bare values."""
    headers = [cell.label for cell in table.rows[0].headers[1:]] if table.rows else []

    items = []
    for row in table.rows[1:]:
        title_cell = row.first(lambda cell: not cell.is_header and cell.has_class(FIRST_COLUMN_CLASS))
        if title_cell is None:
            continue
        value_cells = [cell for cell in row.data_cells if cell is not title_cell]
        if any(cell.colspan > 1 for cell in value_cells):
            blocks = [value(text) for cell in value_cells for text in label_values(cell)]
        else:
            blocks = interleave(headers, value_cells, read=label_values)
        if title_cell.label:
            items.append(make_item(title_cell.label, blocks))
    return _collect(items)


def extract_grouped_headers(table: RawTable) -> list[Item]:
    """Colspan group headers; each covers that many sub-headers and value cells."""
    _require_rows(table, 2, TableShape.GROUPED_HEADERS)
    groups = [cell for cell in table.rows[0].headers if cell.colspan > 1]
    sub_labels = [cell.label for cell in table.rows[1].headers[1:]]

    items = []
    for row in table.rows[2:]:
        title_cell = row.leading_cell
        title = title_cell.label if title_cell is not None else ""
        if not title:
            continue
        value_cells = [cell for cell in row.cells if cell is not title_cell]
        blocks: list[ContentBlock] = []
        column = 0
        for group in groups:
            if group.label:
                blocks.append(group_header(group.label))
            for _ in range(group.colspan):
                if column < len(value_cells):
                    if column < len(sub_labels) and sub_labels[column]:
                        blocks.append(category_header(sub_labels[column]))
                    blocks.extend(value(text) for text in cell_values(value_cells[column]))
                column += 1
        items.append(make_item(title, blocks))
    return _collect(items)


def extract_complex_mixed(table: RawTable) -> list[Item]:
    """Card table: nested-label columns, and full-width note rows kept as plain values."""
    headers = [cell.label for cell in expand_columns(table.rows[0].headers[1:])] if table.rows else []

    items = []
    for row in table.rows[1:]:
        title_cell = row.leading_cell
        if title_cell is None:
            continue
        note = row.first(lambda cell: not cell.is_header and cell.colspan == 3)
        if note is not None:
            blocks = [value(text) for text in cell_values(note)]
        else:
            value_cells = [cell for cell in row.data_cells if cell is not title_cell]
            blocks = interleave(headers, value_cells, read=label_values)
        items.append(make_item(title_cell.label, blocks))
    return _collect(items)


def is_vertical_image_layout(table: RawTable) -> bool:
    """Images down the first column with text beside them (vs. a row of images)."""
    head = table.row(0)
    if head is None:
        return False
    cells = head.data_cells
    if not cells or not cells[0].has_image():
        return False
    return len(cells) < 2 or not cells[1].has_image()


def extract_image(table: RawTable) -> list[Item]:
    """Image-first tables, laid out vertically (one item per row) or horizontally (one per image)."""
    if not table.rows:
        raise StructuralMismatch("image table has no rows")

    items = []
    if is_vertical_image_layout(table):
        for row in table.rows:
            cells = row.data_cells
            if len(cells) < 2:
                continue
            image = cells[0].find("img")
            if image is None:
                continue
            content = cells[-1]
            underline = content.find("u")
            title = node_text(underline)
            items.append(make_item(title, _element_blocks(content, skip_text=title), header_image=str(image)))
        return _collect(items)

    for index, cell in enumerate(table.rows[0].cells):
        image = cell.find("img")
        if image is None:
            continue
        blocks = [block for row in table.rows[1:] for block in _element_blocks(row.cell(index))]
        items.append(make_item("", blocks, header_image=str(image)))
    return _collect(items)


def extract_rowspan(table: RawTable) -> list[Item]:
    """A rowspan title shared by every row it covers; each row adds its own label and values."""
    head = table.row(0)
    title_cell = head.first(lambda cell: cell.rowspan > 1) if head is not None else None
    if title_cell is None:
        raise StructuralMismatch("rowspan table has no rowspan cell in its first row")
    span_end = min(title_cell.rowspan, len(table))

    items = []
    for index, line in enumerate(table.grid):
        cells = distinct_cells(line)
        if index < span_end:
            title = title_cell.label
            rest = [cell for cell in cells if cell is not title_cell]
        else:
            title = cells[0].label if cells else ""
            rest = cells[1:]
        category = next((cell for cell in rest if cell.is_header), None)
        blocks = [category_header(category.label)] if category is not None and category.label else []
        for cell in rest:
            if not cell.is_header:
                blocks.extend(value(text) for text in cell_values(cell))
        items.append(make_item(title, blocks))
    return _collect(items)


def extract_matrix(table: RawTable) -> list[Item]:
    """Column-scoped headers across, a row-scoped header titling each row."""
    headers = harvest_column_headers(table.row(0), scope="col")

    items = []
    for row in table.rows[1:]:
        title_cell = row.first(lambda cell: cell.is_header and cell.scope == "row")
        if title_cell is None:
            continue
        items.append(make_item(title_cell.label, interleave(headers, row.data_cells)))
    return _collect(items)


def extract_single_header_colspan(table: RawTable) -> list[Item]:
    """A colspan title over a row of sub-labels; every later row becomes one item under the title."""
    _require_rows(table, 3, TableShape.SINGLE_HEADER_COLSPAN)
    title_cell = table.rows[0].first(lambda cell: cell.is_header and cell.colspan > 1)
    if title_cell is None:
        raise StructuralMismatch("first row has no colspan header")
    categories = [cell.label for cell in table.rows[1].cells]

    items = []
    for row in table.rows[2:]:
        cells = row.data_cells or list(row.cells)
        items.append(make_item(title_cell.label, interleave(categories, cells)))
    return _collect(items)


def extract_regular_with_colspan(table: RawTable) -> list[Item]:
    """Header row expanded per column; a data cell spanning N columns carries all N labels."""
    headers = harvest_column_headers(table.row(0))

    items = []
    for row in table.rows[1:]:
        title_cell = row.cell(0)
        if title_cell is None or not title_cell.label:
            continue
        blocks: list[ContentBlock] = []
        column = title_cell.colspan
        for cell in row.cells[1:]:
            for offset in range(cell.colspan):
                if column + offset < len(headers) and headers[column + offset]:
                    blocks.append(category_header(headers[column + offset]))
            blocks.extend(value(text) for text in cell_values(cell))
            column += cell.colspan
        items.append(make_item(title_cell.label, blocks))
    return _collect(items)


def extract_single_header(table: RawTable) -> list[Item]:
    """Header row across the top; the first cell of each later row is its title."""
    headers = harvest_column_headers(table.row(0), skip=1)

    items = []
    for row in table.rows[1:]:
        title_cell = row.cell(0)
        if title_cell is None:
            continue
        items.append(make_item(title_cell.label, interleave(headers, list(row.cells[1:]))))
    return _collect(items)


def extract_simple(table: RawTable) -> list[Item]:
    """Header row skipped; first cell titles the row, the other non-empty cells are its values."""
    items = []
    for row in table.rows[1:]:
        if not row.cells:
            continue
        title = row.cells[0].text
        if not title:
            continue
        blocks = [value(text) for text in clean_texts(cell.text for cell in row.cells[1:])]
        items.append(make_item(title, blocks))
    return _collect(items)


def extract_article_header(table: RawTable) -> list[Item]:
    """Row headers titled by ArticleHeader spans; ArticleHeader paragraphs become sub-labels."""
    items = []
    for row in table.rows:
        header = row.first(lambda cell: cell.is_header and cell.scope == "row")
        content = row.data_cells[0] if row.data_cells else None
        if header is None or content is None:
            continue
        span = header.find("span", class_=ARTICLE_HEADER_CLASS)
        if span is None:
            continue
        blocks: list[ContentBlock] = []
        for paragraph in content.find_all("p"):
            sub = paragraph.find("span", class_=ARTICLE_HEADER_CLASS)
            if sub is not None:
                blocks.extend(category_header(text) for text in clean_texts([sub.get_text()]))
            else:
                blocks.extend(value(text) for text in clean_texts([paragraph.get_text()]))
        title = node_text(span)
        if title:
            items.append(make_item(title, blocks))
    return _collect(items)


def extract_hierarchical_header(table: RawTable) -> list[Item]:
    """Three header rows, then data rows titled by their first two cells."""
    _require_rows(table, 3, TableShape.HIERARCHICAL_HEADER)
    column_headers = [cell.label for cell in table.rows[2].headers]

    items = []
    for row in table.rows[3:]:
        title = " - ".join(clean_texts(cell.label for cell in row.cells[:2]))
        blocks: list[ContentBlock] = []
        for index, cell in enumerate(row.cells[2:]):
            header = column_headers[index] if index < len(column_headers) else ""
            if header:
                blocks.append(group_header(header))
            paragraphs = clean_texts(nested_text(p) for p in cell.find_all("p"))
            blocks.extend(value(text) for text in paragraphs or cell_values(cell))
        items.append(make_item(title, blocks))
    return _collect(items)


def extract_nested_content(table: RawTable) -> list[Item]:
    """Sections opened by lone header rows; data rows become ``key<TAB>value`` lines."""
    _require_rows(table, 2, TableShape.NESTED_CONTENT)

    items = []
    title: str | None = None
    blocks: list[ContentBlock] = []
    for row in table.rows[1:]:
        if row.headers:
            if title is not None:
                items.append(make_item(title, blocks))
            title = row.headers[0].text if is_lone_header_row(row) else row_title(row)
            blocks = []
            continue
        if title is None:
            continue
        cells = row.data_cells
        if len(cells) >= 2:
            key, val = cells[0].text, cells[1].text
            if key and val:
                blocks.append(value(f"{key}\t{val}"))
        elif len(cells) == 1 and cells[0].text:
            blocks.append(value(cells[0].text))
    if title is not None:
        items.append(make_item(title, blocks))
    return _collect(items)


def extract_regular(table: RawTable) -> list[Item]:
    """Fallback: header row across the top, row header (or first cell) as title."""
    headers = harvest_column_headers(table.row(0), skip=1)

    items = []
    for row in table.rows[1:]:
        title_cell = row.first(lambda cell: cell.is_header) or row.cell(0)
        if title_cell is None:
            continue
        value_cells = [cell for cell in row.cells if cell is not title_cell]
        items.append(make_item(title_cell.label, interleave(headers, value_cells)))
    return _collect(items)


# ─── Dispatch ────────────────────────────────────────────────────────────────

EXTRACTORS: dict[TableShape, Callable[[RawTable], list[Item]]] = {
    TableShape.EMPTY: extract_empty,
    TableShape.TWO_HEADER: extract_two_header,
    TableShape.COMPLEX_HIERARCHICAL: extract_complex_hierarchical,
    TableShape.ROUTE: extract_route,
    TableShape.STRUCTURED_CONTENT: extract_structured_content,
    TableShape.GROUPED_HEADERS: extract_grouped_headers,
    TableShape.COMPLEX_MIXED: extract_complex_mixed,
    TableShape.IMAGE: extract_image,
    TableShape.ROWSPAN: extract_rowspan,
    TableShape.MATRIX: extract_matrix,
    TableShape.SINGLE_HEADER_COLSPAN: extract_single_header_colspan,
    TableShape.REGULAR_WITH_COLSPAN: extract_regular_with_colspan,
    TableShape.SINGLE_HEADER: extract_single_header,
    TableShape.SIMPLE: extract_simple,
    TableShape.ARTICLE_HEADER: extract_article_header,
    TableShape.HIERARCHICAL_HEADER: extract_hierarchical_header,
    TableShape.NESTED_CONTENT: extract_nested_content,
    TableShape.REGULAR: extract_regular,
}


def extract(table: RawTable | Tag, shape: TableShape | None = None) -> list[Item] | None:
    """Run the extractor for *shape* (classified when omitted).

    Returns None when the table lacks the structure the shape needs or yields
    no items; callers treat None as "leave the table as it is".
    """
    raw = table if isinstance(table, RawTable) else read_table(table)
    shape = shape or classify(raw)
    try:
        items = EXTRACTORS[shape](raw)
    except StructuralMismatch as exc:
        logger.debug("Extraction failed for %s: %s", shape.value, exc)
        return None
    if not items:
        logger.debug("Extraction for %s produced no items", shape.value)
        return None
    logger.debug("Extracted %d items from %s table", len(items), shape.value)
    return items


def table_heading(table: RawTable | Tag, shape: TableShape) -> str | None:
    """Table-level title shown above the items, for the shapes that carry one."""
    raw = table if isinstance(table, RawTable) else read_table(table)
    head = raw.row(0)
    if head is None:
        return None
    if shape == TableShape.ROUTE:
        cell = head.first(lambda c: c.is_header and c.colspan == 2)
        heading = cell.text if cell is not None else ""
    elif shape in (TableShape.HIERARCHICAL_HEADER, TableShape.NESTED_CONTENT):
        cell = head.first(lambda c: c.is_header and c.colspan > 1)
        heading = nested_text(cell.node) if cell is not None else ""
    else:
        return None
    return clean_text(heading) or None
