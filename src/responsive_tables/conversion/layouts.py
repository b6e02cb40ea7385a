"""Item harvesting for the list and carousel output kinds.

These kinds ignore the table's structural shape: a list reads every row as an
image plus a rich content cell, and a carousel reads either one slide per row
(image/text pairs) or one slide per column.  The source DOM is never modified;
the paragraph that provides a list title is skipped rather than removed.
"""

import logging

from responsive_tables.conversion.extractors import make_item
from responsive_tables.conversion.patterns import ARTICLE_HEADER_CLASS
from responsive_tables.conversion.raw import RawCell, RawTable
from responsive_tables.conversion.schema import ContentBlock, Item, category_header, value
from responsive_tables.conversion.text import clean_texts, filter_empty_paragraphs, node_text

logger = logging.getLogger(__name__)

ROW_BASED = "row-based"
COLUMN_BASED = "column-based"


# ─── Clean List ──────────────────────────────────────────────────────────────


def harvest_clean_list(table: RawTable) -> list[Item]:
    """One item per row with data cells: image, underlined title, paragraphs, then list items."""
    items = []
    for row in table.rows:
        cells = row.data_cells
        if not cells:
            continue
        image = cells[0].find("img")
        content = cells[1] if len(cells) > 1 else None

        title = ""
        blocks: list[ContentBlock] = []
        if content is not None:
            underline = content.find("u")
            title_paragraph = None
            if underline is not None:
                title = node_text(underline)
                title_paragraph = underline.find_parent("p")
            paragraphs = [p for p in content.find_all("p") if p is not title_paragraph]
            blocks.extend(value(text) for text in clean_texts(p.get_text() for p in paragraphs))
            blocks.extend(value(text) for text in clean_texts(li.get_text() for li in content.find_all("li")))

        item = make_item(title, blocks, header_image=str(image) if image is not None else None)
        if item is not None:
            items.append(item)
    return items


# ─── Carousel ────────────────────────────────────────────────────────────────


def carousel_layout(table: RawTable) -> str:
    """``row-based`` when every row pairs an image with text, else ``column-based``."""
    rows = table.rows
    if not rows:
        return COLUMN_BASED
    leading = [row.data_cells[0] for row in rows if row.data_cells]
    has_images = any(cell.has_image() for cell in leading)
    paired = all(
        len(row.data_cells) >= 2 and row.data_cells[0].has_image() and row.data_cells[1].text for row in rows
    )
    return ROW_BASED if has_images and paired else COLUMN_BASED


class _Slide:
    """Accumulates one slide; the first image becomes the slide's header image."""

    def __init__(self):
        self.image: str | None = None
        self.blocks: list[ContentBlock] = []
        self.seen: set[str] = set()

    def add_image(self, markup: str) -> None:
        if markup in self.seen:
            return
        self.seen.add(markup)
        if self.image is None:
            self.image = markup
        else:
            self.blocks.append(value(markup, markup=True))

    def add(self, block: ContentBlock, unique: bool = False) -> None:
        if unique:
            if block.text in self.seen:
                return
            self.seen.add(block.text)
        self.blocks.append(block)

    def build(self) -> Item | None:
        return make_item("", self.blocks, header_image=self.image)


def _add_cell_content(slide: _Slide, cell: RawCell) -> None:
    """Image if the cell has one, otherwise its non-empty paragraphs and list items as markup."""
    image = cell.find("img")
    if image is not None:
        slide.add_image(str(image))
        return
    for markup in filter_empty_paragraphs(p.decode_contents() for p in cell.find_all("p")):
        slide.add(value(markup.strip(), markup=True))
    for item in cell.find_all("li"):
        markup = item.decode_contents().strip()
        if markup:
            slide.add(value(markup, markup=True))


def _row_slides(table: RawTable) -> list[Item]:
    slides = []
    for row in table.rows:
        if not row.data_cells:
            continue
        slide = _Slide()
        for cell in row.data_cells:
            _add_cell_content(slide, cell)
        slides.append(slide.build())
    return [slide for slide in slides if slide is not None]


def _column_slides(table: RawTable) -> list[Item]:
    if not table.rows:
        return []
    columns = len(table.rows[0].data_cells)
    uses_article_headers = table.node.find("span", class_=ARTICLE_HEADER_CLASS) is not None

    slides = []
    for column in range(columns):
        slide = _Slide()
        for row in table.rows:
            cells = row.data_cells
            if column >= len(cells):
                continue
            cell = cells[column]
            image = cell.find("img")
            if image is not None:
                slide.add_image(str(image))
            if uses_article_headers:
                header = cell.find("span", class_=ARTICLE_HEADER_CLASS)
                for text in clean_texts([header.get_text() if header is not None else None]):
                    slide.add(category_header(text), unique=True)
                link = cell.find("a")
                if link is not None:
                    slide.add(value(str(link), markup=True), unique=True)
                continue
            texts = cell.paragraphs or clean_texts([cell.text])
            for text in texts:
                slide.add(value(text), unique=True)
        slides.append(slide.build())
    return [slide for slide in slides if slide is not None]


def harvest_slides(table: RawTable) -> list[Item]:
    """Carousel slides, one per row or one per column depending on :func:`carousel_layout`."""
    layout = carousel_layout(table)
    logger.debug("Carousel layout: %s", layout)
    if layout == ROW_BASED:
        return _row_slides(table)
    return _column_slides(table)
