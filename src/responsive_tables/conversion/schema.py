"""Pydantic models for the mobile item model.

Extractors turn a raw table grid into an ordered list of :class:`Item`; the
renderer turns those items into markup.  Items are frozen once built so the
list handed to the renderer is exactly the list the extractor produced.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, field_validator, model_validator


class TableShape(str, Enum):
    """Structural pattern assigned to a table by the classifier."""

    EMPTY = "empty"
    TWO_HEADER = "twoHeaderTable"
    COMPLEX_HIERARCHICAL = "complexHierarchicalTable"
    ROUTE = "routeTable"
    STRUCTURED_CONTENT = "structuredContentTable"
    GROUPED_HEADERS = "groupedHeaders"
    COMPLEX_MIXED = "complexMixedTable"
    IMAGE = "imageTable"
    ROWSPAN = "rowspan"
    MATRIX = "matrixTable"
    SINGLE_HEADER_COLSPAN = "singleHeaderColspan"
    REGULAR_WITH_COLSPAN = "regularWithColspan"
    SINGLE_HEADER = "singleHeader"
    SIMPLE = "simpleTable"
    ARTICLE_HEADER = "articleHeaderTable"
    HIERARCHICAL_HEADER = "hierarchicalHeaderTable"
    NESTED_CONTENT = "nestedContentTable"
    REGULAR = "regular"


class OutputKind(str, Enum):
    """Mobile representation requested by a marker."""

    ACCORDION = "accordion"
    LIST = "list"
    LIST_LIKE_ACCORDION = "list-like-accordion"
    CAROUSEL = "carousel"
    NO_CONVERSION = "no-conversion"


class BlockKind(str, Enum):
    """Hierarchy level of a content block: group > category > value."""

    GROUP_HEADER = "groupHeader"
    CATEGORY_HEADER = "categoryHeader"
    VALUE = "value"


class ContentBlock(BaseModel):
    """One labelled unit of an item's content.

    ``markup`` is set when ``text`` is a fragment of the source table's markup
    (an image, a button cell, a list item) that the renderer must insert
    verbatim instead of escaping.
    """

    model_config = ConfigDict(frozen=True)

    kind: BlockKind
    text: str
    markup: bool = False

    @field_validator("text")
    @classmethod
    def text_not_blank(cls, value: str) -> str:
        """Blank text is filtered during normalisation, so it never reaches a block."""
        if not value.strip():
            raise ValueError("content block text must not be blank")
        return value


class Item(BaseModel):
    """Normalised unit of mobile output: a title plus ordered content blocks."""

    model_config = ConfigDict(frozen=True)

    title: str = ""
    header_image: str | None = None
    content: tuple[ContentBlock, ...] = ()

    @model_validator(mode="after")
    def require_content_or_image(self) -> "Item":
        """An item without content is only meaningful when it shows an image."""
        if not self.content and not self.header_image:
            raise ValueError("item needs content blocks or a header image")
        return self


def group_header(text: str) -> ContentBlock:
    """Build a top-tier group label block."""
    return ContentBlock(kind=BlockKind.GROUP_HEADER, text=text)


def category_header(text: str) -> ContentBlock:
    """Build a column/field label block."""
    return ContentBlock(kind=BlockKind.CATEGORY_HEADER, text=text)


def value(text: str, markup: bool = False) -> ContentBlock:
    """Build a data value block."""
    return ContentBlock(kind=BlockKind.VALUE, text=text, markup=markup)
