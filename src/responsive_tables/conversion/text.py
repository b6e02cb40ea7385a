"""Text normalisation shared by every structure extractor.

Cell text arrives with editor noise: hard line breaks, runs of spaces,
non-breaking spaces and literal ``&nbsp;`` entities.  Everything an extractor
emits goes through :func:`clean_text`, and :func:`clean_texts` is the one place
where empty strings are dropped, so extractors never filter text themselves.
"""

from collections.abc import Iterable

from bs4 import Tag

from responsive_tables.conversion.patterns import (
    CONTENT_CELL_TEXT_CLASS,
    EMPTY_BREAK_RE,
    NBSP_ENTITY,
    PLACEHOLDER_VALUES,
    WHITESPACE_RE,
)


def clean_text(text: str | None) -> str:
    """Collapse whitespace and ``&nbsp;`` into single spaces and trim."""
    if not text:
        return ""
    return WHITESPACE_RE.sub(" ", text.replace(NBSP_ENTITY, " ")).strip()


def clean_texts(texts: Iterable[str | None]) -> list[str]:
    """Normalise each text and drop the ones that end up empty."""
    cleaned = (clean_text(text) for text in texts)
    return [text for text in cleaned if text]


def is_placeholder(text: str) -> bool:
    """Return True for the dash that stands in for an empty cell."""
    return text in PLACEHOLDER_VALUES


def node_text(node: Tag | None) -> str:
    """Normalised text content of *node* (empty string for None)."""
    if node is None:
        return ""
    # No separator: adjacent inline elements ("<b>Fee</b>s") must not be split
    return clean_text(node.get_text())


def paragraph_texts(node: Tag | None) -> list[str]:
    """Normalised, non-empty texts of the ``<p>`` elements nested in *node*."""
    if node is None:
        return []
    return clean_texts(p.get_text() for p in node.find_all("p"))


def label_texts(node: Tag | None) -> list[str]:
    """Normalised, non-empty texts of the editor's nested content-cell labels."""
    if node is None:
        return []
    return clean_texts(el.get_text() for el in node.find_all(class_=CONTENT_CELL_TEXT_CLASS))


def nested_text(node: Tag | None) -> str:
    """Text of a cell, preferring nested labels, then paragraphs, then plain text.

    Labels and paragraphs are joined with single spaces so a title split over
    several editor blocks reads as one line.
    """
    if node is None:
        return ""
    if node.find(class_=CONTENT_CELL_TEXT_CLASS) is not None:
        return " ".join(label_texts(node))
    if node.find("p") is not None:
        return " ".join(paragraph_texts(node))
    return node_text(node)


def filter_empty_paragraphs(markups: Iterable[str]) -> list[str]:
    """Drop paragraph markup that is empty, only ``&nbsp;``, or a bare ``<br>``."""
    kept: list[str] = []
    for markup in markups:
        stripped = markup.replace(NBSP_ENTITY, "").replace("\xa0", "").strip()
        if stripped and not EMPTY_BREAK_RE.match(stripped):
            kept.append(markup)
    return kept
