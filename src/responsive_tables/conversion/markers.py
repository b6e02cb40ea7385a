"""Pairing of marker elements with the tables they govern.

A marker is a ``p`` or ``span`` whose whole text (trimmed, case-insensitive)
is one of the marker tokens.  It governs the first table that follows it in
document order; the table looks backwards for the nearest marker before it.
Both walks are bounded loops over element siblings and parents, and both stop
at anything that already belongs to another pairing.
"""

import logging

from bs4 import BeautifulSoup, Tag

from responsive_tables.config import CONTAINER_CLASS, MAX_SEARCH_DEPTH
from responsive_tables.conversion.patterns import (
    ACCORDION_MARKERS,
    CAROUSEL_MARKERS,
    LIST_LIKE_ACCORDION_MARKERS,
    LIST_MARKERS,
    MARKER_TAGS,
    NO_CONVERSION_MARKERS,
    PROCESSED_MARKER_ATTR,
)
from responsive_tables.conversion.schema import OutputKind
from responsive_tables.conversion.text import clean_text

logger = logging.getLogger(__name__)

MARKER_KINDS: dict[str, OutputKind] = {
    token: kind
    for tokens, kind in (
        (ACCORDION_MARKERS, OutputKind.ACCORDION),
        (LIST_MARKERS, OutputKind.LIST),
        (LIST_LIKE_ACCORDION_MARKERS, OutputKind.LIST_LIKE_ACCORDION),
        (CAROUSEL_MARKERS, OutputKind.CAROUSEL),
        (NO_CONVERSION_MARKERS, OutputKind.NO_CONVERSION),
    )
    for token in tokens
}


# ─── Marker Recognition ──────────────────────────────────────────────────────


def marker_token(node: Tag | None) -> str:
    """Trimmed, lower-cased text of *node*."""
    if not isinstance(node, Tag):
        return ""
    return clean_text(node.get_text()).lower()


def marker_kind(node: Tag | None) -> OutputKind | None:
    """Output kind requested by *node*, or None when its text is not a marker token."""
    return MARKER_KINDS.get(marker_token(node))


def is_marker(node: Tag | None) -> bool:
    return marker_kind(node) is not None


def is_consumed(node: Tag) -> bool:
    """True once a marker has been paired with a converted or excluded table."""
    return node.get(PROCESSED_MARKER_ATTR) == "true"


def in_container(node: Tag) -> bool:
    """True if *node* is, or sits inside, the container that replaced a converted table."""
    if CONTAINER_CLASS in (node.get("class") or ()):
        return True
    return node.find_parent(class_=CONTAINER_CLASS) is not None


def marker_within(node: Tag) -> Tag | None:
    """Return the marker that *node* is or wraps (the innermost ``p``/``span`` carrying the token)."""
    if not is_marker(node):
        return None
    carriers = [el for el in node.find_all(MARKER_TAGS) if is_marker(el)]
    return carriers[-1] if carriers else node


def iter_markers(root: Tag) -> list[Tag]:
    """Unconsumed markers under *root*, innermost carrier only, in document order."""
    markers = []
    for element in root.find_all(MARKER_TAGS):
        if not is_marker(element) or is_consumed(element):
            continue
        if in_container(element):
            continue
        # "<p><span>mobile-list</span></p>" is one marker, carried by the span
        if any(is_marker(inner) for inner in element.find_all(MARKER_TAGS)):
            continue
        markers.append(element)
    return markers


def _contains_table(node: Tag) -> bool:
    """A table, or a converted table's container, at or below *node*."""
    if node.name == "table" or CONTAINER_CLASS in (node.get("class") or ()):
        return True
    return node.find("table") is not None or node.find(class_=CONTAINER_CLASS) is not None


def _is_boundary(node: Tag | None, root: Tag | None) -> bool:
    return node is None or node is root or isinstance(node, BeautifulSoup)


# ─── Searches ────────────────────────────────────────────────────────────────


def find_governing_marker(table: Tag, root: Tag | None = None, max_depth: int = MAX_SEARCH_DEPTH) -> Tag | None:
    """Walk up from *table*, scanning previous siblings nearest first at each level.

    A sibling that is (or contains) another table or a converted container, or a
    marker already paired with something else, ends the scan at that level.  The walk stops at *root*,
    at the document, or after *max_depth* levels.
    """
    current = table
    for _ in range(max_depth):
        sibling = current.find_previous_sibling()
        while sibling is not None:
            if _contains_table(sibling):
                break
            marker = marker_within(sibling)
            if marker is not None:
                if is_consumed(marker):
                    break
                logger.debug("Found marker '%s' for table", marker_token(marker))
                return marker
            sibling = sibling.find_previous_sibling()
        parent = current.parent
        if _is_boundary(parent, root):
            break
        current = parent
    logger.debug("No governing marker for table")
    return None


def find_governed_table(marker: Tag, root: Tag | None = None, max_depth: int = MAX_SEARCH_DEPTH) -> Tag | None:
    """Walk forward from *marker* to the first table among its following siblings (or theirs).

    Another unconsumed marker in the way means the table belongs to that one,
    so the search gives up.
    """
    current = marker
    for _ in range(max_depth):
        sibling = current.find_next_sibling()
        while sibling is not None:
            if sibling.name == "table":
                return sibling
            # Converted output is never a marker and never governed
            if in_container(sibling):
                sibling = sibling.find_next_sibling()
                continue
            inner = marker_within(sibling)
            if inner is not None and not is_consumed(inner):
                logger.debug("Marker '%s' reached another marker before any table", marker_token(marker))
                return None
            nested = sibling.find("table")
            if nested is not None:
                return nested
            sibling = sibling.find_next_sibling()
        parent = current.parent
        if _is_boundary(parent, root):
            break
        current = parent
    return None
