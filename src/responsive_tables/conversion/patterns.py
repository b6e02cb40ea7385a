"""Compiled regex patterns and constant tuples for table conversion.

These constants name the marker vocabulary, the CSS class conventions the
authoring editor emits for nested cell content, and the bookkeeping
attributes written onto converted tables and consumed markers.  Used by
text.py, raw.py, classifiers.py, extractors.py and markers.py.
"""

import re

# ─── Marker Vocabulary ───────────────────────────────────────────────────────

# Both prefixes are accepted; "table-" is the older authoring convention
ACCORDION_MARKERS = ("mobile-accordion", "table-accordion")
LIST_MARKERS = ("mobile-list", "table-list")
LIST_LIKE_ACCORDION_MARKERS = ("mobile-list-like-accordion", "table-list-like-accordion")
CAROUSEL_MARKERS = ("mobile-carousel", "table-carousel")
NO_CONVERSION_MARKERS = ("mobile-no-conversion", "table-no-conversion")

# Elements that may carry a marker token
MARKER_TAGS = ("p", "span")


# ─── Bookkeeping Attributes ──────────────────────────────────────────────────

CONVERTED_ATTR = "data-converted"
NO_CONVERSION_ATTR = "data-no-conversion"
PROCESSED_MARKER_ATTR = "data-processed-marker"


# ─── Authoring Class Names ───────────────────────────────────────────────────

# Wrapper the editor puts around rich cell content, and the label inside it
CONTENT_CELL_CLASS = "content-cell"
CONTENT_CELL_TEXT_CLASS = "content-cell-text"

# First-column cell of editor-generated tables
FIRST_COLUMN_CLASS = "first"

# Table class of the two-column structured layout
TWO_COLUMN_LAYOUT_CLASS = "type-two-layout"

# Card-style tables mark cells (or themselves) with this class
SHADOW_CLASS = "shadow"

# Inline span used as an article heading inside cells
ARTICLE_HEADER_CLASS = "ArticleHeader"

# Explicit header-cell class on hand-written tables
HEADER_CLASS = "header"


# ─── Text Patterns ───────────────────────────────────────────────────────────

# Any run of whitespace; str patterns also match U+00A0
WHITESPACE_RE = re.compile(r"\s+")

# Literal entity left behind when markup text was copied as plain text
NBSP_ENTITY = "&nbsp;"

# Bare line breaks that count as an empty paragraph
EMPTY_BREAK_RE = re.compile(r"^<br\s*/?>$", re.IGNORECASE)

# Placeholder value meaning "not applicable"
PLACEHOLDER_VALUES = ("-",)


# ─── Styling Cues ────────────────────────────────────────────────────────────

# Inline background colour, the editor's cue for a coloured header cell
BACKGROUND_COLOR_RE = re.compile(r"background(?:-color)?\s*:", re.IGNORECASE)

# White foreground text, used on spans inside dark header cells
WHITE_TEXT_RE = re.compile(
    r"(?<![\w-])color\s*:\s*(?:#fff(?:fff)?|white|rgb\(\s*255\s*,\s*255\s*,\s*255\s*\))",
    re.IGNORECASE,
)
