"""Conversion orchestrator: pairs markers with tables, converts, and restores.

:class:`TableConverter` owns one document root.  In mobile mode a scan pairs
every unconsumed marker with the table it governs, then gives every remaining
table a chance to find its marker, and converts each pair:

    read_table -> classify -> extract / harvest -> render -> swap

The swap is the last step, so a failure anywhere before it leaves the table in
the document untouched.  Leaving mobile mode restores every converted table
from the markup captured just before its conversion.

Every public method holds the converter's lock; a converter is the only writer
of its document.
"""

import functools
import logging
import threading
from dataclasses import dataclass, field

from bs4 import BeautifulSoup, Tag

from responsive_tables.config import (
    CONTAINER_CLASS,
    HTML_PARSER,
    LOG_HTML,
    MAX_SEARCH_DEPTH,
    MOBILE_BREAKPOINT,
    is_mobile_width,
)
from responsive_tables.conversion.classifiers import classify
from responsive_tables.conversion.errors import MissingTable, RestoreUnavailable
from responsive_tables.conversion.extractors import extract, table_heading
from responsive_tables.conversion.layouts import harvest_clean_list, harvest_slides
from responsive_tables.conversion.markers import (
    find_governed_table,
    find_governing_marker,
    is_consumed,
    iter_markers,
    marker_kind,
    marker_token,
)
from responsive_tables.conversion.patterns import CONVERTED_ATTR, NO_CONVERSION_ATTR, PROCESSED_MARKER_ATTR
from responsive_tables.conversion.raw import RawTable, read_table
from responsive_tables.conversion.registry import ConversionRegistry, is_under
from responsive_tables.conversion.rendering import HtmlRenderer, Renderer
from responsive_tables.conversion.schema import Item, OutputKind, TableShape

logger = logging.getLogger(__name__)

BOOKKEEPING_ATTRS = (CONVERTED_ATTR, NO_CONVERSION_ATTR, PROCESSED_MARKER_ATTR)


@dataclass
class ConversionResult:
    """Outcome of one successful conversion."""

    table: Tag = field(repr=False)
    container: Tag = field(repr=False)
    shape: TableShape
    kind: OutputKind
    items: list[Item]
    heading: str | None = None


def _synchronized(method):
    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        with self._lock:  # pylint: disable=protected-access
            return method(self, *args, **kwargs)

    return wrapper


def _drop_attr(node: Tag | None, name: str) -> None:
    if node is not None and node.has_attr(name):
        del node[name]


class TableConverter:
    """Converts marked tables under a root element to mobile markup and back."""

    def __init__(
        self,
        breakpoint: int = MOBILE_BREAKPOINT,
        renderer: Renderer | None = None,
        max_depth: int = MAX_SEARCH_DEPTH,
        viewport_width: int | None = None,
        parser: str = HTML_PARSER,
    ):
        self.breakpoint = breakpoint
        self.renderer = renderer or HtmlRenderer()
        self.max_depth = max_depth
        self.parser = parser
        self.registry = ConversionRegistry()
        self.root: Tag | None = None
        self._snapshot: str | None = None
        self._mobile = viewport_width is not None and is_mobile_width(viewport_width, breakpoint)
        self._lock = threading.RLock()

    @property
    def is_mobile(self) -> bool:
        return self._mobile

    # ─── Lifecycle ───────────────────────────────────────────────────────────

    @_synchronized
    def initialize(self, root: Tag, width: int) -> list[ConversionResult]:
        """Attach to *root*, snapshot its markup, and convert if *width* is a mobile width.

        A second call before :meth:`teardown` does nothing.
        """
        if self.registry.active:
            logger.debug("Converter already initialized; ignoring initialize()")
            return []
        self.registry.init()
        self.root = root
        self._snapshot = root.decode_contents()
        self._mobile = is_mobile_width(width, self.breakpoint)
        logger.info("Initialized converter (width=%d, mobile=%s)", width, self._mobile)
        return self.scan() if self._mobile else []

    @_synchronized
    def teardown(self) -> None:
        self.registry.clear()
        self.root = None
        self._snapshot = None
        self._mobile = False

    @_synchronized
    def handle_viewport_change(self, width: int) -> list[ConversionResult]:
        """Switch modes when *width* crosses the breakpoint.

        Entering mobile scans; entering desktop restores every converted table,
        falling back to a full reinitialisation when a restore is impossible.
        """
        mobile = is_mobile_width(width, self.breakpoint)
        if mobile == self._mobile:
            return []
        if self.root is None:
            logger.warning("Viewport change to %d before initialize(); ignoring", width)
            return []
        logger.info("Viewport width %d: switching to %s view", width, "mobile" if mobile else "desktop")
        self._mobile = mobile
        if mobile:
            return self.scan()
        if not self.restore_to_desktop():
            logger.warning("Desktop restore incomplete; reinitializing from snapshot")
            self.reinitialize()
        return []

    @_synchronized
    def reinitialize(self) -> list[ConversionResult]:
        """Put the root's snapshot back, start a fresh registry, and rescan in mobile mode."""
        if self.root is None:
            raise RuntimeError("TableConverter.reinitialize() called before initialize()")
        if self._snapshot is not None:
            fragment = BeautifulSoup(self._snapshot, self.parser)
            self.root.clear()
            for node in list(fragment.contents):
                self.root.append(node.extract())
        self.registry.init()
        logger.info("Reinitialized converter from snapshot")
        return self.scan() if self._mobile else []

    # ─── Scanning ────────────────────────────────────────────────────────────

    @_synchronized
    def scan(self, root: Tag | None = None) -> list[ConversionResult]:
        """Convert every marked table under *root* (the attached root by default)."""
        root = self.root if root is None else root
        if root is None:
            raise RuntimeError("TableConverter.scan() needs a root; call initialize() first")
        if not self._mobile:
            logger.debug("Desktop mode; scan skipped")
            return []

        self.registry.prune(self.root if self.root is not None else root)
        attempted: set[int] = set()
        results: list[ConversionResult] = []

        # Marker first: each marker claims the table that follows it
        for marker in iter_markers(root):
            if is_consumed(marker):
                continue
            try:
                table = find_governed_table(marker, root, self.max_depth)
                if table is None:
                    raise MissingTable(f"no table follows marker '{marker_token(marker)}'")
            except MissingTable as exc:
                logger.warning("Skipping marker: %s", exc)
                continue
            if table in self.registry or id(table) in attempted:
                continue
            attempted.add(id(table))
            result = self._apply(table, marker)
            if result is not None:
                results.append(result)

        # Table first: tables the marker walk did not reach look back for their own marker
        for table in root.find_all("table"):
            if id(table) in attempted or table in self.registry or not is_under(table, root):
                continue
            attempted.add(id(table))
            marker = find_governing_marker(table, root, self.max_depth)
            if marker is None:
                continue
            result = self._apply(table, marker)
            if result is not None:
                results.append(result)

        logger.info("Scan converted %d tables (%d tracked)", len(results), len(self.registry))
        return results

    def _apply(self, table: Tag, marker: Tag) -> ConversionResult | None:
        if marker_kind(marker) == OutputKind.NO_CONVERSION:
            self.exclude_table(table, marker)
            return None
        return self.convert_table(table, marker)

    # ─── Conversion ──────────────────────────────────────────────────────────

    @_synchronized
    def convert_table(self, table: Tag, marker: Tag) -> ConversionResult | None:
        """Replace *table* with the mobile rendering requested by *marker*.

        Returns None, leaving the document unchanged, when the converter is in
        desktop mode, the table is detached or already handled, the marker is
        not a marker, or extraction and rendering fail.
        """
        if not self._mobile:
            logger.debug("Desktop mode; not converting table")
            return None
        if table.parent is None:
            logger.debug("Table is detached from the document; not converting")
            return None
        kind = marker_kind(marker)
        if kind is None:
            logger.debug("Element is not a marker; not converting table")
            return None
        if kind == OutputKind.NO_CONVERSION:
            self.exclude_table(table, marker)
            return None
        if table in self.registry:
            logger.debug("Table already handled; not converting again")
            return None

        original = str(table)
        if LOG_HTML:
            logger.debug("Input table markup:\n%s", original)
        try:
            raw = read_table(table)
            shape = classify(raw)
            items = self._harvest(raw, shape, kind)
            if not items:
                logger.debug("No items for %s table with %s marker; leaving it as is", shape.value, kind.value)
                return None
            heading = table_heading(raw, shape) if kind == OutputKind.ACCORDION else None
            markup = self.renderer.render(items, kind, heading)
            container = self._container(markup)
        except Exception:  # pylint: disable=broad-exception-caught
            logger.exception("Failed to convert table with '%s' marker; leaving it as is", marker_token(marker))
            return None

        record = self.registry.capture(table)
        table.replace_with(container)
        table[CONVERTED_ATTR] = "true"
        marker[PROCESSED_MARKER_ATTR] = "true"
        record.shape = shape
        record.kind = kind
        record.marker = marker
        record.container = container
        record.processed = True

        logger.debug("Converted %s table to %s (%d items)", shape.value, kind.value, len(items))
        if LOG_HTML:
            logger.debug("Converted markup:\n%s", container)
        return ConversionResult(table=table, container=container, shape=shape, kind=kind, items=items, heading=heading)

    @_synchronized
    def exclude_table(self, table: Tag, marker: Tag) -> None:
        """Record *table* as deliberately left alone and consume its marker."""
        if table in self.registry:
            logger.debug("Table already handled; not excluding it")
            return
        record = self.registry.capture(table)
        record.excluded = True
        record.kind = OutputKind.NO_CONVERSION
        record.marker = marker
        table[NO_CONVERSION_ATTR] = "true"
        marker[PROCESSED_MARKER_ATTR] = "true"
        logger.debug("Table excluded from conversion by '%s' marker", marker_token(marker))

    @staticmethod
    def _harvest(raw: RawTable, shape: TableShape, kind: OutputKind) -> list[Item] | None:
        if kind == OutputKind.LIST:
            return harvest_clean_list(raw)
        if kind == OutputKind.CAROUSEL:
            return harvest_slides(raw)
        return extract(raw, shape)

    def _container(self, markup: str) -> Tag:
        fragment = BeautifulSoup(f'<div class="{CONTAINER_CLASS}">{markup}</div>', self.parser)
        return fragment.find("div").extract()

    # ─── Restoring ───────────────────────────────────────────────────────────

    @_synchronized
    def restore_table(self, table: Tag) -> str:
        """Put *table* back exactly as it was captured and forget it.

        Returns the original markup.  Raises RestoreUnavailable when the table
        was never captured or its replacement has left the document.
        """
        record = self.registry.get(table)
        if record is None or record.original_markup is None:
            raise RestoreUnavailable("no original markup captured for this table")

        if record.processed:
            container = record.container
            if container is None or container.parent is None:
                raise RestoreUnavailable("converted container is no longer in the document")
            _drop_attr(table, CONVERTED_ATTR)
            if str(table) == record.original_markup:
                container.replace_with(table)
            else:
                fragment = BeautifulSoup(record.original_markup, self.parser)
                container.replace_with(fragment.find("table").extract())
        _drop_attr(table, NO_CONVERSION_ATTR)
        _drop_attr(record.marker, PROCESSED_MARKER_ATTR)

        self.registry.forget(table)
        logger.debug("Restored %s table", record.shape.value if record.shape else "excluded")
        return record.original_markup

    @_synchronized
    def restore_to_desktop(self) -> bool:
        """Restore every tracked table, clear the bookkeeping flags, and empty the registry.

        Returns False if any table could not be restored.
        """
        complete = True
        restored = 0
        for record in self.registry:
            try:
                self.restore_table(record.table)
                restored += 1
            except RestoreUnavailable as exc:
                logger.warning("Could not restore table: %s", exc)
                complete = False

        if self.root is not None:
            for name in BOOKKEEPING_ATTRS:
                for node in self.root.find_all(attrs={name: True}):
                    del node[name]
        self.registry.init()
        self._mobile = False
        logger.info("Restored %d tables to desktop layout", restored)
        return complete

    # ─── String Entry Point ──────────────────────────────────────────────────

    @_synchronized
    def process(self, html: str) -> str:
        """Convert the marked tables of an HTML fragment; desktop mode returns it unchanged."""
        if not self._mobile:
            return html
        soup = BeautifulSoup(html, self.parser)
        self.scan(soup)
        return str(soup)


if __name__ == "__main__":
    logging.basicConfig(level=logging.DEBUG, format="%(asctime)s - %(levelname)s - %(message)s")

    SAMPLE = (
        "<p>mobile-accordion</p>"
        "<table><tr><th>Fare</th><th>Economy</th><th>Business</th></tr>"
        "<tr><td>Lisbon</td><td>120</td><td>480</td></tr>"
        "<tr><td>Porto</td><td>90</td><td>-</td></tr></table>"
    )
    converter = TableConverter(viewport_width=375)
    logger.info("Converted sample:\n%s", converter.process(SAMPLE))
