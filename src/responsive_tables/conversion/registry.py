"""Per-table conversion bookkeeping.

The registry is the source of truth for which tables were converted or
excluded and what their markup looked like before.  Records are keyed by the
identity of the table tag and hold a reference to it, so a key can never be
reused by another object while its record is alive.  The ``data-*`` attributes
written on the DOM only mirror this state.
"""

import logging
from dataclasses import dataclass

from bs4 import Tag

from responsive_tables.conversion.schema import OutputKind, TableShape

logger = logging.getLogger(__name__)


@dataclass
class ConversionRecord:
    """What happened to one table, and what is needed to undo it."""

    table: Tag
    original_markup: str | None = None
    shape: TableShape | None = None
    kind: OutputKind | None = None
    marker: Tag | None = None
    container: Tag | None = None
    processed: bool = False
    excluded: bool = False


class ConversionRegistry:
    """Records keyed by table identity, with an explicit init / clear / prune lifecycle."""

    def __init__(self):
        self._records: dict[int, ConversionRecord] = {}
        self.active = False

    def init(self) -> None:
        """Start a fresh session, discarding any previous records."""
        self._records.clear()
        self.active = True

    def clear(self) -> None:
        self._records.clear()
        self.active = False

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, table: Tag) -> bool:
        return self.get(table) is not None

    def __iter__(self):
        return iter(list(self._records.values()))

    def get(self, table: Tag) -> ConversionRecord | None:
        record = self._records.get(id(table))
        if record is not None and record.table is table:
            return record
        return None

    def capture(self, table: Tag) -> ConversionRecord:
        """Return the table's record, creating it with a snapshot of the current markup.

        The snapshot is taken once; later calls never overwrite it.
        """
        record = self.get(table)
        if record is None:
            record = ConversionRecord(table=table, original_markup=str(table))
            self._records[id(table)] = record
        elif record.original_markup is None:
            record.original_markup = str(table)
        return record

    def forget(self, table: Tag) -> ConversionRecord | None:
        record = self.get(table)
        if record is not None:
            del self._records[id(table)]
        return record

    def prune(self, root: Tag) -> int:
        """Drop records whose table (or replacement container) is no longer under *root*."""
        stale = [key for key, record in self._records.items() if not _attached(record, root)]
        for key in stale:
            del self._records[key]
        if stale:
            logger.debug("Pruned %d stale conversion records", len(stale))
        return len(stale)


def is_under(node: Tag | None, root: Tag) -> bool:
    """True if *node* is *root* or one of its descendants."""
    while node is not None:
        if node is root:
            return True
        node = node.parent
    return False


def _attached(record: ConversionRecord, root: Tag) -> bool:
    if record.processed and record.container is not None:
        return is_under(record.container, root)
    return is_under(record.table, root)
