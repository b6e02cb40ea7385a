"""Exceptions raised while converting or restoring tables.

None of these escape the orchestrator's scan: StructuralMismatch is absorbed by
the extractor dispatcher, MissingTable is logged, and RestoreUnavailable is
reported to the viewport handler, which falls back to a reinitialisation.
"""


class TableConversionError(Exception):
    """Base class for conversion failures."""


class StructuralMismatch(TableConversionError):
    """The table does not have the rows or cells its shape requires."""


class MissingTable(TableConversionError):
    """A marker was found but no table follows it."""


class RestoreUnavailable(TableConversionError):
    """Restore was requested for a table whose original markup was never captured."""
