"""Convert desktop HTML tables into mobile accordions, lists and carousels."""

from responsive_tables.conversion.pipeline import ConversionResult, TableConverter
from responsive_tables.conversion.schema import BlockKind, ContentBlock, Item, OutputKind, TableShape

__all__ = [
    "BlockKind",
    "ContentBlock",
    "ConversionResult",
    "Item",
    "OutputKind",
    "TableConverter",
    "TableShape",
]
