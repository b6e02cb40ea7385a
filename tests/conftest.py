"""Shared test configuration and fixtures."""

from pathlib import Path

import pytest
from bs4 import BeautifulSoup
from dotenv import load_dotenv

from responsive_tables.conversion.raw import RawTable, read_table

# Load .env from project root for all tests
root = Path(__file__).parent.parent.resolve()
load_dotenv(root / ".env")


def parse(html: str) -> BeautifulSoup:
    """Parse an HTML fragment the way the converter does."""
    return BeautifulSoup(html, "html.parser")


@pytest.fixture
def make_soup():
    """Factory fixture: HTML fragment -> BeautifulSoup document."""
    return parse


@pytest.fixture
def make_table():
    """Factory fixture: ``<table>`` markup (rows only is fine) -> RawTable of the first table."""

    def _make(html: str) -> RawTable:
        if "<table" not in html:
            html = f"<table>{html}</table>"
        return read_table(parse(html).find("table"))

    return _make
