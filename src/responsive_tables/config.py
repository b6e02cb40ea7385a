"""Shared configuration for the responsive table converter.

Values come from the environment (optionally a ``.env`` file at the project
root) so a host page integration can tune the breakpoint or search depth
without code changes.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

ROOT = Path(__file__).parent.parent.parent.resolve()
load_dotenv(ROOT / ".env")

# Viewports narrower than this many pixels are treated as mobile
MOBILE_BREAKPOINT = int(os.getenv("RESPONSIVE_TABLES_BREAKPOINT", "1054"))

# Upper bound on parent levels visited by the marker / table searches
MAX_SEARCH_DEPTH = int(os.getenv("RESPONSIVE_TABLES_MAX_DEPTH", "32"))

# Log input and converted table markup at DEBUG level
LOG_HTML = os.getenv("RESPONSIVE_TABLES_LOG_HTML", "").lower() in ("1", "true", "yes")

# BeautifulSoup tree builder; html.parser keeps fragments free of <html>/<body> wrappers
HTML_PARSER = os.getenv("RESPONSIVE_TABLES_PARSER", "html.parser")

# Class of the element that replaces a converted table
CONTAINER_CLASS = "responsive-table-container"


def is_mobile_width(width: int, breakpoint: int = MOBILE_BREAKPOINT) -> bool:
    """Return True if a viewport of *width* pixels gets the mobile rendering."""
    return width < breakpoint
