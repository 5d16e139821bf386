"""Team depth charts: per-position player rankings grouped by league taxonomy."""

__version__ = "0.1.0"
