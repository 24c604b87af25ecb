"""Archive a season of statsheets from the remote database API as JSON files."""

__version__ = "0.1.0"
