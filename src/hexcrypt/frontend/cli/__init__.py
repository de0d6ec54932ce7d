"""Command-line frontend of hexcrypt."""
