"""Command-line interface and terminal rendering."""
