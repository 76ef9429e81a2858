"""Command-line interface for the stych library."""
