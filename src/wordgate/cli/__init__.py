"""Command-line interface for wordgate."""
