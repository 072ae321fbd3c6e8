"""Command-line interface for SGit."""
