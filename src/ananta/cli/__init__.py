"""Command-line interface for ananta."""
