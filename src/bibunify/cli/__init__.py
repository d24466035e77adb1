"""Command-line interface for bibunify."""
