"""Command-line interface for accountbook."""
