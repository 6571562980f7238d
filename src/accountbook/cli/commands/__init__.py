"""Command groups registered on the accountbook CLI."""
