"""Command-line interface for linear-cli."""
