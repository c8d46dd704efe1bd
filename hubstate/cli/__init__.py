"""Command-line interface for hubstate."""
