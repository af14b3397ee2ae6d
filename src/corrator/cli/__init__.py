"""Command-line interface for corrator."""
