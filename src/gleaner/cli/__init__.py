"""Command-line interface for Gleaner."""
