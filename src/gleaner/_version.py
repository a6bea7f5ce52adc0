"""Version information for Gleaner."""

__version__ = "0.1.0"
