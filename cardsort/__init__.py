"""Card-sorting study analysis engine."""

__version__ = "0.3.0"
