"""Size-based point planning for marketing teams."""

__version__ = "0.1.0"
