"""OAuth login glue and read-through caching for session user lookup."""

__version__ = "0.1.0"
