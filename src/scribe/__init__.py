"""Scribe: blog post backend with a read-through cache for paginated listings."""

__version__ = "0.1.0"
