"""Browse an object bucket as an expandable HTML directory tree over WSGI."""

__version__ = "0.1.0"