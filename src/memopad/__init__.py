"""memopad - personal memo service."""

__version__ = "0.1.0"
