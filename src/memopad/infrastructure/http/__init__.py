"""HTTP server infrastructure."""

from memopad.infrastructure.http.api_server import ApiServer

__all__ = ["ApiServer"]
