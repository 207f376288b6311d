from .api import ApiClient, ApiError, NetworkError
from .hooks import IdeasNetQueries
from .queries import QueryCache
from .session import Session
from .storage import FileTokenStorage, MemoryTokenStorage, TokenStorage

__all__ = [
    "ApiClient", "ApiError", "NetworkError", "IdeasNetQueries", "QueryCache",
    "Session", "FileTokenStorage", "MemoryTokenStorage", "TokenStorage",
]
