import logging
import time
from typing import Any, Callable, Dict, Hashable, Tuple

from .api import ApiError, NetworkError

logger = logging.getLogger(__name__)

QueryKey = Tuple[Hashable, ...]

DEFAULT_RETRY = 2


class QueryCache:
    """Results of GET calls keyed by resource identity, e.g. ("idea", slug)."""

    def __init__(self, retry: int = DEFAULT_RETRY, retry_delay: float = 1.0):
        self.retry = retry
        self.retry_delay = retry_delay
        self._data: Dict[QueryKey, Any] = {}

    def __contains__(self, key: QueryKey) -> bool:
        return key in self._data

    def fetch(self, key: QueryKey, fetcher: Callable[[], Any], retry: int | None = None) -> Any:
        """Return the cached value or call `fetcher`, retrying failed attempts."""
        if key in self._data:
            return self._data[key]

        attempts = (self.retry if retry is None else retry) + 1
        for attempt in range(1, attempts + 1):
            try:
                value = fetcher()
                break
            except (ApiError, NetworkError) as exc:
                # Client errors will not go away by asking again.
                if isinstance(exc, ApiError) and exc.status_code < 500:
                    raise
                if attempt == attempts:
                    raise
                logger.info("Query %s failed (attempt %d/%d): %s", key, attempt, attempts, exc)
                if self.retry_delay:
                    time.sleep(self.retry_delay)

        self._data[key] = value
        return value

    def set(self, key: QueryKey, value: Any) -> None:
        self._data[key] = value

    def invalidate(self, *prefix: Hashable) -> int:
        """Drop every entry whose key starts with `prefix`; returns how many."""
        stale = [key for key in self._data if key[:len(prefix)] == prefix]
        for key in stale:
            del self._data[key]
        return len(stale)

    def clear(self) -> None:
        self._data.clear()
