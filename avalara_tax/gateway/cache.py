"""
Result caching around the GetTax pipeline.
Any object with get(key) and set(key, value, ttl) works as a backend,
e.g. a memcached or redis client.
"""
import logging
import re
import threading
import time
from typing import Any, Callable, Dict, Optional, Protocol, Tuple

from avalara_tax.core.exceptions import CacheError
from avalara_tax.core.models import TaxResult


logger = logging.getLogger(__name__)

_USABLE_KEY = re.compile(r'\w')


class CacheBackend(Protocol):
    def get(self, key: str) -> Any: ...

    def set(self, key: str, value: Any, ttl: Optional[float] = None) -> Any: ...


class InMemoryCache:
    """
    Thread-safe in-process backend with per-entry expiry.
    Suitable for a single process; use a shared cache across processes.
    """

    def __init__(self):
        self._entries: Dict[str, Tuple[Any, Optional[float]]] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> Any:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            value, expires_at = entry
            if expires_at is not None and time.monotonic() >= expires_at:
                del self._entries[key]
                return None
            return value

    def set(self, key: str, value: Any, ttl: Optional[float] = None) -> bool:
        expires_at = time.monotonic() + ttl if ttl else None
        with self._lock:
            self._entries[key] = (value, expires_at)
        return True


class ResultCache:
    """
    Get-before-compute, set-after-compute wrapper.
    Cache failures are logged and never fail the call.
    """

    def __init__(self, backend: Optional[CacheBackend] = None):
        self.backend = backend

    def get(self, key: str) -> Optional[TaxResult]:
        """Cached value for key, or None on a miss or backend failure"""
        if self.backend is None:
            return None
        try:
            return self.backend.get(key)
        except Exception as e:
            self._report(CacheError(f"Failed to read cache key >{key}<: {e}"))
            return None

    def set(self, key: str, value: TaxResult, ttl: float) -> bool:
        """Store value under key for ttl seconds; False when the backend refused it"""
        if self.backend is None:
            return False
        try:
            stored = self.backend.set(key, value, ttl)
        except Exception as e:
            self._report(CacheError(f"Failed to set cache with key >{key}<: {e}"))
            return False

        # memcached clients signal failure with a falsy return value
        if stored is False:
            self._report(CacheError(f"Failed to set cache with key >{key}<"))
            return False
        return True

    def compute(self, key: Optional[str], ttl: Optional[float],
                compute: Callable[[], TaxResult]) -> TaxResult:
        """
        Return the cached result for key, or compute and cache it.

        Args:
            key: Caller-chosen cache key; None disables caching for this call
            ttl: Seconds to keep the result; None disables caching for this call
            compute: Produces a fresh result on a miss

        Returns:
            TaxResult
        """
        if self.backend is None or key is None or ttl is None:
            return compute()

        if not _USABLE_KEY.search(key):
            logger.warning(f"Ignoring unusable cache key >{key}<; computing without cache")
            return compute()

        cached = self.get(key)
        if cached is not None:
            logger.debug(f"Cache hit for key >{key}<")
            return cached

        result = compute()
        self.set(key, result, ttl)
        return result

    @staticmethod
    def _report(error: CacheError):
        logger.warning(str(error))
