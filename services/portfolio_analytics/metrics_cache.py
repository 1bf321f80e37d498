import hashlib
import json
from typing import Any, Iterable, Mapping

from core.agents.cache_store import CacheStore

METRICS_TTL_MS = 5 * 60 * 1000


class MetricsCache(CacheStore[Any]):
    """Cache for computed portfolio metrics, one fixed TTL for every entry."""

    def __init__(self, max_size: int = 200, ttl_ms: int = METRICS_TTL_MS, **kwargs: Any):
        super().__init__(max_size, **kwargs)
        self.ttl_ms = ttl_ms

    @staticmethod
    def key_for(trades: Iterable[Mapping[str, Any]]) -> str:
        """Content digest of the trade list.

        Keying by content rather than trade count keeps two different
        portfolios of equal size from sharing an entry.
        """
        payload = json.dumps(list(trades), sort_keys=True, default=str)
        return f"portfolio-metrics:{hashlib.sha256(payload.encode()).hexdigest()}"
