# Query result caching with per-namespace TTLs
from typing import Any, Callable, Optional

from core.agents.cache_store import CacheStore

TRADES_TTL_MS = 2 * 60 * 1000
PORTFOLIO_TTL_MS = 5 * 60 * 1000


class QueryOptimizer:
    """Caches read-heavy query results in two key namespaces.

    Trade lists go stale faster than portfolio aggregates, hence the
    separate TTLs. Both namespaces share one bounded store.
    """

    def __init__(
        self,
        cache_size: int = 500,
        trades_ttl_ms: int = TRADES_TTL_MS,
        portfolio_ttl_ms: int = PORTFOLIO_TTL_MS,
        clock: Optional[Callable[[], float]] = None,
    ):
        self.cache: CacheStore[Any] = CacheStore(cache_size, clock=clock)
        self.trades_ttl_ms = trades_ttl_ms
        self.portfolio_ttl_ms = portfolio_ttl_ms

    @staticmethod
    def get_trades_key(user_id: int, limit: Optional[int] = None) -> str:
        return f"trades:{user_id}:{'all' if limit is None else limit}"

    @staticmethod
    def get_portfolio_key(user_id: int) -> str:
        return f"portfolio:{user_id}"

    def clear(self) -> None:
        self.cache.clear()
