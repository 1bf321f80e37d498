from numbers import Real
from typing import Any, Mapping, Optional

from core.agents.base_agent import BaseAgent
from core.agents.cache_store import CacheStore
from core.agents.cost_tracker import CostTracker
from core.agents.interfaces import AsyncOperation
from core.agents.types import AgentConfig, AgentResult, AgentSource

# Economic fields that determine the analysis; trades sharing them share a cache entry
TRADE_KEY_FIELDS = ("symbol", "direction", "entry", "exit", "stop_loss", "take_profit")

DEFAULT_ANALYSIS_TTL_MS = 30 * 60 * 1000
DEFAULT_CACHE_SIZE = 300
DEFAULT_COST_PER_CALL = 0.02


def _key_part(value: Any) -> str:
    if value is None:
        return ""
    # 100 and 100.0 are the same price
    if isinstance(value, Real) and not isinstance(value, bool) and float(value).is_integer():
        return str(int(value))
    return str(value)


class AIIntegrationAgent(BaseAgent):
    """
    Memoizes LLM trade analysis and tracks what the memoization saves.

    Cost accounting is flat: every analysis served from cache adds
    ``cost_per_call`` to the saved counter, every successful upstream call adds
    it to the spend counter. Fallback calls are not metered.
    """

    capabilities = frozenset({"analyze_trade_optimized"})

    def __init__(
        self,
        config: AgentConfig,
        analyzer: AsyncOperation,
        fallback: Optional[AsyncOperation] = None,
        *,
        cache_enabled: bool = True,
        cache_ttl_ms: int = DEFAULT_ANALYSIS_TTL_MS,
        cache_size: int = DEFAULT_CACHE_SIZE,
        cost_per_call: float = DEFAULT_COST_PER_CALL,
        cost_tracker: Optional[CostTracker] = None,
        **kwargs: Any,
    ):
        cache = CacheStore(cache_size) if cache_enabled else None
        super().__init__(config, fallback, cache=cache, **kwargs)
        self.analyzer = analyzer
        self.cache_ttl_ms = cache_ttl_ms
        self.cost_per_call = cost_per_call
        self.cost_tracker = cost_tracker if cost_tracker is not None else CostTracker()

    @staticmethod
    def generate_trade_cache_key(trade: Mapping[str, Any]) -> str:
        return "|".join(_key_part(trade.get(f)) for f in TRADE_KEY_FIELDS)

    async def analyze_trade_optimized(self, trade: Mapping[str, Any]) -> AgentResult:
        result = await self.execute(
            self.analyzer,
            trade,
            cache_key=self.generate_trade_cache_key(trade),
            ttl_ms=self.cache_ttl_ms,
        )
        if result.cache_hit:
            self.cost_tracker.add_cost_saved(self.cost_per_call)
            if self.prometheus_metrics:
                self.prometheus_metrics.record_cost_saved(self.config.id, self.cost_per_call)
        elif result.success and result.source is AgentSource.AGENT:
            self.cost_tracker.add_cost(self.cost_per_call)
            if self.prometheus_metrics:
                self.prometheus_metrics.record_cost(self.config.id, self.cost_per_call)
        return result

    def get_cost_savings(self) -> float:
        return self.cost_tracker.get_cost_saved()

    def get_total_cost(self) -> float:
        return self.cost_tracker.get_total_cost()

    def get_savings_rate(self) -> float:
        return self.cost_tracker.get_savings_rate()

    def clear_cache(self) -> None:
        if self.cache is not None:
            self.cache.clear()
