from typing import Any, Dict, List, Mapping, Optional

from core.agents.base_agent import BaseAgent
from core.agents.types import AgentConfig, AgentResult
from .calculator import calculate_portfolio_metrics
from .metrics_cache import MetricsCache


class PortfolioAgent(BaseAgent):
    """Cached portfolio aggregation.

    The calculation is deterministic, so a failure means malformed input and
    there is no fallback to try.
    """

    capabilities = frozenset({"get_optimized_metrics"})

    def __init__(self, config: AgentConfig, *, metrics_cache: Optional[MetricsCache] = None, **kwargs: Any):
        # An empty store is falsy (it defines __len__), so test identity
        self.metrics_cache = metrics_cache if metrics_cache is not None else MetricsCache()
        super().__init__(config, None, cache=self.metrics_cache, **kwargs)

    async def get_optimized_metrics(self, trades: List[Mapping[str, Any]]) -> AgentResult:
        try:
            cache_key = self.metrics_cache.key_for(trades)
        except (TypeError, ValueError) as e:
            self.logger.warning("Unhashable trade list", error=str(e))
            cache_key = None
        return await self.execute(
            self._calculate,
            trades,
            cache_key=cache_key,
            ttl_ms=self.metrics_cache.ttl_ms,
            fallback=None,
        )

    @staticmethod
    async def _calculate(trades: List[Mapping[str, Any]]) -> Dict[str, Any]:
        return calculate_portfolio_metrics(trades)

    def clear_cache(self) -> None:
        self.metrics_cache.clear()
