from typing import Any, Optional

from core.agents.base_agent import BaseAgent
from core.agents.interfaces import TradeRepository
from core.agents.types import AgentConfig, AgentResult
from .query_optimizer import QueryOptimizer


class DatabaseAgent(BaseAgent):
    """Read-through cache in front of the trade repository.

    Writes are not observed here: callers that mutate trades must call
    ``clear_cache()`` themselves.
    """

    capabilities = frozenset({"get_trades_optimized", "get_portfolio_metrics_optimized"})

    def __init__(
        self,
        config: AgentConfig,
        repository: TradeRepository,
        fallback_repository: Optional[TradeRepository] = None,
        *,
        optimizer: Optional[QueryOptimizer] = None,
        **kwargs: Any,
    ):
        self.optimizer = optimizer if optimizer is not None else QueryOptimizer()
        super().__init__(config, cache=self.optimizer.cache, **kwargs)
        self.repository = repository
        self.fallback_repository = fallback_repository

    async def get_trades_optimized(self, user_id: int, limit: Optional[int] = None) -> AgentResult:
        return await self.execute(
            self.repository.get_trades,
            user_id,
            limit,
            cache_key=self.optimizer.get_trades_key(user_id, limit),
            ttl_ms=self.optimizer.trades_ttl_ms,
            fallback=self.fallback_repository.get_trades if self.fallback_repository else None,
        )

    async def get_portfolio_metrics_optimized(self, user_id: int) -> AgentResult:
        return await self.execute(
            self.repository.get_portfolio_metrics,
            user_id,
            cache_key=self.optimizer.get_portfolio_key(user_id),
            ttl_ms=self.optimizer.portfolio_ttl_ms,
            fallback=self.fallback_repository.get_portfolio_metrics if self.fallback_repository else None,
        )

    def clear_cache(self) -> None:
        self.optimizer.clear()
        self.logger.info("Query cache cleared")
