from __future__ import annotations

from typing import Any, Awaitable, Callable, FrozenSet, Optional, Protocol, runtime_checkable

from core.agents.metrics import AgentMetrics

# Async callable supplied by the embedding application for a primary or fallback path
AsyncOperation = Callable[..., Awaitable[Any]]


@runtime_checkable
class RoutableAgent(Protocol):
    """Surface the orchestrator relies on.

    ``capabilities`` lists the coroutine methods callers may route to by
    name; anything outside it is rejected before dispatch.
    """

    capabilities: FrozenSet[str]

    def get_id(self) -> str:
        ...

    def is_enabled(self) -> bool:
        ...

    def get_metrics(self) -> AgentMetrics:
        ...


@runtime_checkable
class TradeRepository(Protocol):
    """Read access to trade data, implemented by the persistence layer."""

    async def get_trades(self, user_id: int, limit: Optional[int] = None) -> Any:
        ...

    async def get_portfolio_metrics(self, user_id: int) -> Any:
        ...
