"""
Base agent: caching, timeout-bounded execution and fallback around one domain operation.
"""

import asyncio
import time
from abc import ABC
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, FrozenSet, Optional, TypeVar

from core.agents.cache_store import CacheStore
from core.agents.communication_bus import CommunicationBus
from core.agents.interfaces import AsyncOperation
from core.agents.metrics import AgentMetrics, MetricsRecorder
from core.agents.types import AgentConfig, AgentResult, AgentSource
from core.logging import get_logger
from core.monitoring.prometheus_metrics import AgentPrometheusMetrics
from core.utils.exceptions import (
    AgentTimeoutError,
    FallbackFailure,
    OperationFailure,
    create_error_context,
)

T = TypeVar("T")

FALLBACK_CHANNEL = "agent.fallback"

_MISSING = object()
_DEFAULT_FALLBACK = object()


@dataclass(frozen=True)
class _Outcome:
    """Result of one uncached computation, shared between coalesced callers"""
    success: bool
    data: Any
    source: AgentSource
    error: Optional[str] = None
    primary_error: Optional[str] = None


class BaseAgent(ABC):
    """Base class for all optimization agents"""

    # Coroutine methods the orchestrator may route to by name
    capabilities: FrozenSet[str] = frozenset()

    def __init__(
        self,
        config: AgentConfig,
        fallback: Optional[AsyncOperation] = None,
        *,
        cache: Optional[CacheStore] = None,
        bus: Optional[CommunicationBus] = None,
        prometheus_metrics: Optional[AgentPrometheusMetrics] = None,
        single_flight: bool = True,
    ):
        self.config = config
        self.fallback = fallback
        self.cache = cache
        self.bus = bus
        self.prometheus_metrics = prometheus_metrics
        self.single_flight = single_flight
        self.logger = get_logger(f"agents.{config.id}", component="agents")
        self._metrics = MetricsRecorder()
        self._in_flight: Dict[str, "asyncio.Future[_Outcome]"] = {}

    def get_id(self) -> str:
        return self.config.id

    def is_enabled(self) -> bool:
        return self.config.enabled

    def get_metrics(self) -> AgentMetrics:
        """Snapshot of the running metrics; mutating it does not affect the agent"""
        return self._metrics.snapshot()

    def reset_metrics(self) -> None:
        self._metrics.reset()

    async def execute_with_timeout(
        self, operation: Callable[[], Awaitable[T]], timeout_ms: Optional[int] = None
    ) -> T:
        """Await ``operation()`` for at most ``timeout_ms``.

        On expiry the operation is cancelled, not abandoned, and
        AgentTimeoutError is raised.
        """
        timeout_ms = timeout_ms or self.config.timeout_ms
        try:
            return await asyncio.wait_for(operation(), timeout=timeout_ms / 1000.0)
        except asyncio.TimeoutError as e:
            raise AgentTimeoutError(
                "Agent timeout", timeout_ms=timeout_ms, agent_id=self.config.id
            ) from e

    def update_metrics(
        self,
        success: bool,
        execution_time_ms: float,
        cache_hit: bool = False,
        error: Optional[str] = None,
    ) -> None:
        self._metrics.record(success, execution_time_ms, cache_hit=cache_hit, error=error)

    async def execute(
        self,
        operation: AsyncOperation,
        *args: Any,
        cache_key: Optional[str] = None,
        ttl_ms: Optional[float] = None,
        fallback: Any = _DEFAULT_FALLBACK,
        **kwargs: Any,
    ) -> AgentResult:
        """Run ``operation(*args, **kwargs)`` through cache, timeout and fallback.

        The fallback is called with the same arguments as the operation. A
        ``cache_key`` only takes effect when the agent owns a cache.
        """
        start = time.perf_counter()
        fallback_fn = self.fallback if fallback is _DEFAULT_FALLBACK else fallback
        use_cache = self.cache is not None and cache_key is not None
        if use_cache and ttl_ms is None:
            raise ValueError("ttl_ms is required when caching by cache_key")

        if use_cache:
            cached = self.cache.get(cache_key, _MISSING)
            if cached is not _MISSING:
                self.logger.debug("Cache hit", cache_key=cache_key)
                return self._finish(
                    _Outcome(success=True, data=cached, source=AgentSource.AGENT),
                    start, cache_hit=True, cache_lookup=True,
                )

            pending = self._in_flight.get(cache_key) if self.single_flight else None
            if pending is not None:
                self.logger.debug("Joining in-flight computation", cache_key=cache_key)
                outcome = await asyncio.shield(pending)
                # Fallback outcomes are never cache hits, for joiners as for the computing caller
                if outcome.source is AgentSource.FALLBACK:
                    cache_hit = None
                else:
                    cache_hit = outcome.success
                return self._finish(outcome, start, cache_hit=cache_hit, cache_lookup=True)

        compute = self._compute(
            operation, args, kwargs, fallback_fn,
            cache_key if use_cache else None, ttl_ms,
        )
        if use_cache and self.single_flight:
            task = asyncio.ensure_future(compute)
            self._in_flight[cache_key] = task
            task.add_done_callback(lambda t, key=cache_key: self._release_in_flight(key, t))
            outcome = await asyncio.shield(task)
        else:
            outcome = await compute

        cache_hit = False if use_cache and outcome.source is AgentSource.AGENT else None
        return self._finish(outcome, start, cache_hit=cache_hit, cache_lookup=use_cache)

    async def _compute(
        self,
        operation: AsyncOperation,
        args: tuple,
        kwargs: dict,
        fallback_fn: Optional[AsyncOperation],
        cache_key: Optional[str],
        ttl_ms: Optional[float],
    ) -> _Outcome:
        try:
            data = await self.execute_with_timeout(lambda: operation(*args, **kwargs))
        except AgentTimeoutError as e:
            failure = e
            reason = "timeout"
        except Exception as e:
            failure = OperationFailure(str(e) or type(e).__name__, cause=e, agent_id=self.config.id)
            reason = "error"
        else:
            if cache_key is not None:
                self.cache.set(cache_key, data, ttl_ms)
            return _Outcome(success=True, data=data, source=AgentSource.AGENT)

        primary_error = failure.message
        self.logger.warning("Primary operation failed",
                            **create_error_context(failure, "primary", {"reason": reason}))

        if fallback_fn is None:
            return _Outcome(success=False, data=None, source=AgentSource.AGENT,
                            error=primary_error, primary_error=primary_error)

        if self.prometheus_metrics:
            self.prometheus_metrics.record_fallback(self.config.id, reason)
        if self.bus:
            self.bus.publish(FALLBACK_CHANNEL, {
                "agent_id": self.config.id,
                "reason": reason,
                "error": primary_error,
            })

        try:
            data = await fallback_fn(*args, **kwargs)
        except Exception as fe:
            fallback_failure = FallbackFailure(
                str(fe) or type(fe).__name__, primary_error=primary_error, agent_id=self.config.id
            )
            self.logger.error("Fallback failed", **create_error_context(fallback_failure, "fallback"))
            return _Outcome(success=False, data=None, source=AgentSource.FALLBACK,
                            error=fallback_failure.message, primary_error=primary_error)

        return _Outcome(success=True, data=data, source=AgentSource.FALLBACK,
                        primary_error=primary_error)

    def _finish(
        self,
        outcome: _Outcome,
        start: float,
        cache_hit: Optional[bool],
        cache_lookup: bool,
    ) -> AgentResult:
        elapsed_ms = (time.perf_counter() - start) * 1000.0
        self.update_metrics(
            outcome.success, elapsed_ms,
            cache_hit=bool(cache_hit),
            error=outcome.primary_error or outcome.error,
        )
        if self.prometheus_metrics:
            if cache_lookup:
                self.prometheus_metrics.record_cache_lookup(self.config.id, bool(cache_hit))
            self.prometheus_metrics.record_request(
                self.config.id, outcome.source.value, outcome.success, elapsed_ms / 1000.0
            )
        return AgentResult(
            success=outcome.success,
            data=outcome.data,
            source=outcome.source,
            execution_time_ms=elapsed_ms,
            cache_hit=cache_hit,
            error=outcome.error,
        )

    def _release_in_flight(self, key: str, task: "asyncio.Future[_Outcome]") -> None:
        if self._in_flight.get(key) is task:
            del self._in_flight[key]
