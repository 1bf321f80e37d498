"""
Prometheus metrics for agent execution
Exposes request outcomes, cache effectiveness, fallbacks, latency and cost
"""

from prometheus_client import Counter, Histogram, CollectorRegistry
from typing import Any, Optional


class AgentPrometheusMetrics:
    """Prometheus collectors shared by all agents"""

    def __init__(self, registry: Optional[CollectorRegistry] = None, settings: Optional[Any] = None):
        self.registry = registry or CollectorRegistry()
        buckets = None
        if settings is not None and hasattr(settings, "monitoring"):
            buckets = getattr(settings.monitoring, "execution_latency_seconds", None)

        self.requests = Counter(
            'agent_requests_total',
            'Total agent calls by result source and outcome',
            ['agent', 'source', 'outcome'],
            registry=self.registry
        )

        self.cache_lookups = Counter(
            'agent_cache_lookups_total',
            'Agent cache lookups',
            ['agent', 'result'],
            registry=self.registry
        )

        self.fallbacks = Counter(
            'agent_fallbacks_total',
            'Fallback invocations after primary failure',
            ['agent', 'reason'],
            registry=self.registry
        )

        self.execution_latency = Histogram(
            'agent_execution_latency_seconds',
            'End-to-end agent call latency',
            ['agent'],
            buckets=buckets or [
                0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0
            ],
            registry=self.registry
        )

        self.cost = Counter(
            'agent_cost_total',
            'Accumulated upstream cost attributed to agent calls',
            ['agent'],
            registry=self.registry
        )

        self.cost_saved = Counter(
            'agent_cost_saved_total',
            'Upstream cost avoided by serving from cache',
            ['agent'],
            registry=self.registry
        )

    def record_request(self, agent_id: str, source: str, success: bool, duration_seconds: float) -> None:
        outcome = "success" if success else "failure"
        self.requests.labels(agent=agent_id, source=source, outcome=outcome).inc()
        self.execution_latency.labels(agent=agent_id).observe(duration_seconds)

    def record_cache_lookup(self, agent_id: str, hit: bool) -> None:
        self.cache_lookups.labels(agent=agent_id, result="hit" if hit else "miss").inc()

    def record_fallback(self, agent_id: str, reason: str) -> None:
        self.fallbacks.labels(agent=agent_id, reason=reason).inc()

    def record_cost(self, agent_id: str, amount: float) -> None:
        self.cost.labels(agent=agent_id).inc(amount)

    def record_cost_saved(self, agent_id: str, amount: float) -> None:
        self.cost_saved.labels(agent=agent_id).inc(amount)
