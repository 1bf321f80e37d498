import threading
from dataclasses import asdict, dataclass, replace
from typing import Any, Dict, Optional


@dataclass
class AgentMetrics:
    total_requests: int = 0
    successful_requests: int = 0
    failed_requests: int = 0
    average_execution_time_ms: float = 0.0
    cache_hit_rate: float = 0.0
    last_error: Optional[str] = None

    @property
    def success_rate(self) -> float:
        if self.total_requests == 0:
            return 0.0
        return self.successful_requests / self.total_requests

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["success_rate"] = round(self.success_rate, 4)
        return data


class MetricsRecorder:
    """Running aggregate of per-agent call statistics.

    Latency and cache-hit rate are kept as incremental means over
    ``total_requests`` so no per-call history is retained.
    """

    def __init__(self):
        self._metrics = AgentMetrics()
        self._lock = threading.Lock()

    def record(
        self,
        success: bool,
        execution_time_ms: float,
        cache_hit: bool = False,
        error: Optional[str] = None,
    ) -> None:
        with self._lock:
            m = self._metrics
            m.total_requests += 1
            n = m.total_requests
            if success:
                m.successful_requests += 1
            else:
                m.failed_requests += 1
            m.average_execution_time_ms = (
                m.average_execution_time_ms * (n - 1) + execution_time_ms
            ) / n
            m.cache_hit_rate = (m.cache_hit_rate * (n - 1) + (1 if cache_hit else 0)) / n
            # Only the most recent error is kept
            if error:
                m.last_error = error

    def snapshot(self) -> AgentMetrics:
        with self._lock:
            return replace(self._metrics)

    def reset(self) -> None:
        with self._lock:
            self._metrics = AgentMetrics()
