import threading


class CostTracker:
    """Accumulates spend and avoided spend for a metered upstream (e.g. an LLM API).

    Both counters only grow for the lifetime of the tracker.
    """

    def __init__(self):
        self._total_cost = 0.0
        self._cost_saved = 0.0
        self._lock = threading.Lock()

    def add_cost(self, amount: float) -> None:
        if amount < 0:
            raise ValueError(f"Cost amount must be non-negative, got {amount}")
        with self._lock:
            self._total_cost += amount

    def add_cost_saved(self, amount: float) -> None:
        if amount < 0:
            raise ValueError(f"Saved amount must be non-negative, got {amount}")
        with self._lock:
            self._cost_saved += amount

    def get_total_cost(self) -> float:
        return self._total_cost

    def get_cost_saved(self) -> float:
        return self._cost_saved

    def get_savings_rate(self) -> float:
        """Ratio of avoided spend to actual spend, 0 when nothing was spent yet"""
        with self._lock:
            if self._total_cost == 0:
                return 0.0
            return self._cost_saved / self._total_cost
