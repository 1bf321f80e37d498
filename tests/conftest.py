"""
Pytest configuration and shared fixtures for agent layer tests.
"""
import pytest
from typing import Any, Dict, List, Optional

from prometheus_client import CollectorRegistry

from core.agents.base_agent import BaseAgent
from core.agents.types import AgentConfig
from core.config.settings import Settings
from core.monitoring.prometheus_metrics import AgentPrometheusMetrics


class FakeClock:
    """Monotonic clock under test control, in seconds"""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance_ms(self, ms: float) -> None:
        self.now += ms / 1000.0


class PlainAgent(BaseAgent):
    """Minimal concrete agent for exercising BaseAgent directly"""

    capabilities = frozenset({"run"})

    async def run(self, value: Any) -> Any:
        return value


class FakeTradeRepository:
    """In-memory trade repository recording every call"""

    def __init__(self, trades: Optional[Dict[int, List[dict]]] = None,
                 portfolio: Optional[Dict[int, dict]] = None):
        self.trades = trades or {}
        self.portfolio = portfolio or {}
        self.calls: List[tuple] = []

    async def get_trades(self, user_id: int, limit: Optional[int] = None):
        self.calls.append(("get_trades", user_id, limit))
        rows = self.trades.get(user_id, [])
        return rows[:limit] if limit is not None else list(rows)

    async def get_portfolio_metrics(self, user_id: int):
        self.calls.append(("get_portfolio_metrics", user_id))
        return self.portfolio.get(user_id, {})


@pytest.fixture
def fake_clock():
    return FakeClock()


@pytest.fixture
def agent_config():
    """Factory for agent configs"""
    def _create(agent_id: str = "test", timeout_ms: int = 1000, enabled: bool = True,
                priority: int = 0) -> AgentConfig:
        return AgentConfig(
            id=agent_id,
            name=f"{agent_id} agent",
            enabled=enabled,
            priority=priority,
            timeout_ms=timeout_ms,
        )
    return _create


@pytest.fixture
def test_settings():
    """Test settings configuration."""
    return Settings(environment="testing")


@pytest.fixture
def prometheus_registry():
    return CollectorRegistry()


@pytest.fixture
def prometheus_metrics(prometheus_registry):
    return AgentPrometheusMetrics(registry=prometheus_registry)


@pytest.fixture
def sample_trade():
    return {
        "symbol": "EURUSD",
        "direction": "long",
        "entry": 1.1000,
        "exit": 1.1100,
        "stop_loss": 1.0950,
        "take_profit": 1.1150,
        "entry_time": "2024-03-01T10:00:00",
        "exit_time": "2024-03-01T12:30:00",
    }


@pytest.fixture
def make_agent(agent_config):
    """Factory for PlainAgent instances"""
    def _create(fallback=None, *, agent_id: str = "test", timeout_ms: int = 1000,
                enabled: bool = True, **kwargs) -> PlainAgent:
        config = agent_config(agent_id=agent_id, timeout_ms=timeout_ms, enabled=enabled)
        return PlainAgent(config, fallback, **kwargs)
    return _create


@pytest.fixture
def repository_factory():
    return FakeTradeRepository
