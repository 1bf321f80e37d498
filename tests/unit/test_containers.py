"""
Unit tests for the application container wiring
"""

import pytest
from unittest.mock import AsyncMock

from dependency_injector import providers

from app.containers import AppContainer
from core.agents.types import AgentSource
from core.config.settings import Settings


@pytest.fixture
def container(repository_factory):
    container = AppContainer()
    container.settings.override(providers.Object(Settings(environment="testing")))
    container.trade_analyzer.override(providers.Object(AsyncMock(return_value={"analysis": "ok"})))
    container.trade_repository.override(providers.Object(
        repository_factory({1: [{"id": 1, "pnl": 10.0}]}, {1: {"total_return": 10.0}})
    ))
    return container


def test_orchestrator_registers_all_agents(container):
    orchestrator = container.orchestrator()

    assert {a.get_id() for a in orchestrator.get_all_agents()} == {"ai", "db", "trade", "portfolio"}
    assert [a.get_id() for a in orchestrator.get_enabled_agents()] == ["ai", "db", "trade", "portfolio"]


def test_agents_share_observability(container):
    ai_agent = container.ai_agent()
    db_agent = container.database_agent()

    assert ai_agent.prometheus_metrics is db_agent.prometheus_metrics
    assert ai_agent.bus is db_agent.bus
    assert db_agent.cache is container.query_optimizer().cache
    assert ai_agent.config.timeout_ms == 10000


@pytest.mark.asyncio
async def test_route_through_container(container, sample_trade):
    orchestrator = container.orchestrator()

    analysis = await orchestrator.route("ai", "analyze_trade_optimized", sample_trade)
    trades = await orchestrator.route("db", "get_trades_optimized", 1)
    enriched = await orchestrator.route("trade", "validate_and_enrich", sample_trade)
    metrics = await orchestrator.route("portfolio", "get_optimized_metrics", trades.data)

    assert analysis.success and analysis.source is AgentSource.AGENT
    assert trades.data == [{"id": 1, "pnl": 10.0}]
    assert enriched.data["risk_reward"] == pytest.approx(3.0)
    assert metrics.data["total_return"] == pytest.approx(10.0)

    registry = container.prometheus_registry()
    assert registry.get_sample_value(
        "agent_requests_total", {"agent": "trade", "source": "agent", "outcome": "success"}) == 1.0


def test_cache_settings_reach_agents(repository_factory):
    settings = Settings(
        environment="testing",
        metrics_cache={"max_size": 3, "ttl_ms": 42},
        query_cache={"max_size": 9, "trades_ttl_ms": 11, "portfolio_ttl_ms": 22},
    )
    container = AppContainer()
    container.settings.override(providers.Object(settings))
    container.trade_analyzer.override(providers.Object(AsyncMock()))
    container.trade_repository.override(providers.Object(repository_factory()))

    portfolio_agent = container.portfolio_agent()
    db_agent = container.database_agent()

    assert portfolio_agent.metrics_cache is container.metrics_cache()
    assert portfolio_agent.metrics_cache.ttl_ms == settings.metrics_cache.ttl_ms
    assert portfolio_agent.metrics_cache.max_size == 3
    assert db_agent.optimizer is container.query_optimizer()
    assert db_agent.optimizer.trades_ttl_ms == 11
    assert db_agent.cache.max_size == 9
