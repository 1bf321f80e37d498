import asyncio
import pytest

from core.agents.types import AgentSource
from services.database import DatabaseAgent, QueryOptimizer


TRADES = {
    1: [{"id": 1, "symbol": "EURUSD"}, {"id": 2, "symbol": "GBPUSD"}, {"id": 3, "symbol": "XAUUSD"}],
}
PORTFOLIO = {1: {"total_return": 120.5, "win_rate": 0.6}}


class SlowRepository:
    async def get_trades(self, user_id, limit=None):
        await asyncio.sleep(0.05)
        return [{"id": "primary"}]

    async def get_portfolio_metrics(self, user_id):
        await asyncio.sleep(0.05)
        return {"source": "primary"}


@pytest.fixture
def repository(repository_factory):
    return repository_factory(TRADES, PORTFOLIO)


@pytest.fixture
def db_agent(agent_config, repository):
    return DatabaseAgent(agent_config(agent_id="db"), repository)


class TestQueryOptimizer:
    def test_keys_are_namespaced(self):
        assert QueryOptimizer.get_trades_key(7) == "trades:7:all"
        assert QueryOptimizer.get_trades_key(7, 10) == "trades:7:10"
        assert QueryOptimizer.get_portfolio_key(7) == "portfolio:7"

    @pytest.mark.asyncio
    async def test_namespaces_use_their_own_ttl(self, agent_config, repository, fake_clock):
        optimizer = QueryOptimizer(trades_ttl_ms=1000, portfolio_ttl_ms=5000, clock=fake_clock)
        agent = DatabaseAgent(agent_config(agent_id="db"), repository, optimizer=optimizer)

        await agent.get_trades_optimized(1)
        await agent.get_portfolio_metrics_optimized(1)
        fake_clock.advance_ms(2000)

        trades = await agent.get_trades_optimized(1)
        portfolio = await agent.get_portfolio_metrics_optimized(1)

        assert trades.cache_hit is False
        assert portfolio.cache_hit is True
        assert optimizer.cache.has(QueryOptimizer.get_trades_key(1))
        assert optimizer.cache.has(QueryOptimizer.get_portfolio_key(1))


@pytest.mark.asyncio
class TestDatabaseAgent:
    async def test_trades_are_cached_per_user_and_limit(self, db_agent, repository):
        first = await db_agent.get_trades_optimized(1, 2)
        second = await db_agent.get_trades_optimized(1, 2)
        unlimited = await db_agent.get_trades_optimized(1)

        assert first.data == TRADES[1][:2]
        assert second.cache_hit is True
        assert unlimited.cache_hit is False
        assert len(unlimited.data) == 3
        assert repository.calls == [("get_trades", 1, 2), ("get_trades", 1, None)]

    async def test_portfolio_metrics_cached(self, db_agent, repository):
        await db_agent.get_portfolio_metrics_optimized(1)
        result = await db_agent.get_portfolio_metrics_optimized(1)

        assert result.data == PORTFOLIO[1]
        assert result.cache_hit is True
        assert repository.calls == [("get_portfolio_metrics", 1)]

    async def test_timeout_uses_fallback_repository(self, agent_config, repository):
        agent = DatabaseAgent(agent_config(agent_id="db", timeout_ms=1), SlowRepository(), repository)

        trades = await agent.get_trades_optimized(1)
        portfolio = await agent.get_portfolio_metrics_optimized(1)

        assert trades.source is AgentSource.FALLBACK
        assert trades.data == TRADES[1]
        assert portfolio.source is AgentSource.FALLBACK
        assert portfolio.data == PORTFOLIO[1]
        assert repository.calls == [("get_trades", 1, None), ("get_portfolio_metrics", 1)]

    async def test_timeout_without_fallback_repository_fails(self, agent_config):
        agent = DatabaseAgent(agent_config(agent_id="db", timeout_ms=1), SlowRepository())

        result = await agent.get_trades_optimized(1)

        assert result.success is False
        assert result.source is AgentSource.AGENT
        assert result.error == "Agent timeout"

    async def test_expired_entries_requery(self, agent_config, repository, fake_clock):
        optimizer = QueryOptimizer(trades_ttl_ms=1000, clock=fake_clock)
        agent = DatabaseAgent(agent_config(agent_id="db"), repository, optimizer=optimizer)

        await agent.get_trades_optimized(1)
        fake_clock.advance_ms(1001)
        result = await agent.get_trades_optimized(1)

        assert result.cache_hit is False
        assert len(repository.calls) == 2

    async def test_clear_cache(self, db_agent, repository):
        await db_agent.get_portfolio_metrics_optimized(1)
        db_agent.clear_cache()
        result = await db_agent.get_portfolio_metrics_optimized(1)

        assert result.cache_hit is False
        assert len(repository.calls) == 2
