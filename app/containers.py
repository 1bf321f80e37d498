# DI container wiring the agent layer
from typing import Iterable

from dependency_injector import containers, providers
from prometheus_client import CollectorRegistry

from core.agents.base_agent import BaseAgent
from core.agents.communication_bus import CommunicationBus
from core.agents.cost_tracker import CostTracker
from core.agents.orchestrator import Orchestrator
from core.config.settings import Settings
from core.monitoring.prometheus_metrics import AgentPrometheusMetrics
from services.ai_integration.agent import AIIntegrationAgent
from services.database.agent import DatabaseAgent
from services.database.query_optimizer import QueryOptimizer
from services.portfolio_analytics.agent import PortfolioAgent
from services.portfolio_analytics.metrics_cache import MetricsCache
from services.trade_processing.agent import TradeAgent


def build_orchestrator(agents: Iterable[BaseAgent]) -> Orchestrator:
    orchestrator = Orchestrator()
    for agent in agents:
        orchestrator.register_agent(agent)
    return orchestrator


class AppContainer(containers.DeclarativeContainer):
    """Application dependency injection container.

    The embedding application overrides the collaborator dependencies
    (analyzers and repositories) with its own implementations.
    """

    # Configuration
    settings = providers.Singleton(Settings)

    # --- Observability: Prometheus ---
    prometheus_registry = providers.Singleton(CollectorRegistry)
    prometheus_metrics = providers.Singleton(
        AgentPrometheusMetrics,
        registry=prometheus_registry,
        settings=settings,
    )

    communication_bus = providers.Singleton(CommunicationBus)

    # --- Collaborators supplied by the surrounding system ---
    trade_analyzer = providers.Dependency()
    fallback_trade_analyzer = providers.Dependency(default=providers.Object(None))
    trade_repository = providers.Dependency()
    fallback_trade_repository = providers.Dependency(default=providers.Object(None))

    # --- Agents ---
    ai_cost_tracker = providers.Singleton(CostTracker)

    ai_agent = providers.Singleton(
        AIIntegrationAgent,
        config=settings.provided.agents.ai,
        analyzer=trade_analyzer,
        fallback=fallback_trade_analyzer,
        cache_enabled=settings.provided.ai_cache.enabled,
        cache_ttl_ms=settings.provided.ai_cache.ttl_ms,
        cache_size=settings.provided.ai_cache.max_size,
        cost_per_call=settings.provided.ai_cache.cost_per_call,
        cost_tracker=ai_cost_tracker,
        bus=communication_bus,
        prometheus_metrics=prometheus_metrics,
        single_flight=settings.provided.single_flight_enabled,
    )

    query_optimizer = providers.Singleton(
        QueryOptimizer,
        cache_size=settings.provided.query_cache.max_size,
        trades_ttl_ms=settings.provided.query_cache.trades_ttl_ms,
        portfolio_ttl_ms=settings.provided.query_cache.portfolio_ttl_ms,
    )

    database_agent = providers.Singleton(
        DatabaseAgent,
        config=settings.provided.agents.database,
        repository=trade_repository,
        fallback_repository=fallback_trade_repository,
        optimizer=query_optimizer,
        bus=communication_bus,
        prometheus_metrics=prometheus_metrics,
        single_flight=settings.provided.single_flight_enabled,
    )

    metrics_cache = providers.Singleton(
        MetricsCache,
        max_size=settings.provided.metrics_cache.max_size,
        ttl_ms=settings.provided.metrics_cache.ttl_ms,
    )

    portfolio_agent = providers.Singleton(
        PortfolioAgent,
        config=settings.provided.agents.portfolio,
        metrics_cache=metrics_cache,
        prometheus_metrics=prometheus_metrics,
        single_flight=settings.provided.single_flight_enabled,
    )

    trade_agent = providers.Singleton(
        TradeAgent,
        config=settings.provided.agents.trade,
        prometheus_metrics=prometheus_metrics,
    )

    agents_list = providers.List(
        ai_agent,
        database_agent,
        trade_agent,
        portfolio_agent,
    )

    orchestrator = providers.Singleton(
        build_orchestrator,
        agents=agents_list,
    )
