# Bootstrap for embedding the agent layer in a host application

from typing import Optional

from dependency_injector import providers

from app.containers import AppContainer
from core.agents.interfaces import AsyncOperation, TradeRepository
from core.config.settings import Settings
from core.logging import configure_logging, get_logger


def create_container(
    trade_analyzer: AsyncOperation,
    trade_repository: TradeRepository,
    *,
    fallback_trade_analyzer: Optional[AsyncOperation] = None,
    fallback_trade_repository: Optional[TradeRepository] = None,
    settings: Optional[Settings] = None,
) -> AppContainer:
    """Build the container with the host's collaborators and configure logging.

    The legacy analyzer and repository, when given, become the fallbacks of
    the AI and database agents.
    """
    container = AppContainer()
    if settings is not None:
        container.settings.override(providers.Object(settings))

    container.trade_analyzer.override(providers.Object(trade_analyzer))
    container.trade_repository.override(providers.Object(trade_repository))
    if fallback_trade_analyzer is not None:
        container.fallback_trade_analyzer.override(providers.Object(fallback_trade_analyzer))
    if fallback_trade_repository is not None:
        container.fallback_trade_repository.override(providers.Object(fallback_trade_repository))

    resolved = container.settings()
    configure_logging(resolved)
    logger = get_logger("agents.main", component="application")

    orchestrator = container.orchestrator()
    logger.info("Agent layer initialized",
                environment=resolved.environment.value,
                agents=[a.get_id() for a in orchestrator.get_enabled_agents()],
                ai_cache_enabled=resolved.ai_cache.enabled,
                single_flight=resolved.single_flight_enabled)
    return container
