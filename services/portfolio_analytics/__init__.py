"""Portfolio aggregate metrics with result caching."""

from .agent import PortfolioAgent
from .calculator import calculate_portfolio_metrics
from .metrics_cache import MetricsCache

__all__ = ["PortfolioAgent", "MetricsCache", "calculate_portfolio_metrics"]
