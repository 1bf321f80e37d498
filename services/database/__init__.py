"""Cached read access to trades and portfolio metrics."""

from .agent import DatabaseAgent
from .query_optimizer import QueryOptimizer

__all__ = ["DatabaseAgent", "QueryOptimizer"]
