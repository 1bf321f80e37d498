"""LLM trade analysis behind a cost-tracking cache."""

from .agent import AIIntegrationAgent, TRADE_KEY_FIELDS

__all__ = ["AIIntegrationAgent", "TRADE_KEY_FIELDS"]
