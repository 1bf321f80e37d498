"""Trade validation and enrichment."""

from .agent import TradeAgent
from .enricher import enrich_trade
from .validator import ValidationResult, validate_trade

__all__ = ["TradeAgent", "ValidationResult", "enrich_trade", "validate_trade"]
