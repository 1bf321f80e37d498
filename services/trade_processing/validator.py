# Trade input validation
from dataclasses import dataclass, field
from numbers import Real
from typing import Any, List, Mapping


@dataclass
class ValidationResult:
    valid: bool
    errors: List[str] = field(default_factory=list)


def _is_number(value: Any) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool)


def validate_trade(trade: Mapping[str, Any]) -> ValidationResult:
    """Check required trade fields, collecting every violation rather than stopping at the first"""
    errors: List[str] = []
    if not trade.get("symbol"):
        errors.append("Missing symbol")
    if not trade.get("direction"):
        errors.append("Missing direction")
    if not _is_number(trade.get("entry")):
        errors.append("Invalid entry price")
    if not _is_number(trade.get("exit")):
        errors.append("Invalid exit price")
    if not _is_number(trade.get("stop_loss")):
        errors.append("Invalid stop loss")
    if not _is_number(trade.get("take_profit")):
        errors.append("Invalid take profit")
    return ValidationResult(valid=not errors, errors=errors)
