# Derived trade fields
from datetime import datetime
from typing import Any, Dict, Mapping, Optional, Union

Timestamp = Union[datetime, str, None]


def _to_datetime(value: Timestamp) -> Optional[datetime]:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    return datetime.fromisoformat(value)


def risk_reward_ratio(trade: Mapping[str, Any]) -> Optional[float]:
    """|take_profit - entry| / |entry - stop_loss|, None when undefined"""
    take_profit = trade.get("take_profit")
    stop_loss = trade.get("stop_loss")
    entry = trade.get("entry")
    if not take_profit or not stop_loss or entry is None:
        return None
    risk = entry - stop_loss
    if risk == 0:
        return None
    return abs((take_profit - entry) / risk)


def duration_seconds(trade: Mapping[str, Any]) -> Optional[float]:
    entry_time = _to_datetime(trade.get("entry_time"))
    exit_time = _to_datetime(trade.get("exit_time"))
    if entry_time is None or exit_time is None:
        return None
    return (exit_time - entry_time).total_seconds()


def enrich_trade(trade: Mapping[str, Any]) -> Dict[str, Any]:
    """Return a copy of ``trade`` with ``risk_reward`` and ``duration`` added"""
    enriched = dict(trade)
    enriched["risk_reward"] = risk_reward_ratio(trade)
    enriched["duration"] = duration_seconds(trade)
    return enriched
