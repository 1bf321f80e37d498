# Portfolio aggregate calculations
from numbers import Real
from typing import Any, Dict, Iterable, Mapping


def calculate_portfolio_metrics(trades: Iterable[Mapping[str, Any]]) -> Dict[str, Any]:
    """
    Aggregate closed-trade P&L into portfolio level statistics.

    Trades without a ``pnl`` (open trades) count toward ``trade_count`` but
    not toward wins or losses.

    Raises:
        TypeError: a trade is not a mapping or carries a non-numeric pnl
    """
    trades = list(trades)
    total_return = 0.0
    wins = 0
    losses = 0

    for trade in trades:
        if not isinstance(trade, Mapping):
            raise TypeError(f"Trade must be a mapping, got {type(trade).__name__}")
        pnl = trade.get("pnl")
        if pnl is None:
            continue
        if isinstance(pnl, bool) or not isinstance(pnl, Real):
            raise TypeError(f"Invalid pnl value: {pnl!r}")
        total_return += pnl
        if pnl > 0:
            wins += 1
        elif pnl < 0:
            losses += 1

    count = len(trades)
    return {
        "total_return": total_return,
        "win_rate": wins / count if count else 0.0,
        "loss_rate": losses / count if count else 0.0,
        "trade_count": count,
    }
