"""Market data structures and types."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from tickstats.constants import UpdateType


@dataclass(frozen=True)
class Record:
    """One accepted line of the tick feed."""

    symbol: str
    bid_price: float
    ask_price: float
    trade_price: float
    bid_volume: int
    ask_volume: int
    trade_volume: int
    kind: UpdateType
    condition_code: str
    timestamp: datetime

    @property
    def spread(self) -> float:
        """Return ask minus bid."""
        return self.ask_price - self.bid_price


@dataclass(frozen=True)
class Quote:
    """Last seen price on one side of the book."""

    price: float
    timestamp: datetime
