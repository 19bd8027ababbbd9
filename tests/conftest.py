"""Shared fixtures."""

from __future__ import annotations

from datetime import datetime, timedelta

import pytest

from tickstats.constants import UpdateType
from tickstats.data.market_data import Record

SESSION_START = datetime(2015, 4, 20)


@pytest.fixture
def make_record():
    """Factory for records at `seconds` past midnight on a fixed day."""

    def _make(
        symbol: str = "ABC",
        kind: UpdateType = UpdateType.TRADE,
        seconds: float = 0,
        bid: float = 10.0,
        ask: float = 10.5,
        trade: float = 10.25,
        condition: str = "XT",
    ) -> Record:
        return Record(
            symbol=symbol,
            bid_price=bid,
            ask_price=ask,
            trade_price=trade,
            bid_volume=100,
            ask_volume=200,
            trade_volume=50,
            kind=kind,
            condition_code=condition,
            timestamp=SESSION_START + timedelta(seconds=seconds),
        )

    return _make


def feed_line(
    symbol: str = "ABC",
    update_type: int = 1,
    seconds: float = 34200,
    bid: float = 10.0,
    ask: float = 10.5,
    trade: float = 10.25,
    condition: str = "XT",
    date: str = "20150420",
) -> str:
    """One raw tick feed line in the 15-column layout."""
    fields = [
        symbol,
        "X",
        str(bid),
        str(ask),
        str(trade),
        "100",
        "200",
        "50",
        str(update_type),
        "0",
        date,
        str(seconds),
        "0",
        "0",
        condition,
    ]
    return ",".join(fields)
