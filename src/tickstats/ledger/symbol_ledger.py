"""Per-symbol statistical ledger."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime

from tickstats.constants import UpdateType
from tickstats.data.market_data import Quote, Record
from tickstats.ledger import stats

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OutOfOrderEvent:
    """An event whose timestamp precedes the ledger's last seen one."""

    symbol: str
    kind: UpdateType
    previous: datetime
    current: datetime

    @property
    def seconds(self) -> float:
        """The (negative) interval that was not recorded."""
        return (self.current - self.previous).total_seconds()

    def __str__(self) -> str:
        return (
            f"{self.symbol} {self.kind.value} at {self.current.isoformat()} "
            f"precedes previous event at {self.previous.isoformat()}"
        )


@dataclass(frozen=True)
class LedgerSnapshot:
    """Derived statistics for one symbol, in report column order."""

    symbol: str
    order_count: int
    mean_trade_interval: float = 0.0
    median_trade_interval: float = 0.0
    max_trade_interval: float = 0.0
    mean_tick_interval: float = 0.0
    median_tick_interval: float = 0.0
    max_tick_interval: float = 0.0
    mean_spread: float = 0.0
    median_spread: float = 0.0

    def values(self) -> tuple[float, ...]:
        """The eight numeric report columns."""
        return (
            self.mean_trade_interval,
            self.median_trade_interval,
            self.max_trade_interval,
            self.mean_tick_interval,
            self.median_tick_interval,
            self.max_tick_interval,
            self.mean_spread,
            self.median_spread,
        )


ViolationHandler = Callable[[OutOfOrderEvent], None]


class SymbolLedger:
    """
    Running statistics for one instrument.

    Tracks:
    - Time between consecutive trades
    - Time between consecutive price changes on the bid or ask side
    - Bid/ask spread of every record

    Records must arrive in non-decreasing timestamp order. A record that
    would produce a negative interval is reported as an OutOfOrderEvent and
    its interval is skipped; last seen state still moves forward.
    """

    def __init__(self, symbol: str, on_violation: ViolationHandler | None = None) -> None:
        self.symbol = symbol
        self._on_violation = on_violation

        self.last_trade_time: datetime | None = None
        self.last_bid: Quote | None = None
        self.last_ask: Quote | None = None

        self.trade_intervals: list[float] = []
        self.tick_intervals: list[float] = []
        self.spreads: list[float] = []
        self.order_count = 0

        self.violations: list[OutOfOrderEvent] = []
        self._snapshot = LedgerSnapshot(symbol=symbol, order_count=0)

    def ingest(self, record: Record) -> LedgerSnapshot:
        """Apply one record and return the recomputed statistics."""
        if record.kind == UpdateType.TRADE:
            self._on_trade(record)
        elif record.kind == UpdateType.BID_CHANGE:
            self.last_bid = self._on_quote(record, record.bid_price, self.last_bid)
        elif record.kind == UpdateType.ASK_CHANGE:
            self.last_ask = self._on_quote(record, record.ask_price, self.last_ask)

        self.spreads.append(record.spread)
        self.order_count += 1

        self._snapshot = self._recompute()
        return self._snapshot

    def snapshot(self) -> LedgerSnapshot:
        return self._snapshot

    def _on_trade(self, record: Record) -> None:
        if self.last_trade_time is not None:
            self._append_interval(self.trade_intervals, record, self.last_trade_time)
        self.last_trade_time = record.timestamp

    def _on_quote(self, record: Record, price: float, last: Quote | None) -> Quote:
        # Equal price is not a tick, but still refreshes the baseline timestamp
        if last is not None and price != last.price:
            self._append_interval(self.tick_intervals, record, last.timestamp)
        return Quote(price=price, timestamp=record.timestamp)

    def _append_interval(self, series: list[float], record: Record, previous: datetime) -> None:
        seconds = (record.timestamp - previous).total_seconds()
        if seconds < 0:
            self._report_violation(
                OutOfOrderEvent(
                    symbol=self.symbol,
                    kind=record.kind,
                    previous=previous,
                    current=record.timestamp,
                )
            )
            return
        series.append(seconds)

    def _report_violation(self, event: OutOfOrderEvent) -> None:
        logger.warning(f"Out-of-order event skipped: {event}")
        self.violations.append(event)
        if self._on_violation is not None:
            self._on_violation(event)

    def _recompute(self) -> LedgerSnapshot:
        return LedgerSnapshot(
            symbol=self.symbol,
            order_count=self.order_count,
            mean_trade_interval=stats.mean(self.trade_intervals),
            median_trade_interval=stats.median(self.trade_intervals),
            max_trade_interval=stats.largest(self.trade_intervals),
            mean_tick_interval=stats.mean(self.tick_intervals),
            median_tick_interval=stats.median(self.tick_intervals),
            max_tick_interval=stats.largest(self.tick_intervals),
            mean_spread=stats.mean(self.spreads),
            median_spread=stats.median(self.spreads),
        )
