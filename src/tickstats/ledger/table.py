"""Symbol-to-ledger routing and cross-symbol aggregates."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Iterator
from typing import NamedTuple

from tickstats.data.market_data import Record
from tickstats.ledger import stats
from tickstats.ledger.symbol_ledger import (
    LedgerSnapshot,
    OutOfOrderEvent,
    SymbolLedger,
    ViolationHandler,
)

logger = logging.getLogger(__name__)


class SymbolGap(NamedTuple):
    """Longest interval seen across all symbols."""

    symbol: str
    seconds: float


NO_GAP = SymbolGap("", 0.0)


class LedgerTable:
    """
    Owns one SymbolLedger per instrument for the lifetime of a run.

    Records are routed by symbol; a ledger is created the first time a
    symbol is seen. Aggregate queries scan ledgers in symbol order so that
    ties resolve the same way on every run.
    """

    def __init__(self, on_violation: ViolationHandler | None = None) -> None:
        self._ledgers: dict[str, SymbolLedger] = {}
        self._on_violation = on_violation

    def process(self, record: Record) -> LedgerSnapshot:
        """Route a record to its symbol's ledger."""
        ledger = self._ledgers.get(record.symbol)
        if ledger is None:
            ledger = SymbolLedger(record.symbol, on_violation=self._on_violation)
            self._ledgers[record.symbol] = ledger
            logger.debug(f"Created ledger for {record.symbol}")
        return ledger.ingest(record)

    def process_all(self, records: Iterable[Record]) -> int:
        """Process records in order; returns how many were processed."""
        count = 0
        for record in records:
            self.process(record)
            count += 1
        return count

    def symbol_count(self) -> int:
        return len(self._ledgers)

    def total_orders(self) -> int:
        return sum(ledger.order_count for ledger in self._ledgers.values())

    def longest_trade_gap(self) -> SymbolGap:
        """Symbol with the greatest max trade interval, or ("", 0.0) if none."""
        return self._longest(lambda ledger: ledger.trade_intervals)

    def longest_tick_gap(self) -> SymbolGap:
        """Symbol with the greatest max tick interval, or ("", 0.0) if none."""
        return self._longest(lambda ledger: ledger.tick_intervals)

    def _longest(self, series_of: Callable[[SymbolLedger], list[float]]) -> SymbolGap:
        best: SymbolGap | None = None
        for ledger in self:
            series = series_of(ledger)
            if not series:
                continue
            value = stats.largest(series)
            # Strict comparison keeps the first symbol on ties
            if best is None or value > best.seconds:
                best = SymbolGap(ledger.symbol, value)
        return best if best is not None else NO_GAP

    def snapshot(self) -> list[LedgerSnapshot]:
        """Per-symbol statistics, sorted by symbol."""
        return [ledger.snapshot() for ledger in self]

    def lookup(self, symbol: str) -> LedgerSnapshot | None:
        """Statistics for one symbol, or None if it was never ingested."""
        ledger = self._ledgers.get(symbol)
        if ledger is None:
            return None
        return ledger.snapshot()

    def ledger(self, symbol: str) -> SymbolLedger | None:
        return self._ledgers.get(symbol)

    def violations(self) -> list[OutOfOrderEvent]:
        """All ordering violations, grouped by symbol."""
        return [event for ledger in self for event in ledger.violations]

    def merge(self, other: LedgerTable) -> None:
        """
        Adopt the ledgers of a table built from a disjoint symbol partition.

        Raises:
            ValueError: If both tables hold a ledger for the same symbol.
        """
        overlap = self._ledgers.keys() & other._ledgers.keys()
        if overlap:
            raise ValueError(f"Cannot merge tables sharing symbols: {sorted(overlap)}")
        self._ledgers.update(other._ledgers)

    def __contains__(self, symbol: object) -> bool:
        return symbol in self._ledgers

    def __iter__(self) -> Iterator[SymbolLedger]:
        for symbol in sorted(self._ledgers):
            yield self._ledgers[symbol]

    def __len__(self) -> int:
        return len(self._ledgers)
