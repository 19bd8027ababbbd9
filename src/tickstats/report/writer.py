"""Fixed-width statistics report.

Column layout: symbol column of `symbol_width`, then eight left-justified
numeric columns of `column_width`. Trade intervals use `trade_precision`
decimals, tick intervals `tick_precision`, spreads `spread_precision`
(default float formatting when unset).
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path

from tickstats.config_loader import ReportConfig
from tickstats.constants import REPORT_HEADER
from tickstats.ledger import LedgerSnapshot, LedgerTable

logger = logging.getLogger(__name__)

SEPARATOR = "=" * 93


def _fixed(value: float, precision: int | None) -> str:
    if precision is None:
        return f"{value:g}"
    return f"{value:.{precision}f}"


def format_header(config: ReportConfig) -> str:
    symbol, *columns = REPORT_HEADER
    cells = [symbol.ljust(config.symbol_width)]
    cells += [column.ljust(config.column_width) for column in columns]
    return "".join(cells).rstrip()


def format_row(snapshot: LedgerSnapshot, config: ReportConfig) -> str:
    """One report line for a symbol."""
    precisions = (
        config.trade_precision,
        config.trade_precision,
        config.trade_precision,
        config.tick_precision,
        config.tick_precision,
        config.tick_precision,
        config.spread_precision,
        config.spread_precision,
    )
    cells = [snapshot.symbol.ljust(config.symbol_width)]
    cells += [
        _fixed(value, precision).ljust(config.column_width)
        for value, precision in zip(snapshot.values(), precisions)
    ]
    return "".join(cells).rstrip()


def format_report(snapshots: Sequence[LedgerSnapshot], config: ReportConfig | None = None) -> str:
    """Header plus one row per snapshot."""
    config = config or ReportConfig()
    lines = [format_header(config)]
    lines += [format_row(snapshot, config) for snapshot in snapshots]
    return "\n".join(lines) + "\n"


def render_summary(table: LedgerTable, source: str | Path | None = None) -> str:
    """Console summary of a finished run."""
    lines = []
    if source is not None:
        lines.append(f"Data extracted from: ({source})")
    lines += [
        "Order Table Summary",
        f"Number of Symbols in Order Table: {table.symbol_count()}",
    ]

    for snapshot in table.snapshot():
        lines.append(f"\tOrder Book {snapshot.symbol} ({snapshot.order_count})")

    longest_trade = table.longest_trade_gap()
    longest_tick = table.longest_tick_gap()
    lines += [
        SEPARATOR,
        f"Total number of Orders: {table.total_orders()}",
        f"Overall Longest Time between Trades: {longest_trade.symbol}|{longest_trade.seconds:g} seconds",
        f"Overall Longest Time between Tick: {longest_tick.symbol}|{longest_tick.seconds:g} seconds",
    ]

    violations = table.violations()
    if violations:
        lines.append(f"Out-of-order events skipped: {len(violations)}")

    return "\n".join(lines)


class ReportWriter:
    """Write the per-symbol statistics table to a text file."""

    def __init__(self, config: ReportConfig | None = None):
        self.config = config or ReportConfig()

    def write(self, table: LedgerTable, path: str | Path | None = None) -> Path:
        """
        Write the report for every symbol in the table.

        Returns path to the written report.
        """
        output_path = Path(path or self.config.output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        with open(output_path, "w", encoding="utf-8") as f:
            f.write(format_report(table.snapshot(), self.config))

        logger.info(f"Report written: {output_path}")
        return output_path
