"""tickstats Main Application."""

from __future__ import annotations

import logging
import time
from pathlib import Path

from tickstats.config_loader import AppConfig, load_config_with_overrides
from tickstats.constants import LOG_FORMAT
from tickstats.data.loader import LoadStats, TickDataLoader
from tickstats.ledger import LedgerTable
from tickstats.ledger.partition import process_partitioned
from tickstats.report.writer import ReportWriter

logger = logging.getLogger(__name__)


class TickStatsApp:
    """Main application orchestrator: load ticks, build ledgers, write the report."""

    def __init__(
        self,
        config_path: str | Path = "config/config.yaml",
        data_path: str | None = None,
        output_path: str | None = None,
        row_limit: int | None = None,
        workers: int | None = None,
    ):
        self.config_path = Path(config_path)
        self.config: AppConfig | None = None
        self._data_path_override = data_path
        self._output_path_override = output_path
        self._row_limit_override = row_limit
        self._workers_override = workers

        self.table: LedgerTable | None = None
        self.load_stats: LoadStats | None = None
        self.report_path: Path | None = None
        self.elapsed_ms: float = 0.0

    def _setup_logging(self) -> None:
        level = self.config.environment.log_level.value if self.config else "INFO"
        logging.basicConfig(level=level, format=LOG_FORMAT)

    def initialize(self) -> AppConfig:
        """Load config and configure logging."""
        self.config = load_config_with_overrides(
            self.config_path,
            data_path=self._data_path_override,
            output_path=self._output_path_override,
            row_limit=self._row_limit_override,
            workers=self._workers_override,
        )
        self._setup_logging()
        logger.info(f"Loaded config from {self.config_path}")
        return self.config

    def ingest(self) -> LedgerTable:
        """Read the configured tick file into a fresh LedgerTable."""
        if self.config is None:
            self.initialize()

        loader = TickDataLoader(self.config.input)
        records = loader.iter_records()

        if self.config.is_partitioned:
            self.table = process_partitioned(records, self.config.processing.workers)
        else:
            self.table = LedgerTable()
            self.table.process_all(records)

        self.load_stats = loader.stats
        violations = self.table.violations()
        if violations:
            logger.warning(f"{len(violations)} out-of-order events were skipped")
        logger.info(
            f"Ingested {self.table.total_orders()} orders for {self.table.symbol_count()} symbols"
        )
        return self.table

    def run(self, write_report: bool = True) -> LedgerTable:
        """Ingest the tick file and write the report."""
        start = time.perf_counter()

        table = self.ingest()
        if write_report:
            self.report_path = ReportWriter(self.config.report).write(table)

        self.elapsed_ms = (time.perf_counter() - start) * 1000
        logger.info(f"Run finished in {self.elapsed_ms:.0f} ms")
        return table
