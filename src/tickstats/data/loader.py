"""Tick Data Loader.

Streams accepted records from a delimited tick file.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path

from tickstats.config_loader import InputConfig
from tickstats.data.decoder import DecodeError, accept_condition, decode_line
from tickstats.data.market_data import Record

logger = logging.getLogger(__name__)


@dataclass
class LoadStats:
    """Counters for one pass over a tick file."""

    lines_read: int = 0
    accepted: int = 0
    skipped_condition: int = 0
    malformed: int = 0

    def summary(self) -> str:
        return (
            f"Read {self.lines_read} lines: {self.accepted} accepted, "
            f"{self.skipped_condition} filtered by condition code, {self.malformed} malformed"
        )


class TickDataLoader:
    """
    Load tick records from a delimited text file.

    Lines are decoded lazily; malformed lines (including invalid UTF-8)
    are logged and skipped, lines whose condition code is not eligible
    are dropped silently.

    Usage:
        loader = TickDataLoader(config.input)
        for record in loader.iter_records("ticks.csv"):
            table.process(record)
    """

    def __init__(self, config: InputConfig | None = None):
        self.config = config or InputConfig()
        self.stats = LoadStats()

    def iter_records(self, path: str | Path | None = None) -> Iterator[Record]:
        """Yield accepted records in file order."""
        file_path = Path(path or self.config.path)
        if not file_path.exists():
            raise FileNotFoundError(f"Data file not found: {file_path}")

        self.stats = LoadStats()
        limit = self.config.effective_row_limit
        logger.info(f"Started reading {file_path}")

        with open(file_path, "rb") as f:
            for line_number, raw in enumerate(f, start=1):
                if limit is not None and self.stats.lines_read >= limit:
                    break
                self.stats.lines_read += 1

                if not raw.strip():
                    continue

                try:
                    record = decode_line(raw.decode("utf-8"), self.config.delimiter)
                except (DecodeError, UnicodeDecodeError) as e:
                    self.stats.malformed += 1
                    logger.warning(f"Skipping invalid line {line_number}: {e}")
                    continue

                record = accept_condition(
                    record,
                    accepted_substring=self.config.accepted_condition,
                    empty_sentinel=self.config.empty_condition_sentinel,
                )
                if record is None:
                    self.stats.skipped_condition += 1
                    continue

                self.stats.accepted += 1
                yield record

        logger.info(f"Finished reading {file_path}. {self.stats.summary()}")

    def load(self, path: str | Path | None = None) -> list[Record]:
        """Read every accepted record into memory."""
        return list(self.iter_records(path))
