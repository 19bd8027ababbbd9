"""Symbol-partitioned ingestion.

Ledgers never share state, so the stream can be split by symbol, each
partition folded into its own LedgerTable on a worker thread, and the
partition tables merged. Each symbol's records stay in stream order.

Folding is pure Python, so under the GIL the worker threads run one at a
time: this mode gives the same result as a sequential run but no CPU
speedup. The ledgers and the `on_violation` callback stay in-process,
which a process pool would not allow.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor

from tickstats.data.market_data import Record
from tickstats.ledger.symbol_ledger import ViolationHandler
from tickstats.ledger.table import LedgerTable

logger = logging.getLogger(__name__)


def partition_by_symbol(records: Iterable[Record], partitions: int) -> list[list[Record]]:
    """
    Split records into `partitions` lists with no symbol in two lists.

    Symbols are assigned round-robin in order of first appearance.
    """
    if partitions < 1:
        raise ValueError(f"Partitions must be at least 1, got: {partitions}")

    buckets: list[list[Record]] = [[] for _ in range(partitions)]
    assignment: dict[str, int] = {}
    for record in records:
        index = assignment.get(record.symbol)
        if index is None:
            index = len(assignment) % partitions
            assignment[record.symbol] = index
        buckets[index].append(record)
    return buckets


def _fold(records: list[Record], on_violation: ViolationHandler | None) -> LedgerTable:
    table = LedgerTable(on_violation=on_violation)
    table.process_all(records)
    return table


def process_partitioned(
    records: Iterable[Record],
    workers: int,
    on_violation: ViolationHandler | None = None,
) -> LedgerTable:
    """Build a LedgerTable equivalent to a sequential run using `workers` threads."""
    buckets = [bucket for bucket in partition_by_symbol(records, workers) if bucket]
    logger.info(f"Processing {len(buckets)} symbol partitions on {workers} workers")

    result = LedgerTable(on_violation=on_violation)
    with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="ledger") as executor:
        futures = [executor.submit(_fold, bucket, on_violation) for bucket in buckets]
        for future in futures:
            result.merge(future.result())
    return result
