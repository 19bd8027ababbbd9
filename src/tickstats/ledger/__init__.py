"""Statistics aggregation engine."""

from tickstats.ledger.symbol_ledger import LedgerSnapshot, OutOfOrderEvent, SymbolLedger
from tickstats.ledger.table import NO_GAP, LedgerTable, SymbolGap

__all__ = [
    "LedgerSnapshot",
    "LedgerTable",
    "NO_GAP",
    "OutOfOrderEvent",
    "SymbolGap",
    "SymbolLedger",
]
