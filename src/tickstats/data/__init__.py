"""Tick feed decoding and loading."""

from tickstats.data.decoder import DecodeError, accept_condition, decode_line
from tickstats.data.loader import LoadStats, TickDataLoader
from tickstats.data.market_data import Quote, Record

__all__ = [
    "DecodeError",
    "LoadStats",
    "Quote",
    "Record",
    "TickDataLoader",
    "accept_condition",
    "decode_line",
]
