"""Tick feed line decoding.

Turns one delimited text line into a typed Record and applies the
condition-code acceptance rule.
"""

from __future__ import annotations

import csv
import dataclasses
import math
from datetime import date, datetime, timedelta

from tickstats.constants import (
    DATE_FORMAT,
    DEFAULT_ACCEPTED_CONDITION,
    DEFAULT_EMPTY_CONDITION_SENTINEL,
    FIELD_ASK_PRICE,
    FIELD_ASK_VOLUME,
    FIELD_BID_PRICE,
    FIELD_BID_VOLUME,
    FIELD_CONDITION,
    FIELD_COUNT,
    FIELD_DATE,
    FIELD_SECONDS,
    FIELD_SYMBOL,
    FIELD_TRADE_PRICE,
    FIELD_TRADE_VOLUME,
    FIELD_UPDATE_TYPE,
    UPDATE_TYPE_CODES,
    UpdateType,
)
from tickstats.data.market_data import Record


class DecodeError(ValueError):
    """A line's fields cannot be converted to a Record."""


def tokenize(line: str, delimiter: str = ",") -> list[str]:
    """Split a line into stripped fields."""
    rows = list(csv.reader([line.rstrip("\r\n")], delimiter=delimiter))
    if not rows:
        return []
    return [field.strip() for field in rows[0]]


def parse_date(value: str) -> date:
    """
    Parse a compact YYYYMMDD date.

    Example: "20150420" -> date(2015, 4, 20)
    """
    if len(value) != 8 or not value.isdigit():
        raise DecodeError(f"Invalid date: {value!r}")
    try:
        return datetime.strptime(value, DATE_FORMAT).date()
    except ValueError as e:
        raise DecodeError(f"Invalid date: {value!r}") from e


def make_timestamp(day: date, seconds_past_midnight: float) -> datetime:
    """Midnight of `day` plus whole seconds (fractions are truncated)."""
    if not math.isfinite(seconds_past_midnight) or seconds_past_midnight < 0:
        raise DecodeError(f"Seconds past midnight must be finite and non-negative, got: {seconds_past_midnight}")
    midnight = datetime(day.year, day.month, day.day)
    try:
        return midnight + timedelta(seconds=int(seconds_past_midnight))
    except OverflowError as e:
        raise DecodeError(f"Seconds past midnight out of range: {seconds_past_midnight}") from e


def parse_update_type(value: str | int) -> UpdateType:
    """Map the feed's 1/2/3 update code to an UpdateType."""
    try:
        code = int(value)
    except (TypeError, ValueError) as e:
        raise DecodeError(f"Invalid update type: {value!r}") from e
    if code not in UPDATE_TYPE_CODES:
        raise DecodeError(f"Update type must be 1, 2 or 3, got: {code}")
    return UPDATE_TYPE_CODES[code]


def _price(fields: list[str], index: int, name: str) -> float:
    try:
        value = float(fields[index])
    except ValueError as e:
        raise DecodeError(f"Invalid {name}: {fields[index]!r}") from e
    if not math.isfinite(value):
        raise DecodeError(f"{name} must be finite, got: {fields[index]!r}")
    if value < 0:
        raise DecodeError(f"{name} must be non-negative, got: {value}")
    return value


def _volume(fields: list[str], index: int, name: str) -> int:
    try:
        value = int(fields[index])
    except ValueError as e:
        raise DecodeError(f"Invalid {name}: {fields[index]!r}") from e
    if value < 0:
        raise DecodeError(f"{name} must be non-negative, got: {value}")
    return value


def decode_line(line: str, delimiter: str = ",") -> Record:
    """
    Decode one feed line into a Record.

    Raises:
        DecodeError: Wrong field count, unparsable value or unknown update type.
    """
    fields = tokenize(line, delimiter)
    if len(fields) < FIELD_COUNT:
        raise DecodeError(f"Expected {FIELD_COUNT} fields, got {len(fields)}")

    symbol = fields[FIELD_SYMBOL]
    if not symbol:
        raise DecodeError("Symbol must not be empty")

    try:
        seconds = float(fields[FIELD_SECONDS])
    except ValueError as e:
        raise DecodeError(f"Invalid seconds past midnight: {fields[FIELD_SECONDS]!r}") from e

    return Record(
        symbol=symbol,
        bid_price=_price(fields, FIELD_BID_PRICE, "bid price"),
        ask_price=_price(fields, FIELD_ASK_PRICE, "ask price"),
        trade_price=_price(fields, FIELD_TRADE_PRICE, "trade price"),
        bid_volume=_volume(fields, FIELD_BID_VOLUME, "bid volume"),
        ask_volume=_volume(fields, FIELD_ASK_VOLUME, "ask volume"),
        trade_volume=_volume(fields, FIELD_TRADE_VOLUME, "trade volume"),
        kind=parse_update_type(fields[FIELD_UPDATE_TYPE]),
        condition_code=fields[FIELD_CONDITION],
        timestamp=make_timestamp(parse_date(fields[FIELD_DATE]), seconds),
    )


def accept_condition(
    record: Record,
    accepted_substring: str = DEFAULT_ACCEPTED_CONDITION,
    empty_sentinel: str = DEFAULT_EMPTY_CONDITION_SENTINEL,
) -> Record | None:
    """
    Apply the condition-code filter.

    Returns the record (with the empty sentinel normalized to "") when it is
    eligible for ingestion, otherwise None.
    """
    code = record.condition_code
    if code == empty_sentinel:
        return dataclasses.replace(record, condition_code="")
    if accepted_substring in code:
        return record
    return None
