"""Tests for tick feed line decoding."""

from __future__ import annotations

from datetime import date, datetime

import pytest
from conftest import feed_line

from tickstats.constants import UpdateType
from tickstats.data.decoder import (
    DecodeError,
    accept_condition,
    decode_line,
    make_timestamp,
    parse_date,
    parse_update_type,
    tokenize,
)


class TestTokenize:
    def test_splits_and_strips(self) -> None:
        assert tokenize(" a , b,c\r\n") == ["a", "b", "c"]

    def test_custom_delimiter(self) -> None:
        assert tokenize("a;b;c", delimiter=";") == ["a", "b", "c"]

    def test_keeps_empty_fields(self) -> None:
        assert tokenize("a,,c,") == ["a", "", "c", ""]


class TestParseDate:
    def test_compact_date(self) -> None:
        assert parse_date("20150420") == date(2015, 4, 20)

    @pytest.mark.parametrize("value", ["2015042", "2015-04-20", "20151340", "abcdefgh", ""])
    def test_invalid_dates(self, value: str) -> None:
        with pytest.raises(DecodeError):
            parse_date(value)


class TestMakeTimestamp:
    def test_seconds_past_midnight(self) -> None:
        assert make_timestamp(date(2015, 4, 20), 34200) == datetime(2015, 4, 20, 9, 30)

    def test_fractional_seconds_truncated(self) -> None:
        assert make_timestamp(date(2015, 4, 20), 61.9) == datetime(2015, 4, 20, 0, 1, 1)

    def test_negative_seconds_rejected(self) -> None:
        with pytest.raises(DecodeError):
            make_timestamp(date(2015, 4, 20), -1)

    @pytest.mark.parametrize("seconds", [float("nan"), float("inf"), float("-inf")])
    def test_non_finite_seconds_rejected(self, seconds: float) -> None:
        with pytest.raises(DecodeError, match="finite"):
            make_timestamp(date(2015, 4, 20), seconds)

    def test_out_of_range_seconds_rejected(self) -> None:
        with pytest.raises(DecodeError, match="out of range"):
            make_timestamp(date(2015, 4, 20), 1e300)


class TestParseUpdateType:
    def test_codes(self) -> None:
        assert parse_update_type("1") == UpdateType.TRADE
        assert parse_update_type("2") == UpdateType.BID_CHANGE
        assert parse_update_type(3) == UpdateType.ASK_CHANGE

    @pytest.mark.parametrize("value", ["0", "4", "x", ""])
    def test_unknown_codes(self, value: str) -> None:
        with pytest.raises(DecodeError):
            parse_update_type(value)


class TestDecodeLine:
    def test_decodes_all_fields(self) -> None:
        record = decode_line(feed_line(symbol="ERICb.ST", update_type=2, seconds=34210.5))

        assert record.symbol == "ERICb.ST"
        assert record.bid_price == 10.0
        assert record.ask_price == 10.5
        assert record.trade_price == 10.25
        assert record.bid_volume == 100
        assert record.ask_volume == 200
        assert record.trade_volume == 50
        assert record.kind == UpdateType.BID_CHANGE
        assert record.condition_code == "XT"
        assert record.timestamp == datetime(2015, 4, 20, 9, 30, 10)
        assert record.spread == pytest.approx(0.5)

    def test_too_few_fields(self) -> None:
        with pytest.raises(DecodeError, match="Expected 15 fields"):
            decode_line("ABC,X,10.0,10.5")

    def test_bad_price(self) -> None:
        line = feed_line().replace("10.5", "ten", 1)
        with pytest.raises(DecodeError, match="ask price"):
            decode_line(line)

    def test_negative_price(self) -> None:
        with pytest.raises(DecodeError, match="non-negative"):
            decode_line(feed_line(bid=-1.0))

    @pytest.mark.parametrize("bid", [float("nan"), float("inf")])
    def test_non_finite_price(self, bid: float) -> None:
        with pytest.raises(DecodeError, match="bid price must be finite"):
            decode_line(feed_line(bid=bid))

    @pytest.mark.parametrize("seconds", ["nan", "inf", "1e400", "1e300"])
    def test_unrepresentable_seconds(self, seconds: str) -> None:
        with pytest.raises(DecodeError, match="Seconds past midnight"):
            decode_line(feed_line(seconds=seconds))

    def test_bad_update_type(self) -> None:
        with pytest.raises(DecodeError):
            decode_line(feed_line(update_type=7))

    def test_empty_symbol(self) -> None:
        with pytest.raises(DecodeError, match="Symbol"):
            decode_line(feed_line(symbol=""))

    def test_decode_error_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            decode_line("garbage")


class TestAcceptCondition:
    def test_xt_substring_accepted(self) -> None:
        record = decode_line(feed_line(condition="AXTB"))
        assert accept_condition(record) is record

    def test_sentinel_normalized_to_empty(self) -> None:
        record = accept_condition(decode_line(feed_line(condition="@1")))
        assert record is not None
        assert record.condition_code == ""

    def test_other_codes_rejected(self) -> None:
        assert accept_condition(decode_line(feed_line(condition="ZT"))) is None
        assert accept_condition(decode_line(feed_line(condition=""))) is None

    def test_custom_rules(self) -> None:
        record = decode_line(feed_line(condition="OB"))
        assert accept_condition(record, accepted_substring="OB") is record
