"""Core constants for tickstats."""

from enum import Enum


class UpdateType(str, Enum):
    """Kind of market event carried by a record."""

    TRADE = "trade"
    BID_CHANGE = "bid_change"
    ASK_CHANGE = "ask_change"


class LogLevel(str, Enum):
    """Logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"


# Wire codes used by the tick feed's updateType column
UPDATE_TYPE_CODES: dict[int, UpdateType] = {
    1: UpdateType.TRADE,
    2: UpdateType.BID_CHANGE,
    3: UpdateType.ASK_CHANGE,
}

# ============================================
# Input Layout
# ============================================

FIELD_COUNT = 15

FIELD_SYMBOL = 0
FIELD_BID_PRICE = 2
FIELD_ASK_PRICE = 3
FIELD_TRADE_PRICE = 4
FIELD_BID_VOLUME = 5
FIELD_ASK_VOLUME = 6
FIELD_TRADE_VOLUME = 7
FIELD_UPDATE_TYPE = 8
FIELD_DATE = 10
FIELD_SECONDS = 11
FIELD_CONDITION = 14

DATE_FORMAT = "%Y%m%d"

# ============================================
# Default Values
# ============================================

DEFAULT_ACCEPTED_CONDITION = "XT"
DEFAULT_EMPTY_CONDITION_SENTINEL = "@1"

DEFAULT_SYMBOL_WIDTH = 35
DEFAULT_COLUMN_WIDTH = 20
DEFAULT_TRADE_PRECISION = 6
DEFAULT_TICK_PRECISION = 4

REPORT_HEADER = (
    "Symbol",
    "Mean Trade Time",
    "Median Trade Time",
    "Longest Trade Time",
    "Mean Tick Time",
    "Median Tick Time",
    "Longest Tick Time",
    "Mean Spread",
    "Median Spread",
)

# ============================================
# Application Constants
# ============================================

APP_NAME = "tickstats"
LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
