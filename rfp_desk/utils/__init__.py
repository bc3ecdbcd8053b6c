"""Utility modules."""

from rfp_desk.utils.dates import (
    as_utc,
    calculate_duration_days,
    format_deadline,
    format_timestamp,
    parse_deadline,
    parse_timestamp,
    utc_now,
)
from rfp_desk.utils.logging import LoggerMixin, get_logger, setup_logging

__all__ = [
    "LoggerMixin",
    "as_utc",
    "calculate_duration_days",
    "format_deadline",
    "format_timestamp",
    "get_logger",
    "parse_deadline",
    "parse_timestamp",
    "setup_logging",
    "utc_now",
]
