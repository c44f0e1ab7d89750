from .date_math import (
    add_months,
    days_remaining,
    format_date,
    format_instant,
    parse_instant,
    truncate_to_millis,
)
from .timezone_utils import TimezoneUtils

__all__ = [
    'add_months',
    'days_remaining',
    'format_date',
    'format_instant',
    'parse_instant',
    'truncate_to_millis',
    'TimezoneUtils',
]
