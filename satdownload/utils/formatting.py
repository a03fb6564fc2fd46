"""
Helper functions for formatting dates, sequence numbers and sizes into strings.
"""

from datetime import date, datetime

from satdownload.exceptions import InvalidDateError

# Accepted --date layouts, tried in order.
DATE_INPUT_FORMATS = ("%Y%m%d", "%Y-%m-%d", "%Y/%m/%d")


def strip_quotes(value: str) -> str:
    """Removes single and double quotes, as left behind by some shells and INI files."""
    return value.replace("'", "").replace('"', "")


def parse_reference_date(value: str | None, today: date | None = None) -> date:
    """
    Parses the reference date used to build file names.

    Args:
        value: A date string in one of DATE_INPUT_FORMATS, or None for today.
        today: Overrides the current date (used when value is None).

    Raises:
        InvalidDateError: If the string matches none of the accepted formats.
    """
    if value is None or not value.strip():
        return today or date.today()

    cleaned = strip_quotes(value).strip()
    for fmt in DATE_INPUT_FORMATS:
        try:
            return datetime.strptime(cleaned, fmt).date()
        except ValueError:
            continue
    raise InvalidDateError(
        f"Invalid date specified: {value}. Use YYYYMMDD, YYYY-MM-DD or YYYY/MM/DD."
    )


def format_file_date(day: date) -> str:
    """Formats a date as YYYYMMDD, the layout used inside file names."""
    return day.strftime("%Y%m%d")


def format_timestamp(moment: datetime) -> str:
    """Formats a moment as YYYY-MM-DD HH:MM:SS."""
    return moment.strftime("%Y-%m-%d %H:%M:%S")


def pad_number(number: int, width: int) -> str:
    """
    Left-pads a non-negative number with zeros to at least `width` digits.

    Numbers wider than `width` are returned with all of their digits.
    """
    return str(number).zfill(width)


def format_size(bytes_size: int) -> str:
    """Formats bytes into a human-readable size string (e.g., '145.3 MB')."""
    if bytes_size <= 0:
        return "0 B"
    units = ["B", "KB", "MB", "GB", "TB"]
    i = 0
    while bytes_size >= 1024 and i < len(units) - 1:
        bytes_size /= 1024
        i += 1
    return f"{bytes_size:.1f} {units[i]}"


def format_duration(seconds: float) -> str:
    """
    Formats a duration in seconds into a human-readable string (e.g., '2h 34m 12s').
    """
    s = int(seconds)
    hours, remainder = divmod(s, 3600)
    minutes, secs = divmod(remainder, 60)
    parts = []
    if hours > 0:
        parts.append(f"{hours}h")
    if minutes > 0:
        parts.append(f"{minutes}m")
    if secs > 0 or not parts:
        parts.append(f"{secs}s")
    return " ".join(parts)
