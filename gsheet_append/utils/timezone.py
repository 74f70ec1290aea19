from datetime import datetime, timedelta

from dateutil import parser as date_parser

# Format used for the auto-populated 'date' column
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M"


def get_local_time() -> datetime:
    """Current local time (naive, process timezone)."""
    return datetime.now()


def format_timestamp(dt: datetime = None) -> str:
    """Format datetime for the 'date' column, e.g. 2024-05-01 13:45."""
    if dt is None:
        dt = get_local_time()
    return dt.strftime(TIMESTAMP_FORMAT)


def retention_cutoff(days, now: datetime = None) -> datetime:
    """Rows dated strictly before this moment are stale."""
    if now is None:
        now = get_local_time()
    return now - timedelta(days=days)


def parse_cell_date(value):
    """
    Leniently parse a sheet cell as a date.
    Returns a naive local datetime, or None when the cell is empty or not a date.
    """
    if value is None:
        return None
    text = str(value).strip()
    if not text:
        return None
    try:
        parsed = date_parser.parse(text)
    except (ValueError, OverflowError):
        return None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone().replace(tzinfo=None)
    return parsed
