from datetime import datetime, timezone
from typing import Optional
from dateutil.parser import parse, ParserError


class ConcurrencyConflict(Exception):
    pass


def normalize_ts(ts):
    """
    Ensure datetime is timezone-aware.
    Defaults to UTC if naive.
    """
    if ts.tzinfo is None:
        return ts.replace(tzinfo=timezone.utc)
    return ts


def enforce_optimistic_lock(header_value: Optional[str], updated_at: Optional[datetime]) -> None:
    """
    Compares an If-Unmodified-Since header with the stored modification time.
    Raises ConcurrencyConflict if the value was changed after the client read it.
    """
    if not header_value or updated_at is None:
        return  # No optimistic lock requested, or nothing stored yet

    try:
        client_ts = normalize_ts(parse(header_value))
    except (ParserError, OverflowError) as exc:
        raise ValueError("Invalid If-Unmodified-Since header") from exc

    # HTTP dates have second precision
    server_ts = normalize_ts(updated_at).replace(microsecond=0)

    if server_ts > client_ts:
        raise ConcurrencyConflict("Conflict detected. Property value has been modified.")
