"""Centralised timestamp handling.

All timestamp parsing and conversion goes through this module.
Internal representation: UTC-aware ``datetime``.
Milliseconds-since-epoch and ISO strings are accepted only at the boundaries
(CSV fixtures, data-source adapters).
"""

from datetime import datetime, timezone


__all__ = [
    "now_utc",
    "parse_timestamp",
    "to_iso",
    "to_ms",
]


def parse_timestamp(ts: str | int | float | datetime) -> datetime:
    """Parse any timestamp representation to a UTC-aware datetime.

    Accepted inputs:
      * ``datetime`` (naive values are assumed to be UTC)
      * ISO 8601 string (``T`` or space separator, with or without ``Z``)
      * ``YYYY/MM/DD`` date prefix (normalised to dashes)
      * Integer or float milliseconds since epoch
      * String containing a numeric value (e.g. ``"1640995200000"``)

    Raises:
        ValueError: for empty or unparseable strings.
    """
    if isinstance(ts, datetime):
        return ts if ts.tzinfo is not None else ts.replace(tzinfo=timezone.utc)

    if isinstance(ts, (int, float)):
        return datetime.fromtimestamp(ts / 1000, tz=timezone.utc)

    s = (ts or "").strip()
    if not s:
        raise ValueError("Empty timestamp")

    # String that looks like a number → treat as milliseconds
    if s.replace(".", "", 1).lstrip("-").isdigit():
        return datetime.fromtimestamp(int(float(s)) / 1000, tz=timezone.utc)

    # Normalise YYYY/MM/DD → YYYY-MM-DD
    if len(s) >= 10 and s[4] == "/" and s[7] == "/":
        s = f"{s[:4]}-{s[5:7]}-{s[8:]}"

    s = s.replace("Z", "+00:00")
    s = s.replace(" ", "T", 1)

    dt = datetime.fromisoformat(s)
    return dt if dt.tzinfo is not None else dt.replace(tzinfo=timezone.utc)


def to_ms(dt: datetime) -> int:
    """Convert a datetime to milliseconds since epoch."""
    return int(parse_timestamp(dt).timestamp() * 1000)


def to_iso(dt: datetime) -> str:
    """Convert a datetime to an ISO string with a space separator.

    ``YYYY-MM-DD HH:MM:SS+00:00`` matches the CSV fixture format.
    """
    return parse_timestamp(dt).astimezone(timezone.utc).isoformat().replace("T", " ")


def now_utc() -> datetime:
    """Current UTC time."""
    return datetime.now(timezone.utc)
