"""
Timestamp helpers for stored quiz records.

Quiz state is written by a browser client, so completion timestamps arrive
in whatever shape the client produced:

  - epoch milliseconds (``Date.now()``), e.g. ``1718000000000``
  - epoch seconds, e.g. ``1718000000``
  - ISO-8601 strings, with or without an offset

``to_utc()`` folds all of these into an aware UTC ``datetime``.
"""

from __future__ import annotations

from datetime import datetime, timezone

# Epoch values above this are treated as milliseconds (year 2286 in seconds).
_MS_CUTOFF = 10_000_000_000


def utcnow() -> datetime:
    """Return the current time as an aware UTC datetime."""
    return datetime.now(tz=timezone.utc)


def to_utc(value: datetime | int | float | str | None) -> datetime:
    """Coerce a stored timestamp into an aware UTC datetime.

    ``None`` (or an empty string) means "no timestamp recorded" and yields
    the current time.  Naive datetimes and offset-less ISO strings are
    assumed to already be UTC.

    Raises:
        ValueError: If a string cannot be parsed as ISO-8601, or the value
                    falls outside the range ``datetime`` can represent
                    (NaN and infinity included).
        TypeError:  If ``value`` is of an unsupported type.
    """
    if value is None or value == "":
        return utcnow()

    if isinstance(value, bool):
        raise TypeError("Boolean is not a valid timestamp.")

    if isinstance(value, (int, float)):
        try:
            seconds = value / 1000.0 if abs(value) > _MS_CUTOFF else float(value)
            return datetime.fromtimestamp(seconds, tz=timezone.utc)
        except (OverflowError, OSError, ValueError) as exc:
            raise ValueError(f"Epoch timestamp out of range: {value!r}") from exc

    if isinstance(value, str):
        dt = datetime.fromisoformat(value.replace("Z", "+00:00"))
    elif isinstance(value, datetime):
        dt = value
    else:
        raise TypeError(f"Unsupported timestamp type: {type(value).__name__}")

    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    try:
        return dt.astimezone(timezone.utc)
    except OverflowError as exc:
        raise ValueError(f"Timestamp out of range in UTC: {value!r}") from exc
