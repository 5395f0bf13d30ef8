"""
Time-related utilities for the application.

All timestamps are generated in UTC. Storage keys are partitioned by the
UTC calendar date of the upload, so the same instant always lands in the
same partition regardless of where the function runs.
"""

from datetime import datetime, timezone

from core.utils.constants import DATE_PARTITION_FORMAT


def utc_now() -> datetime:
    """Return the current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def utc_now_iso() -> str:
    """Return current UTC time in ISO-8601 format.

    Example:
        2024-01-15T10:42:31.123456+00:00
    """
    return utc_now().isoformat()


def date_partition(moment: datetime) -> str:
    """Return the `YYYY/MM/DD` partition for a moment.

    Naive datetimes are taken to already be in UTC; aware ones are
    converted to UTC first.

    Example:
        >>> date_partition(datetime(2024, 3, 7, 23, 59))
        '2024/03/07'
    """
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)

    return moment.astimezone(timezone.utc).strftime(DATE_PARTITION_FORMAT)
