"""Export timestamp decoding."""

import math
from datetime import UTC, datetime, timedelta

EPOCH = datetime(1970, 1, 1, tzinfo=UTC)


def to_datetime(value: float | None) -> datetime | None:
    """Decode fractional epoch seconds into an aware UTC datetime.

    Returns None for missing, non-finite and out-of-range values. The epoch
    itself also decodes to None: exports use it interchangeably with "unset".
    """
    if value is None or not math.isfinite(value):
        return None
    fraction, seconds = math.modf(value)
    try:
        ts = EPOCH + timedelta(seconds=int(seconds), microseconds=round(fraction * 1e6))
    except OverflowError:
        return None
    if ts == EPOCH:
        return None
    return ts
