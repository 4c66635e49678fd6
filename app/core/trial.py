"""Trial period arithmetic."""

import math
from datetime import datetime, timezone

SECONDS_PER_DAY = 24 * 60 * 60


def parse_timestamp(value: str | datetime | None) -> datetime | None:
    """Parse an ISO timestamp from Postgres/Supabase. Naive values are treated as UTC."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        parsed = value
    else:
        try:
            parsed = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
        except ValueError:
            return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def trial_days_left(trial_end: str | datetime | None, now: datetime | None = None) -> int | None:
    """
    Days remaining in a trial, counting any started day as a whole day.

    Returns:
        None when no (parseable) trial end is set, 0 once it has passed
    """
    end = parse_timestamp(trial_end)
    if end is None:
        return None

    now = now or datetime.now(timezone.utc)
    remaining = (end - now).total_seconds()
    if remaining <= 0:
        return 0
    return math.ceil(remaining / SECONDS_PER_DAY)
