"""Shared utilities."""

import math
import uuid


def success_ratio(successes: int, tries: int) -> float:
    """Successes over tries rounded half-up to two decimals; 0 when there are no tries."""
    if tries <= 0:
        return 0.0
    return math.floor(successes / tries * 100 + 0.5) / 100


def parse_uuid(value: str) -> str | None:
    """Canonical string form of a UUID, or None if value is not one."""
    try:
        return str(uuid.UUID(str(value)))
    except (ValueError, TypeError, AttributeError):
        return None
