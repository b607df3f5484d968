"""Plain-text rendering of metric values."""

import math


def format_count(value: float) -> str:
    """Render a value at full precision, without a trailing `.0` when integral."""
    if math.isfinite(value) and float(value).is_integer():
        return str(int(value))
    return repr(float(value))
