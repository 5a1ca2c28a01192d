import math


def round_half_up(value: float, digits: int = 0) -> float:
    """Round halves upward (12.5 -> 13) instead of to the nearest even."""

    factor = 10**digits
    return math.floor(value * factor + 0.5) / factor


def percentage(part: int, whole: int) -> int:
    """Integer percentage of part in whole, 0 when whole is empty."""

    if whole <= 0:
        return 0
    return int(round_half_up(part / whole * 100))
