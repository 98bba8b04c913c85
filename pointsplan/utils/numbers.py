import math


def round_half_up(value: float) -> int:
    """Round like spreadsheet ROUND: halves move away from zero."""
    if value < 0:
        return -math.floor(-value + 0.5)
    return math.floor(value + 0.5)
