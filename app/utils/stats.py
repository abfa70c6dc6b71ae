import math


def percentage(part: int, whole: int) -> int:
    """Whole-number percentage, halves rounded up; 0 when there is nothing to count."""
    if not whole:
        return 0
    return int(math.floor(100 * part / whole + 0.5))
