"""
Moduł pomocniczy - wspólne błędy, stałe i zaokrąglanie dla pakietu calculations.
"""
import math
from typing import Sequence

# Number of heart rate zones in every zone model
ZONE_COUNT = 5

# Seconds represented by one stream sample when no time stream is given
SECONDS_PER_SAMPLE = 1.0


class InvalidParameter(ValueError):
    """A numeric parameter violates its precondition (e.g. time constant <= 0)."""


class InvalidInput(ValueError):
    """An input sequence violates its structural contract (e.g. zone array length)."""


def round_half_up(value: float, ndigits: int = 1) -> float:
    """
    Round half away from zero for positive values (0.25 -> 0.3).

    Python's round() uses banker's rounding, which would shift stored
    scores by 0.1 on exact halves.
    """
    factor = 10 ** ndigits
    return math.floor(value * factor + 0.5) / factor


def validate_zone_times(time_in_zones: Sequence[float]) -> None:
    """
    Enforce the [z1..z5] seconds contract shared by the zone-based scorers.

    Raises:
        InvalidInput: if the array does not hold exactly 5 finite, non-negative values
    """
    if time_in_zones is None or len(time_in_zones) != ZONE_COUNT:
        length = None if time_in_zones is None else len(time_in_zones)
        raise InvalidInput(
            f"time_in_zones must have exactly {ZONE_COUNT} elements, got {length}"
        )
    for seconds in time_in_zones:
        if not math.isfinite(seconds) or seconds < 0:
            raise InvalidInput(f"time_in_zones values must be finite and >= 0, got {seconds}")
