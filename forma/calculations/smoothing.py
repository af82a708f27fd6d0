"""
Exponential smoothing kernel for training load metrics.

Discretised exponential decay: each day absorbs a fraction alpha of the new
load, where alpha is fixed by a time constant in days:

    alpha = 1 - e^(-1 / time_constant)
    today = load * alpha + yesterday * (1 - alpha)

Call sites pass a time constant (42 days for CTL, 7 for ATL), never a raw alpha.
"""
import math

from .common import InvalidParameter


def smoothing_alpha(time_constant_days: float) -> float:
    """Fraction of new load absorbed per day for a given time constant."""
    if not time_constant_days > 0:
        raise InvalidParameter(
            f"time_constant_days must be strictly positive, got {time_constant_days}"
        )
    return 1.0 - math.exp(-1.0 / time_constant_days)


def smooth(today_load: float, yesterday_smoothed: float, time_constant_days: float) -> float:
    """
    Apply one day of exponential smoothing.

    Args:
        today_load: TRIMP for today (0 on a rest day)
        yesterday_smoothed: Previous day's smoothed value (CTL or ATL)
        time_constant_days: Decay time constant in days (> 0)

    Returns:
        Smoothed value for today

    Raises:
        InvalidParameter: if time_constant_days <= 0
    """
    alpha = smoothing_alpha(time_constant_days)
    return today_load * alpha + yesterday_smoothed * (1.0 - alpha)
