"""
Ramp Rate - week-over-week CTL growth.

delta(i) = CTL[i] - CTL[i-7]
avg4w(i) = mean(delta(j)) for j in [max(7, i-21), i]
"""
from dataclasses import dataclass
from datetime import date
from typing import List, Optional, Sequence

import pandas as pd

from forma.config import Config
from forma.models import DailyLoadSample

from .common import InvalidParameter

WEEK_DAYS = 7
# Deltas averaged for the 4-week trend: indices i-21 .. i
AVG_4W_WINDOW = 22


@dataclass(frozen=True)
class RampRatePoint:
    """Weekly CTL change for one day, with its 4-week rolling average."""
    date: date
    delta: float
    avg4w: float


def calculate_ramp_rate(
    samples: Sequence[DailyLoadSample],
    max_points: Optional[int] = None,
    min_samples: Optional[int] = None,
) -> List[RampRatePoint]:
    """Calculate weekly CTL ramp rate for a daily load series.

    Args:
        samples: Daily samples ordered by date, ascending
        max_points: Keep only the most recent N points (default 84, i.e. 12 weeks)
        min_samples: Minimum series length before any point is produced (default 14)

    Returns:
        List of RampRatePoint; empty when the series is shorter than min_samples.
        The first point is emitted at index min_samples - 1, so a series of
        exactly min_samples entries yields one point.

    Raises:
        InvalidParameter: if max_points is below 1
    """
    max_points = Config.RAMP_RATE_MAX_POINTS if max_points is None else max_points
    min_samples = Config.RAMP_RATE_MIN_SAMPLES if min_samples is None else min_samples

    if max_points < 1:
        raise InvalidParameter(f"max_points must be at least 1, got {max_points}")

    if len(samples) < max(min_samples, WEEK_DAYS + 1):
        return []

    ctl = pd.Series([s.ctl for s in samples], dtype=float)
    delta = (ctl - ctl.shift(WEEK_DAYS)).iloc[WEEK_DAYS:]
    avg4w = delta.rolling(window=AVG_4W_WINDOW, min_periods=1).mean()

    start = max(min_samples - 1, WEEK_DAYS)
    points = [
        RampRatePoint(date=samples[i].date, delta=float(delta.loc[i]), avg4w=float(avg4w.loc[i]))
        for i in range(start, len(samples))
    ]

    return points[-max_points:]


def latest_weekly_delta(samples: Sequence[DailyLoadSample]) -> float:
    """CTL change over the last 7 days (0 when fewer than 8 samples)."""
    if len(samples) <= WEEK_DAYS:
        return 0.0
    return samples[-1].ctl - samples[-1 - WEEK_DAYS].ctl
