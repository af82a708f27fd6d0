"""
Weekly Load Metrics - Monotony and Strain (Foster).

Monotony = mean daily load / standard deviation of daily loads
Strain   = total weekly load * monotony
"""
from typing import List, Optional, Sequence

import numpy as np
import pandas as pd

from forma.models import DailyLoadSample, WeeklyLoadProfile

from .version import WEEKLY_METRICS_VERSION

# Monotony reported when every day carries the same non-zero load
MONOTONY_CAP = 2.0


def calculate_monotony(daily_loads: Sequence[float]) -> float:
    """
    Training monotony over a period (usually 7 days).

    Returns 0 for an empty or zero-load week, and MONOTONY_CAP when the
    standard deviation is 0 (identical load every day).
    """
    if daily_loads is None or len(daily_loads) == 0:
        return 0.0

    loads = np.asarray(daily_loads, dtype=float)
    mean = loads.mean()
    if mean == 0:
        return 0.0

    std = loads.std()  # population standard deviation
    if std == 0:
        return MONOTONY_CAP

    return float(mean / std)


def calculate_strain(total_weekly_load: float, monotony: float) -> float:
    """High volume coupled with low variability gives high strain."""
    return total_weekly_load * monotony


def build_weekly_profiles(
    samples: Sequence[DailyLoadSample],
    user_id: Optional[str] = None,
    formula_version: str = WEEKLY_METRICS_VERSION,
) -> List[WeeklyLoadProfile]:
    """Group daily TRIMP into Monday-to-Sunday weeks.

    Days of a week missing from `samples` count as zero load; samples
    sharing a date are summed.

    Args:
        samples: Daily load samples (any order)
        user_id: Athlete identifier (defaults to the samples' user_id)
        formula_version: Version tag stored on each profile

    Returns:
        WeeklyLoadProfile per week, ordered by week start
    """
    if not samples:
        return []

    df = pd.DataFrame(
        {
            "date": pd.to_datetime([s.date for s in samples]),
            "daily_trimp": [s.daily_trimp for s in samples],
        }
    )
    df["weekday"] = df["date"].dt.weekday  # Monday = 0
    df["week_start"] = (df["date"] - pd.to_timedelta(df["weekday"], unit="D")).dt.date

    owner = user_id if user_id is not None else samples[0].user_id
    profiles = []
    for week_start, week in df.groupby("week_start", sort=True):
        daily_loads = np.zeros(7)
        for weekday, trimp in zip(week["weekday"], week["daily_trimp"]):
            daily_loads[weekday] += trimp

        total = float(daily_loads.sum())
        monotony = calculate_monotony(daily_loads)
        profiles.append(WeeklyLoadProfile(
            week_start_date=week_start,
            user_id=owner,
            total_trimp=total,
            monotony=monotony,
            strain=calculate_strain(total, monotony),
            formula_version=formula_version,
        ))

    return profiles

