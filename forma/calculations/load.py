"""
Training Load Model.

Implements Performance Management Chart (PMC) metrics:
- CTL (Chronic Training Load) - 42-day exponential smoothing (fitness)
- ATL (Acute Training Load) - 7-day exponential smoothing (fatigue)
- TSB (Training Stress Balance) = yesterday's CTL - yesterday's ATL (form)
- ACWR (Acute:Chronic Workload Ratio) = ATL / CTL
"""
from datetime import date, datetime, timezone
from typing import Optional

from forma.models import DailyLoadSample

from .smoothing import smooth
from .version import FORMULA_VERSION

CTL_DAYS = 42  # Chronic period
ATL_DAYS = 7   # Acute period

# ACWR reported when chronic load is zero (no fitness base yet)
ACWR_ZERO_CHRONIC_SENTINEL = 0.0


def calculate_ctl(today_load: float, yesterday_ctl: float) -> float:
    """Chronic Training Load using a 42-day time constant."""
    return smooth(today_load, yesterday_ctl, CTL_DAYS)


def calculate_atl(today_load: float, yesterday_atl: float) -> float:
    """Acute Training Load using a 7-day time constant."""
    return smooth(today_load, yesterday_atl, ATL_DAYS)


def calculate_tsb(yesterday_ctl: float, yesterday_atl: float) -> float:
    """
    Training Stress Balance (form) entering the current day.

    Uses yesterday's fitness and fatigue: today's training is not yet known
    when the athlete starts the day.
    """
    return yesterday_ctl - yesterday_atl


def calculate_acwr(atl: float, ctl: float) -> float:
    """Acute:Chronic Workload Ratio, or the sentinel when CTL is not positive."""
    if ctl > 0:
        return atl / ctl
    return ACWR_ZERO_CHRONIC_SENTINEL


def next_daily_sample(
    previous: Optional[DailyLoadSample],
    day: date,
    daily_trimp: float,
    user_id: str,
    formula_version: str = FORMULA_VERSION,
    calculated_at: Optional[datetime] = None,
) -> DailyLoadSample:
    """Advance the load model by one day.

    Args:
        previous: Sample for the day before, or None on day 0 (CTL = ATL = 0)
        day: Calendar day being computed
        daily_trimp: Sum of the day's activity TRIMP scores
        user_id: Athlete identifier
        formula_version: Version tag stored on the sample
        calculated_at: Computation timestamp (defaults to now, UTC)

    Returns:
        DailyLoadSample for `day`
    """
    yesterday_ctl = previous.ctl if previous is not None else 0.0
    yesterday_atl = previous.atl if previous is not None else 0.0

    ctl = calculate_ctl(daily_trimp, yesterday_ctl)
    atl = calculate_atl(daily_trimp, yesterday_atl)

    return DailyLoadSample(
        date=day,
        user_id=user_id,
        daily_trimp=daily_trimp,
        ctl=ctl,
        atl=atl,
        tsb=calculate_tsb(yesterday_ctl, yesterday_atl),
        acwr=calculate_acwr(atl, ctl),
        formula_version=formula_version,
        calculated_at=calculated_at or datetime.now(timezone.utc),
    )
