"""
Form Projection.

Simulates the trajectory of CTL, ATL and TSB over the coming days and finds
the day of peak form. Each call recomputes from the given sample; nothing is
cached between calls.
"""
from datetime import datetime, timedelta, timezone
from typing import List, Optional, Sequence

from forma.calculations.common import InvalidInput, InvalidParameter
from forma.calculations.load import next_daily_sample
from forma.config import Config
from forma.models import DailyLoadSample


def simulate_load(
    current: DailyLoadSample,
    planned_trimp: Sequence[float],
    calculated_at: Optional[datetime] = None,
) -> List[DailyLoadSample]:
    """Predict future load state from planned daily TRIMP.

    Args:
        current: Latest known daily sample
        planned_trimp: TRIMP planned for each following day
        calculated_at: Timestamp stored on projected samples (defaults to now, UTC)

    Returns:
        One DailyLoadSample per planned day, dates advancing by one day
    """
    stamp = calculated_at or datetime.now(timezone.utc)
    predictions = []
    last = current

    for trimp in planned_trimp:
        last = next_daily_sample(
            previous=last,
            day=last.date + timedelta(days=1),
            daily_trimp=trimp,
            user_id=current.user_id,
            formula_version=current.formula_version,
            calculated_at=stamp,
        )
        predictions.append(last)

    return predictions


def project_tsb(
    current: DailyLoadSample,
    days: Optional[int] = None,
    calculated_at: Optional[datetime] = None,
) -> List[DailyLoadSample]:
    """
    Simulate the next `days` days assuming full rest (TRIMP = 0).

    Args:
        current: Latest known daily sample
        days: Horizon in days, >= 1 (default Config.PROJECTION_DAYS)
        calculated_at: Timestamp stored on projected samples

    Returns:
        Projection series of length `days`

    Raises:
        InvalidParameter: if days < 1
    """
    days = Config.PROJECTION_DAYS if days is None else days
    if days < 1:
        raise InvalidParameter(f"days must be >= 1, got {days}")
    return simulate_load(current, [0.0] * days, calculated_at=calculated_at)


def find_peak_day(projections: Sequence[DailyLoadSample]) -> DailyLoadSample:
    """
    The projected day with the highest TSB ("best day to race").

    Ties go to the earliest entry: stable sort on descending TSB, first element.

    Raises:
        InvalidInput: if the projection is empty
    """
    if not projections:
        raise InvalidInput("Cannot find a peak day in an empty projection")
    return sorted(projections, key=lambda p: p.tsb, reverse=True)[0]
