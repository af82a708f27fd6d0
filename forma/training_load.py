"""
Training Load Management System.

Builds the daily Performance Management Chart chain for one athlete:
- Daily TRIMP aggregation from scored activities
- CTL / ATL / TSB / ACWR series with rest days filled in
- Forward recomputation after an activity changes, stopping early once
  the recomputed chain matches the stored one again
"""
import logging
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple, Union

import pandas as pd

from forma.config import Config
from forma.calculations import (
    ATL_DAYS,
    CTL_DAYS,
    FORMULA_VERSION,
    InvalidParameter,
    next_daily_sample,
)
from forma.models import DailyLoadSample, TrainingSnapshot, WeeklyLoadProfile
from forma.simulation import simulate_load

logger = logging.getLogger(f"{Config.LOGGER_NAME}.TrainingLoad")

DateLike = Union[date, datetime, str]


def _calendar_day(value: DateLike) -> date:
    """Calendar day of a date, datetime or ISO 8601 string, in its own time zone."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return pd.Timestamp(value).date()


def aggregate_daily_trimp(activities: Iterable[Tuple[DateLike, float]]) -> Dict[date, float]:
    """Sum activity TRIMP scores per calendar day.

    Args:
        activities: (start time or date, trimp_score) pairs; the calendar day
            of the start time is used as is (local time expected)

    Returns:
        {day: total TRIMP}, ordered by day

    Raises:
        InvalidParameter: if any score is negative
    """
    df = pd.DataFrame(list(activities), columns=['start', 'trimp_score'])
    if df.empty:
        return {}

    if (df['trimp_score'] < 0).any():
        raise InvalidParameter("Activity TRIMP scores must be non-negative")

    # Each timestamp keeps its own offset; no conversion to a common zone
    df['day'] = df['start'].map(_calendar_day)
    daily = df.groupby('day', sort=True)['trimp_score'].sum()
    return {day: float(trimp) for day, trimp in daily.items()}


@dataclass
class LoadChainResult:
    """Outcome of a chain recomputation."""
    samples: List[DailyLoadSample] = field(default_factory=list)
    converged: bool = False
    converged_at: Optional[date] = None


class TrainingLoadManager:
    """Computes the daily load chain of one athlete."""

    ATL_DAYS = ATL_DAYS  # Acute period
    CTL_DAYS = CTL_DAYS  # Chronic period

    def __init__(self, user_id: str, formula_version: str = FORMULA_VERSION):
        self.user_id = user_id
        self.formula_version = formula_version

    def _daily_series(
        self,
        daily_trimp: Mapping[date, float],
        start: date,
        end: date
    ) -> pd.Series:
        """TRIMP for every day in [start, end], rest days filled with 0."""
        date_range = pd.date_range(start=start, end=end, freq='D')
        if not daily_trimp:
            return pd.Series(0.0, index=date_range)

        series = pd.Series(daily_trimp, dtype=float)
        series.index = pd.to_datetime(series.index)
        series = series.groupby(level=0).sum()
        return series.reindex(date_range, fill_value=0.0)

    def calculate_load(
        self,
        daily_trimp: Mapping[date, float],
        start: Optional[date] = None,
        end: Optional[date] = None,
        seed: Optional[DailyLoadSample] = None,
        calculated_at: Optional[datetime] = None,
    ) -> List[DailyLoadSample]:
        """Calculate CTL/ATL/TSB/ACWR for every day of a period.

        Args:
            daily_trimp: {day: TRIMP}; days without an entry are rest days
            start: First day (default: day after `seed`, else first TRIMP day)
            end: Last day (default: last TRIMP day, never before `start`)
            seed: Sample for the day before `start` (None: CTL = ATL = 0)
            calculated_at: Timestamp stored on every sample

        Returns:
            One DailyLoadSample per day, oldest first
        """
        if start is None:
            if seed is not None:
                start = (pd.Timestamp(seed.date) + pd.Timedelta(days=1)).date()
            elif daily_trimp:
                start = min(daily_trimp)
            else:
                return []

        if end is None:
            later = [d for d in daily_trimp if d >= start]
            end = max(later) if later else start

        if end < start:
            return []

        stamp = calculated_at or datetime.now(timezone.utc)
        series = self._daily_series(daily_trimp, start, end)

        results = []
        previous = seed
        for day, trimp in series.items():
            previous = next_daily_sample(
                previous=previous,
                day=day.date(),
                daily_trimp=float(trimp),
                user_id=self.user_id,
                formula_version=self.formula_version,
                calculated_at=stamp,
            )
            results.append(previous)

        return results

    def sync_load_chain(
        self,
        daily_trimp: Mapping[date, float],
        start_date: date,
        end_date: Optional[date] = None,
        seed: Optional[DailyLoadSample] = None,
        stored: Optional[Mapping[date, DailyLoadSample]] = None,
        calculated_at: Optional[datetime] = None,
    ) -> LoadChainResult:
        """
        Recompute the chain forward from the first changed day.

        Stops once, past the last activity, the recomputed CTL and ATL both
        stay within Config.CHAIN_EPSILON of the stored samples for
        Config.CHAIN_CONVERGENCE_WINDOW consecutive days. Days without a
        stored sample never count as stable.

        Args:
            daily_trimp: {day: TRIMP} from `start_date` onward
            start_date: First day to recompute
            end_date: Last day (default: today)
            seed: Stored sample for the day before `start_date`
            stored: Previously stored samples by day, for the convergence check
            calculated_at: Timestamp stored on every sample

        Returns:
            LoadChainResult with the samples to persist; the day that
            completed the stable window is not included
        """
        end_date = end_date or date.today()
        stored = stored or {}
        epsilon = Config.CHAIN_EPSILON
        window = Config.CHAIN_CONVERGENCE_WINDOW

        activity_days = [d for d in daily_trimp if d >= start_date]
        last_activity_date = max(activity_days) if activity_days else start_date

        logger.debug(
            f"Syncing load chain for {self.user_id} from {start_date} to {end_date} "
            f"(last activity {last_activity_date})"
        )

        result = LoadChainResult()
        if end_date < start_date:
            return result

        stamp = calculated_at or datetime.now(timezone.utc)
        series = self._daily_series(daily_trimp, start_date, end_date)

        previous = seed
        stable_streak = 0
        for ts, trimp in series.items():
            day = ts.date()
            sample = next_daily_sample(
                previous=previous,
                day=day,
                daily_trimp=float(trimp),
                user_id=self.user_id,
                formula_version=self.formula_version,
                calculated_at=stamp,
            )

            old = stored.get(day)
            stable = (
                old is not None
                and day > last_activity_date
                and abs(sample.ctl - old.ctl) < epsilon
                and abs(sample.atl - old.atl) < epsilon
            )
            if stable:
                stable_streak += 1
                if stable_streak >= window:
                    logger.info(
                        f"Load chain converged after {stable_streak} stable days at {day}. "
                        "Stopping propagation."
                    )
                    result.converged = True
                    result.converged_at = day
                    break
            else:
                stable_streak = 0

            result.samples.append(sample)
            previous = sample

        logger.info(f"Recomputed {len(result.samples)} daily load samples for {self.user_id}")
        return result

    def get_current_form(
        self,
        daily_trimp: Mapping[date, float],
        today: Optional[date] = None,
        seed: Optional[DailyLoadSample] = None,
    ) -> Optional[DailyLoadSample]:
        """Get today's training load sample."""
        history = self.calculate_load(daily_trimp, end=today or date.today(), seed=seed)
        return history[-1] if history else None

    def predict_future_form(
        self,
        current: DailyLoadSample,
        planned_trimp: Sequence[float],
        days: Optional[int] = None
    ) -> List[DailyLoadSample]:
        """Predict future form based on planned training.

        Args:
            current: Latest known sample
            planned_trimp: List of planned daily TRIMP values
            days: Number of days to predict (default: all planned days)

        Returns:
            List of predicted DailyLoadSample
        """
        planned = list(planned_trimp)
        if days is not None:
            planned = planned[:days]
        return simulate_load(current, planned)


def generate_training_snapshot(
    current_profile: DailyLoadSample,
    recent_week: Optional[WeeklyLoadProfile] = None,
    next_workouts: Optional[List[Dict[str, Any]]] = None,
    generated_at: Optional[datetime] = None,
) -> TrainingSnapshot:
    """Assemble the UI-independent training state payload."""
    return TrainingSnapshot(
        current_profile=current_profile,
        recent_week=recent_week,
        next_workouts=list(next_workouts or []),
        generated_at=generated_at or datetime.now(timezone.utc),
    )
