# Tests configuration for Forma
import pytest
import pandas as pd
import numpy as np
import sys
from datetime import date, datetime, timezone
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from forma.calculations import calculate_hr_zones, next_daily_sample  # noqa: E402
from forma.models import DailyLoadSample  # noqa: E402


FIXED_TIME = datetime(2026, 10, 19, 6, 0, tzinfo=timezone.utc)


@pytest.fixture
def fixed_time():
    """Deterministic calculated_at timestamp."""
    return FIXED_TIME


@pytest.fixture
def start_day():
    """A Monday."""
    return date(2026, 9, 7)


@pytest.fixture
def static_zones():
    """Static zone model for max HR 200: 100 / 120 / 140 / 160 / 180."""
    return calculate_hr_zones(200)


@pytest.fixture
def steady_hr_stream():
    """10 minutes at 1 Hz of steady aerobic heart rate."""
    np.random.seed(42)
    return np.random.normal(140, 3, 600).clip(120, 160)


@pytest.fixture
def make_sample():
    """Factory for a single DailyLoadSample."""
    def _make(day=date(2026, 10, 1), ctl=50.0, atl=50.0, tsb=0.0, trimp=0.0, user_id="athlete-1"):
        return DailyLoadSample(
            date=day,
            user_id=user_id,
            daily_trimp=trimp,
            ctl=ctl,
            atl=atl,
            tsb=tsb,
            acwr=atl / ctl if ctl > 0 else 0.0,
            formula_version="1.0.0",
            calculated_at=FIXED_TIME,
        )
    return _make


def build_chain(trimps, first_day, user_id="athlete-1"):
    """Daily samples for consecutive days starting at first_day, seeded from zero."""
    samples = []
    previous = None
    for i, trimp in enumerate(trimps):
        previous = next_daily_sample(
            previous,
            day=(pd.Timestamp(first_day) + pd.Timedelta(days=i)).date(),
            daily_trimp=float(trimp),
            user_id=user_id,
            calculated_at=FIXED_TIME,
        )
        samples.append(previous)
    return samples


@pytest.fixture
def chain_builder():
    """Expose build_chain as a fixture."""
    return build_chain


@pytest.fixture
def load_series(start_day):
    """Six weeks of training: 5 training days of 80 TRIMP, 2 rest days, weekly."""
    trimps = [80 if i % 7 < 5 else 0 for i in range(42)]
    return build_chain(trimps, start_day)
