"""
SRP: Moduł odpowiedzialny za obliczenia TRIMP (Training Impulse).

Three interchangeable scoring policies over the same [z1..z5] seconds input:
- Edwards: fixed weights 1..5 on minutes in zone
- Zonal: weights supplied by the zone model
- Estimate: duration and intensity factor, for workouts without heart rate

The continuous Banister variant lives in forma_load.py (TrimpPolicy.FORMA).
"""
from enum import Enum
from typing import Optional, Sequence

from .common import InvalidInput, round_half_up, validate_zone_times
from .forma_load import FormaLoadConfig, calculate_forma_load
from .zones import EDWARDS_WEIGHTS, HeartRateZoneModel


class TrimpPolicy(str, Enum):
    """Scoring policy used to turn a workout into a TRIMP value."""
    EDWARDS = "edwards"
    ZONAL = "zonal"
    ESTIMATE = "estimate"
    FORMA = "forma"


def calculate_edwards_trimp(time_in_zones_seconds: Sequence[float]) -> float:
    """
    Calculate TRIMP based on Edwards method.

    TRIMP = min_Z1 * 1 + min_Z2 * 2 + min_Z3 * 3 + min_Z4 * 4 + min_Z5 * 5

    Args:
        time_in_zones_seconds: Exactly 5 values, seconds in zones 1 to 5

    Returns:
        TRIMP rounded to 1 decimal place

    Raises:
        InvalidInput: if the array is not exactly 5 elements
    """
    validate_zone_times(time_in_zones_seconds)

    total = sum(
        (seconds / 60.0) * weight
        for seconds, weight in zip(time_in_zones_seconds, EDWARDS_WEIGHTS)
    )
    return round_half_up(total, 1)


def calculate_zonal_trimp(
    time_in_zones_seconds: Sequence[float],
    model: HeartRateZoneModel,
) -> float:
    """
    Calculate TRIMP with per-zone weights taken from the zone model.

    Args:
        time_in_zones_seconds: Exactly 5 values, seconds in zones 1 to 5
        model: Zone model providing weight(zone)

    Returns:
        TRIMP rounded to 1 decimal place

    Raises:
        InvalidInput: if the array is not exactly 5 elements
    """
    validate_zone_times(time_in_zones_seconds)

    total = sum(
        (seconds / 60.0) * model.weight(zone)
        for zone, seconds in enumerate(time_in_zones_seconds, start=1)
    )
    return round_half_up(total, 1)


def estimate_trimp(duration_seconds: float, intensity_factor: float) -> float:
    """
    Estimate TRIMP when no heart rate stream exists.

    TRIMP = hours * 100 * IF^2  (one hour at threshold scores 100)

    Returns 0 when duration or intensity factor is not positive.
    """
    if not duration_seconds or not intensity_factor:
        return 0.0
    if not (duration_seconds > 0 and intensity_factor > 0):
        return 0.0
    return (duration_seconds / 3600.0) * 100.0 * intensity_factor ** 2


def calculate_trimp(
    policy: TrimpPolicy,
    time_in_zones_seconds: Optional[Sequence[float]] = None,
    model: Optional[HeartRateZoneModel] = None,
    duration_seconds: float = 0.0,
    intensity_factor: float = 0.0,
    hr_stream: Optional[Sequence[float]] = None,
    forma_config: Optional[FormaLoadConfig] = None,
    time_stream: Optional[Sequence[float]] = None,
) -> float:
    """Score a workout with the selected policy.

    Args:
        policy: Scoring policy
        time_in_zones_seconds: [z1..z5] seconds (EDWARDS, ZONAL)
        model: Zone model (ZONAL)
        duration_seconds: Moving time (ESTIMATE)
        intensity_factor: Intensity factor (ESTIMATE)
        hr_stream: Raw heart rate stream (FORMA)
        forma_config: Physiological parameters (FORMA)
        time_stream: Optional elapsed-time stream (FORMA)

    Returns:
        TRIMP value
    """
    policy = TrimpPolicy(policy)

    if policy == TrimpPolicy.EDWARDS:
        return calculate_edwards_trimp(time_in_zones_seconds)

    if policy == TrimpPolicy.ZONAL:
        if model is None:
            raise InvalidInput("Zonal TRIMP requires a zone model")
        return calculate_zonal_trimp(time_in_zones_seconds, model)

    if policy == TrimpPolicy.FORMA:
        if forma_config is None:
            raise InvalidInput("Forma load requires a FormaLoadConfig")
        return calculate_forma_load(
            hr_stream if hr_stream is not None else [],
            forma_config,
            time_stream,
        )

    return estimate_trimp(duration_seconds, intensity_factor)
