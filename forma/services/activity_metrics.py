"""
Activity Metrics Service

Turns one stored workout into an ActivityTrimpRecord:
- Zone model resolution (custom table > LTHR > age > static default)
- Intensity Factor and Aerobic Efficiency
- Time in zones and TRIMP for the selected policy
- Duration/IF estimate when the workout has no heart rate
"""
import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Dict, List, Mapping, Optional, Sequence

import numpy as np

from forma.config import Config
from forma.calculations import (
    FormaLoadConfig,
    HeartRateZoneModel,
    DynamicZoneModel,
    InvalidParameter,
    TrimpPolicy,
    calculate_dynamic_zones,
    calculate_ef,
    calculate_if,
    calculate_time_in_zones,
    calculate_trimp,
    round_half_up,
    tag_formula,
)
from forma.calculations.common import ZONE_COUNT
from forma.models import ActivityTrimpRecord
from forma.signals import validate_hr_stream

logger = logging.getLogger(f"{Config.LOGGER_NAME}.ActivityMetrics")

RUN_SPORT_TYPES = {"Run", "TrailRun", "VirtualRun"}

# Upper IF bound of zones 1..4 when duration is assigned without heart rate
ESTIMATE_ZONE_BANDS = (0.75, 0.85, 0.95, 1.05)


@dataclass(frozen=True)
class AthleteProfile:
    """Physiological settings of one athlete."""
    user_id: str
    lthr: Optional[float] = None
    birth_date: Optional[date] = None
    gender: str = "male"
    rest_hr: float = Config.DEFAULT_REST_HR
    threshold_pace: Optional[float] = None   # s/km
    threshold_power: Optional[float] = None  # W
    hr_zones: Optional[List[Mapping[str, Any]]] = None  # custom zone table rows
    zone_weights: Optional[Dict[int, float]] = None


@dataclass(frozen=True)
class ActivityData:
    """Summary fields and raw streams of one workout."""
    activity_id: str
    sport_type: str
    moving_time: float = 0.0    # s
    average_speed: float = 0.0  # m/s
    hr_stream: Optional[Sequence[float]] = None
    time_stream: Optional[Sequence[float]] = None


def resolve_zone_model(athlete: AthleteProfile, today: Optional[date] = None) -> DynamicZoneModel:
    """Custom table wins, otherwise zones derived from LTHR, age, or the static default."""
    if athlete.hr_zones:
        return DynamicZoneModel.from_table(athlete.hr_zones, weights=athlete.zone_weights)
    return calculate_dynamic_zones(lthr=athlete.lthr, birth_date=athlete.birth_date, today=today)


def resolve_intensity_factor(
    activity: ActivityData,
    athlete: AthleteProfile,
    avg_hr: float
) -> float:
    """
    Intensity Factor of a workout.

    Runs: threshold pace / actual pace.
    Other sports: avg HR / LTHR when both exist, otherwise speed / threshold power.
    """
    speed = activity.average_speed or 0.0

    if activity.sport_type in RUN_SPORT_TYPES:
        pace = 1000.0 / speed if speed > 0 else 0.0
        return calculate_if(
            pace,
            athlete.threshold_pace or Config.DEFAULT_THRESHOLD_PACE,
            is_pace=True,
        )

    if athlete.lthr and avg_hr > 0:
        return avg_hr / athlete.lthr

    return calculate_if(speed, athlete.threshold_power or Config.DEFAULT_THRESHOLD_POWER)


def estimate_zone_distribution(duration_seconds: float, intensity_factor: float) -> List[float]:
    """Assign the whole duration to the single zone matching the intensity factor."""
    times = [0.0] * ZONE_COUNT
    if not (duration_seconds > 0 and intensity_factor > 0):
        return times

    zone_index = ZONE_COUNT - 1
    for i, upper in enumerate(ESTIMATE_ZONE_BANDS):
        if intensity_factor < upper:
            zone_index = i
            break
    times[zone_index] = float(duration_seconds)
    return times


def _mean_hr(hr_stream: Sequence[float]) -> float:
    hr = np.asarray(hr_stream, dtype=float)
    if hr.size == 0 or np.all(np.isnan(hr)):
        return 0.0
    return float(np.nanmean(hr))


def score_activity(
    activity: ActivityData,
    athlete: AthleteProfile,
    policy: TrimpPolicy = TrimpPolicy.EDWARDS,
    zone_model: Optional[HeartRateZoneModel] = None,
    today: Optional[date] = None,
    calculated_at: Optional[datetime] = None,
) -> ActivityTrimpRecord:
    """
    Compute the load score of one workout.

    Args:
        activity: Workout summary and streams
        athlete: Athlete settings
        policy: TRIMP scoring policy (ignored without heart rate: estimate is used)
        zone_model: Explicit zone model, overrides resolution from the profile
        today: Reference day for age-based zones
        calculated_at: Timestamp stored on the record

    Returns:
        ActivityTrimpRecord

    Raises:
        InvalidParameter: if the resulting TRIMP is negative
    """
    policy = TrimpPolicy(policy)
    model = zone_model or resolve_zone_model(athlete, today=today)

    hr_stream = activity.hr_stream
    has_hr = hr_stream is not None and len(hr_stream) > 0

    if has_hr:
        validation = validate_hr_stream(hr_stream, time_stream=activity.time_stream)
        for warning in validation.warnings:
            logger.warning(f"Activity {activity.activity_id}: {warning}")
        avg_hr = _mean_hr(hr_stream)
    else:
        logger.warning(
            f"No heart rate data for activity {activity.activity_id}. "
            "Estimating load from duration and speed."
        )
        avg_hr = 0.0

    aerobic_efficiency = calculate_ef(activity.average_speed, avg_hr)
    intensity_factor = resolve_intensity_factor(activity, athlete, avg_hr)

    if has_hr and policy != TrimpPolicy.ESTIMATE:
        time_in_zones = calculate_time_in_zones(hr_stream, model, activity.time_stream)
        forma_config = None
        if policy == TrimpPolicy.FORMA:
            forma_config = FormaLoadConfig(
                max_hr=getattr(model, "estimated_max_hr", None) or model.zones[-1].max,
                rest_hr=athlete.rest_hr,
                gender=athlete.gender,
            )
        trimp = calculate_trimp(
            policy,
            time_in_zones_seconds=time_in_zones,
            model=model,
            hr_stream=hr_stream,
            forma_config=forma_config,
            time_stream=activity.time_stream,
        )
        applied_policy = policy
    else:
        trimp = calculate_trimp(
            TrimpPolicy.ESTIMATE,
            duration_seconds=activity.moving_time,
            intensity_factor=intensity_factor,
        )
        time_in_zones = estimate_zone_distribution(activity.moving_time, intensity_factor)
        applied_policy = TrimpPolicy.ESTIMATE

    if trimp < 0:
        raise InvalidParameter(f"TRIMP must be non-negative, got {trimp}")

    logger.debug(
        f"Activity {activity.activity_id}: {applied_policy.value} TRIMP={trimp:.1f}, "
        f"IF={intensity_factor:.2f}, zones={model.model_type}"
    )

    record_kwargs = {}
    if calculated_at is not None:
        record_kwargs["calculated_at"] = calculated_at

    return ActivityTrimpRecord(
        activity_id=activity.activity_id,
        trimp_score=round_half_up(trimp, 1),
        formula_version=tag_formula(applied_policy.value),
        hr_zones_time=[float(t) for t in time_in_zones],
        zone_model_type=model.model_type,
        zone_model_version=model.version,
        zone_snapshot=model.snapshot(),
        intensity_factor=intensity_factor,
        aerobic_efficiency=aerobic_efficiency,
        **record_kwargs,
    )


__all__ = [
    'AthleteProfile',
    'ActivityData',
    'resolve_zone_model',
    'resolve_intensity_factor',
    'estimate_zone_distribution',
    'score_activity',
]
