"""
Services - orchestration on top of the pure calculations.
"""
from .activity_metrics import (
    AthleteProfile,
    ActivityData,
    resolve_zone_model,
    resolve_intensity_factor,
    estimate_zone_distribution,
    score_activity,
)

__all__ = [
    'AthleteProfile',
    'ActivityData',
    'resolve_zone_model',
    'resolve_intensity_factor',
    'estimate_zone_distribution',
    'score_activity',
]
