"""
SOLID: Single Responsibility Principle - obliczenia obciążenia treningowego.

Ten pakiet grupuje funkcje obliczeniowe według odpowiedzialności:
- smoothing.py: Exponential smoothing kernel
- load.py: CTL / ATL / TSB / ACWR
- zones.py: Heart rate zone models, classification, time in zones
- trimp.py: TRIMP scoring policies (Edwards, Zonal, Estimate)
- forma_load.py: Continuous Banister load
- ramp_rate.py: Weekly CTL growth
- weekly.py: Monotony and Strain
- performance.py: EF, IF, intensity class, athlete rank
- common.py: Errors and rounding shared by the package
- version.py: Formula version tags

Wszystkie funkcje są re-eksportowane z tego modułu.
"""

from .common import (
    InvalidParameter,
    InvalidInput,
    round_half_up,
)

from .version import (
    FORMULA_VERSION,
    SMOOTHING_VERSION,
    WEEKLY_METRICS_VERSION,
    ZONE_MODEL_VERSION,
    tag_formula,
)

from .smoothing import (
    smooth,
    smoothing_alpha,
)

from .load import (
    CTL_DAYS,
    ATL_DAYS,
    ACWR_ZERO_CHRONIC_SENTINEL,
    calculate_ctl,
    calculate_atl,
    calculate_tsb,
    calculate_acwr,
    next_daily_sample,
)

from .zones import (
    HrZone,
    HeartRateZoneModel,
    StaticZoneModel,
    DynamicZoneModel,
    calculate_hr_zones,
    calculate_dynamic_zones,
    classify_hr,
    calculate_time_in_zones,
)

from .forma_load import (
    FormaLoadConfig,
    calculate_forma_load,
)

from .trimp import (
    TrimpPolicy,
    calculate_edwards_trimp,
    calculate_zonal_trimp,
    estimate_trimp,
    calculate_trimp,
)

from .ramp_rate import (
    RampRatePoint,
    calculate_ramp_rate,
    latest_weekly_delta,
)

from .weekly import (
    calculate_monotony,
    calculate_strain,
    build_weekly_profiles,
)

from .performance import (
    AthleteRank,
    calculate_ef,
    calculate_if,
    classify_intensity,
    classify_athlete_rank,
)

__all__ = [
    # Errors
    'InvalidParameter',
    'InvalidInput',
    'round_half_up',
    # Versions
    'FORMULA_VERSION',
    'SMOOTHING_VERSION',
    'WEEKLY_METRICS_VERSION',
    'ZONE_MODEL_VERSION',
    'tag_formula',
    # Smoothing / load
    'smooth',
    'smoothing_alpha',
    'CTL_DAYS',
    'ATL_DAYS',
    'ACWR_ZERO_CHRONIC_SENTINEL',
    'calculate_ctl',
    'calculate_atl',
    'calculate_tsb',
    'calculate_acwr',
    'next_daily_sample',
    # Zones
    'HrZone',
    'HeartRateZoneModel',
    'StaticZoneModel',
    'DynamicZoneModel',
    'calculate_hr_zones',
    'calculate_dynamic_zones',
    'classify_hr',
    'calculate_time_in_zones',
    # TRIMP
    'FormaLoadConfig',
    'calculate_forma_load',
    'TrimpPolicy',
    'calculate_edwards_trimp',
    'calculate_zonal_trimp',
    'estimate_trimp',
    'calculate_trimp',
    # Derivatives
    'RampRatePoint',
    'calculate_ramp_rate',
    'latest_weekly_delta',
    'calculate_monotony',
    'calculate_strain',
    'build_weekly_profiles',
    # Performance
    'AthleteRank',
    'calculate_ef',
    'calculate_if',
    'classify_intensity',
    'classify_athlete_rank',
]
