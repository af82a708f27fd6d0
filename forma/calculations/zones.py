"""
Heart Rate Zone Models and Classification.

Two interchangeable zone models share one contract:
- classify(hr) -> zone index 1..5, or None when the sample is below zone 1
- weight(zone) -> TRIMP weight for the zone

StaticZoneModel: generic % of max HR (50/60/70/80/90), Edwards weights 1..5.
DynamicZoneModel: externally supplied zone table with per-zone weights
(LTHR/Friel, age-based HRmax, static default, or a custom athlete table).
"""
import math
from abc import ABC, abstractmethod
from dataclasses import asdict, dataclass
from datetime import date
from typing import Any, Dict, List, Mapping, Optional, Sequence

import numpy as np

from forma.config import Config

from .common import SECONDS_PER_SAMPLE, ZONE_COUNT, InvalidInput, InvalidParameter
from .version import ZONE_MODEL_VERSION

# Fractions of max HR at which zones 1..5 begin
STATIC_ZONE_BREAKPOINTS = (0.5, 0.6, 0.7, 0.8, 0.9)

EDWARDS_WEIGHTS = (1, 2, 3, 4, 5)

DEFAULT_DYNAMIC_WEIGHTS = {1: 1.0, 2: 1.1, 3: 1.2, 4: 1.3, 5: 1.5}

# Upper bound of the top zone in dynamic tables
DYNAMIC_ZONE_CEILING = 250


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


@dataclass(frozen=True)
class HrZone:
    """A single [min, max] bpm band."""
    zone: int
    min: float
    max: float
    label: str = ""


class HeartRateZoneModel(ABC):
    """Ordered partition of heart rate into 5 zones."""

    model_type: str = "ABSTRACT"
    version: int = ZONE_MODEL_VERSION

    @property
    @abstractmethod
    def zones(self) -> List[HrZone]:
        """Zones ordered from Z1 to Z5."""

    @abstractmethod
    def weight(self, zone: int) -> float:
        """TRIMP weight for a zone index (1..5)."""

    def classify(self, hr: float) -> Optional[int]:
        """Map a heart rate sample to its zone.

        Descending comparison against zone minimums: the highest zone whose
        minimum is reached wins. Samples below Z1 minimum (and NaN) are
        unclassified and return None.
        """
        for zone in reversed(self.zones):
            if hr >= zone.min:
                return zone.zone
        return None

    def snapshot(self) -> List[Dict[str, Any]]:
        """Exact thresholds used, for the activity score audit trail."""
        return [asdict(z) for z in self.zones]


class StaticZoneModel(HeartRateZoneModel):
    """Generic 5-zone model derived from a single max HR value."""

    model_type = "STATIC_MAX_HR"

    def __init__(self, boundaries: Mapping[str, float]):
        missing = [
            f"z{i}_{edge}"
            for i in range(1, ZONE_COUNT + 1)
            for edge in ("min", "max")
            if f"z{i}_{edge}" not in boundaries
        ]
        if missing:
            raise InvalidInput(f"Missing zone boundaries: {missing}")
        self.boundaries = dict(boundaries)
        self._zones = [
            HrZone(
                zone=i,
                min=self.boundaries[f"z{i}_min"],
                max=self.boundaries[f"z{i}_max"],
                label=f"Z{i}",
            )
            for i in range(1, ZONE_COUNT + 1)
        ]

    @property
    def zones(self) -> List[HrZone]:
        return self._zones

    def weight(self, zone: int) -> float:
        if 1 <= zone <= ZONE_COUNT:
            return float(EDWARDS_WEIGHTS[zone - 1])
        return 1.0


class DynamicZoneModel(HeartRateZoneModel):
    """Zone table supplied by athlete configuration, opaque beyond classify/weight."""

    def __init__(
        self,
        zones: Sequence[HrZone],
        weights: Optional[Mapping[int, float]] = None,
        model_type: str = "CUSTOM",
        source_value: Optional[float] = None,
        estimated_max_hr: Optional[float] = None,
    ):
        ordered = sorted(zones, key=lambda z: z.zone)
        if [z.zone for z in ordered] != list(range(1, ZONE_COUNT + 1)):
            raise InvalidInput(
                f"Zone table must define zones 1..{ZONE_COUNT}, got {[z.zone for z in ordered]}"
            )
        for lower, upper in zip(ordered, ordered[1:]):
            if upper.min <= lower.max:
                raise InvalidInput(
                    f"Zones {lower.zone} and {upper.zone} overlap ({lower.max} >= {upper.min})"
                )
        self._zones = ordered
        self.weights = dict(weights) if weights is not None else dict(DEFAULT_DYNAMIC_WEIGHTS)
        self.model_type = model_type
        self.source_value = source_value
        self.estimated_max_hr = estimated_max_hr if estimated_max_hr is not None else ordered[-1].max

    @classmethod
    def from_table(
        cls,
        rows: Sequence[Mapping[str, Any]],
        weights: Optional[Mapping[int, float]] = None,
    ) -> "DynamicZoneModel":
        """Build a custom model from stored rows ({'zone', 'min', 'max', 'label'})."""
        zones = [
            HrZone(zone=int(r["zone"]), min=r["min"], max=r["max"], label=r.get("label", ""))
            for r in rows
        ]
        return cls(zones, weights=weights, model_type="CUSTOM")

    @property
    def zones(self) -> List[HrZone]:
        return self._zones

    def weight(self, zone: int) -> float:
        return self.weights.get(zone, 1.0)


def calculate_hr_zones(max_hr: float) -> StaticZoneModel:
    """Generic 5 HR zones based on % of max HR.

    Z1: 50-60%, Z2: 60-70%, Z3: 70-80%, Z4: 80-90%, Z5: 90-100%.
    Boundaries are integers; each zone starts one bpm above the previous max.

    Args:
        max_hr: Athlete's maximum heart rate (bpm)

    Returns:
        StaticZoneModel
    """
    if not max_hr > 0:
        raise InvalidParameter(f"max_hr must be positive, got {max_hr}")

    starts = [_round_half_up(max_hr * f) for f in STATIC_ZONE_BREAKPOINTS]
    boundaries = {}
    for i, start in enumerate(starts, start=1):
        boundaries[f"z{i}_min"] = start
        boundaries[f"z{i}_max"] = starts[i] - 1 if i < ZONE_COUNT else max_hr
    return StaticZoneModel(boundaries)


def _age_on(birth_date: date, today: date) -> int:
    age = today.year - birth_date.year
    if (today.month, today.day) < (birth_date.month, birth_date.day):
        age -= 1
    return age


def calculate_dynamic_zones(
    lthr: Optional[float] = None,
    birth_date: Optional[date] = None,
    today: Optional[date] = None,
) -> DynamicZoneModel:
    """
    User-specific heart rate zones.

    Priority: 1. LTHR (Friel model) -> 2. Age-based HRmax (220 - age) -> 3. Static default.

    Args:
        lthr: Lactate threshold heart rate (bpm)
        birth_date: Athlete's birth date
        today: Reference day for the age calculation (defaults to date.today())

    Returns:
        DynamicZoneModel with model_type LTHR_FRIEL, HRMAX_AGE or STATIC
    """
    if lthr is not None and lthr > 0:
        cuts = [math.floor(lthr * f) for f in (0.85, 0.89, 0.94, 0.99)]
        labels = ["Recovery", "Endurance", "Tempo", "Threshold", "Anaerobic"]
        return DynamicZoneModel(
            _zones_from_cuts(cuts, labels),
            model_type="LTHR_FRIEL",
            source_value=lthr,
            estimated_max_hr=_round_half_up(lthr / 0.9),
        )

    if birth_date is not None:
        hr_max = 220 - _age_on(birth_date, today or date.today())
        cuts = [math.floor(hr_max * f) for f in (0.6, 0.7, 0.8, 0.9)]
        return DynamicZoneModel(
            _zones_from_cuts(cuts, [f"Z{i}" for i in range(1, ZONE_COUNT + 1)]),
            model_type="HRMAX_AGE",
            source_value=hr_max,
            estimated_max_hr=hr_max,
        )

    default_max = Config.DEFAULT_MAX_HR
    return DynamicZoneModel(
        _zones_from_cuts([120, 140, 160, 180], [f"Z{i}" for i in range(1, ZONE_COUNT + 1)]),
        model_type="STATIC",
        source_value=default_max,
        estimated_max_hr=default_max,
    )


def _zones_from_cuts(cuts: Sequence[int], labels: Sequence[str]) -> List[HrZone]:
    """Z1 starts at 0, each next zone one bpm above the previous cut, Z5 ends at the ceiling."""
    mins = [0] + [c + 1 for c in cuts]
    maxs = list(cuts) + [DYNAMIC_ZONE_CEILING]
    return [
        HrZone(zone=i + 1, min=mins[i], max=maxs[i], label=labels[i])
        for i in range(ZONE_COUNT)
    ]


def classify_hr(hr: float, model: HeartRateZoneModel) -> Optional[int]:
    """Zone index (1..5) for a heart rate sample, or None if unclassified."""
    return model.classify(hr)


def calculate_time_in_zones(
    hr_stream: Sequence[float],
    model: HeartRateZoneModel,
    time_stream: Optional[Sequence[float]] = None,
    max_gap_sec: Optional[float] = None,
) -> List[float]:
    """
    Seconds spent in each zone.

    Without a time stream every sample counts as one second. With an
    equal-length time stream each sample counts for the gap to the next
    timestamp; non-increasing timestamps and pauses longer than
    `max_gap_sec` count for nothing. Samples below Z1 are not counted.

    Args:
        hr_stream: Heart rate samples (bpm)
        model: Zone model used for classification
        time_stream: Optional elapsed-time stream (seconds)
        max_gap_sec: Longest gap still counted (default Config.MAX_SAMPLE_GAP_SEC)

    Returns:
        [seconds_z1, ..., seconds_z5]
    """
    times = [0.0] * ZONE_COUNT
    if hr_stream is None or len(hr_stream) == 0:
        return times

    hr = np.asarray(hr_stream, dtype=float)

    if time_stream is not None and len(time_stream) == len(hr):
        gap = Config.MAX_SAMPLE_GAP_SEC if max_gap_sec is None else max_gap_sec
        deltas = np.diff(np.asarray(time_stream, dtype=float))
        durations = np.where((deltas > 0) & (deltas <= gap), deltas, 0.0)
        hr = hr[:-1]
    else:
        durations = np.full(len(hr), SECONDS_PER_SAMPLE)

    for sample, seconds in zip(hr, durations):
        zone = model.classify(sample)
        if zone is not None:
            times[zone - 1] += float(seconds)

    return times
