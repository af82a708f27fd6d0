"""
Cardiac Drift Detection Module

Detects loss of aerobic efficiency within a single workout:
EF(t) = velocity / HR, compared between the first and second half.

A falling EF at the same effort typically indicates fatigue,
dehydration, or heat stress.
NO PERSISTENCE OR UI DEPENDENCIES ALLOWED.
"""

from dataclasses import dataclass
from typing import Optional, Sequence
from enum import Enum
import numpy as np

MIN_STREAM_LENGTH = 60    # ~1 min at 1 Hz
MIN_VALID_SAMPLES = 40
MIN_HR = 40               # bpm, below this the sensor is not on the chest
MIN_VELOCITY = 0.5        # m/s, below this the athlete is paused


class DriftSeverity(str, Enum):
    """Severity levels for cardiac drift."""
    NONE = "none"
    MILD = "mild"           # < 5% EF drop, normal in most long runs
    MODERATE = "moderate"   # < 10%, check hydration and pacing
    SEVERE = "severe"


@dataclass(frozen=True)
class DriftResult:
    """Efficiency of both halves and the relative drop between them."""
    detected: bool
    severity: DriftSeverity
    ef_start: float
    ef_end: float
    drop_pct: float
    label: str


NO_DRIFT = DriftResult(
    detected=False,
    severity=DriftSeverity.NONE,
    ef_start=0.0,
    ef_end=0.0,
    drop_pct=0.0,
    label="No drift detected",
)

DRIFT_LABELS = {
    DriftSeverity.MILD: "Mild drift",
    DriftSeverity.MODERATE: "Moderate drift",
    DriftSeverity.SEVERE: "Severe drift",
}


def detect_cardiac_drift(
    hr_stream: Optional[Sequence[float]],
    velocity_stream: Optional[Sequence[float]],
    threshold_pct: float = 2.0
) -> DriftResult:
    """
    Detect cardiac drift from paired HR and velocity streams.

    Args:
        hr_stream: Heart rate samples (bpm)
        velocity_stream: Velocity samples (m/s), same timestamps as HR
        threshold_pct: Minimum EF drop (%) reported as drift

    Returns:
        DriftResult; NO_DRIFT when the streams are unusable
    """
    if hr_stream is None or velocity_stream is None:
        return NO_DRIFT
    if len(hr_stream) < MIN_STREAM_LENGTH or len(hr_stream) != len(velocity_stream):
        return NO_DRIFT

    hr = np.asarray(hr_stream, dtype=float)
    velocity = np.asarray(velocity_stream, dtype=float)

    # Pauses and dropouts
    valid_mask = (hr > MIN_HR) & (velocity > MIN_VELOCITY)
    if valid_mask.sum() < MIN_VALID_SAMPLES:
        return NO_DRIFT

    efficiency = velocity[valid_mask] / hr[valid_mask]

    mid = len(efficiency) // 2
    ef_start = float(np.mean(efficiency[:mid]))
    ef_end = float(np.mean(efficiency[mid:]))

    if ef_start == 0:
        return NO_DRIFT

    drop_pct = (ef_start - ef_end) / ef_start * 100

    if drop_pct < threshold_pct:
        return DriftResult(
            detected=False,
            severity=DriftSeverity.NONE,
            ef_start=ef_start,
            ef_end=ef_end,
            drop_pct=drop_pct,
            label=NO_DRIFT.label,
        )

    if drop_pct < 5:
        severity = DriftSeverity.MILD
    elif drop_pct < 10:
        severity = DriftSeverity.MODERATE
    else:
        severity = DriftSeverity.SEVERE

    return DriftResult(
        detected=True,
        severity=severity,
        ef_start=ef_start,
        ef_end=ef_end,
        drop_pct=drop_pct,
        label=DRIFT_LABELS[severity],
    )


__all__ = [
    'DriftSeverity',
    'DriftResult',
    'NO_DRIFT',
    'detect_cardiac_drift',
]
