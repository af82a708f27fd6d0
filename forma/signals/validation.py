"""
Heart Rate Stream Validation Module

Checks raw activity streams before they are scored:
- Minimum length
- Missing samples
- Physiologically implausible values
- Spikes (sensor dropouts, cadence lock)
- Time stream alignment

All functions return warnings instead of raising exceptions.
NO PERSISTENCE OR UI DEPENDENCIES ALLOWED.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple
from enum import Enum
import numpy as np
import pandas as pd

from forma.config import Config


class Severity(str, Enum):
    """Severity levels for validation warnings."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


@dataclass
class ValidationWarning:
    """A single validation warning."""
    code: str
    message: str
    severity: Severity = Severity.WARNING
    details: Optional[dict] = None

    def __str__(self) -> str:
        emoji = {"info": "ℹ️", "warning": "⚠️", "error": "❌"}.get(self.severity.value, "")
        return f"{emoji} [{self.code}] {self.message}"


@dataclass
class ValidationResult:
    """Complete result of stream validation."""
    is_valid: bool
    warnings: List[ValidationWarning] = field(default_factory=list)
    stats: dict = field(default_factory=dict)
    artifact_indices: List[int] = field(default_factory=list)

    def has_errors(self) -> bool:
        """Check if any error-level warnings exist."""
        return any(w.severity == Severity.ERROR for w in self.warnings)

    def get_messages(self) -> List[str]:
        """Get all warning messages as strings."""
        return [str(w) for w in self.warnings]


# ============================================================
# Validation Functions
# ============================================================

def check_minimum_length(
    hr: pd.Series,
    min_length: int
) -> Optional[ValidationWarning]:
    """Short streams still score, but their TRIMP is not representative."""
    if len(hr) < min_length:
        return ValidationWarning(
            code="STREAM_TOO_SHORT",
            message=f"Heart rate stream has {len(hr)} samples (minimum: {min_length})",
            severity=Severity.WARNING,
            details={"actual_length": len(hr), "min_length": min_length}
        )
    return None


def detect_missing_samples(
    hr: pd.Series,
    max_missing_ratio: float = 0.2
) -> Optional[ValidationWarning]:
    """
    Detect missing (NaN) heart rate samples.

    Missing samples are never classified into a zone, so they silently
    lower the TRIMP of the workout.
    """
    missing_count = int(hr.isna().sum())
    if missing_count == 0:
        return None

    missing_ratio = missing_count / len(hr)
    severity = Severity.INFO
    if missing_ratio > max_missing_ratio:
        severity = Severity.WARNING if missing_ratio < 0.5 else Severity.ERROR

    return ValidationWarning(
        code="MISSING_SAMPLES",
        message=f"{missing_count} missing heart rate samples ({missing_ratio:.1%})",
        severity=severity,
        details={"missing_count": missing_count, "missing_ratio": round(missing_ratio, 3)}
    )


def check_hr_range(
    hr: pd.Series,
    valid_range: Tuple[float, float]
) -> Optional[ValidationWarning]:
    """Flag values outside the plausible heart rate range."""
    valid_data = hr.dropna()
    if len(valid_data) == 0:
        return None

    min_hr, max_hr = valid_range
    out_of_range = int(((valid_data < min_hr) | (valid_data > max_hr)).sum())
    if out_of_range == 0:
        return None

    ratio = out_of_range / len(valid_data)
    return ValidationWarning(
        code="HR_OUT_OF_RANGE",
        message=f"{out_of_range} heart rate values outside [{min_hr}, {max_hr}] bpm ({ratio:.1%})",
        severity=Severity.WARNING if ratio < 0.1 else Severity.ERROR,
        details={"out_of_range_count": out_of_range, "ratio": round(ratio, 3)}
    )


def detect_spikes(
    hr: pd.Series,
    max_jump_bpm: float = 30.0
) -> Tuple[List[int], Optional[ValidationWarning]]:
    """
    Detect sample-to-sample jumps larger than `max_jump_bpm`.

    Returns:
        Tuple of (spike indices, ValidationWarning if any found)
    """
    valid_data = hr.dropna()
    if len(valid_data) < 3:
        return [], None

    jumps = np.abs(np.diff(valid_data.values))
    spike_positions = np.where(jumps > max_jump_bpm)[0] + 1
    spike_indices = valid_data.index[spike_positions].tolist()

    if not spike_indices:
        return [], None

    ratio = len(spike_indices) / len(hr)
    return spike_indices, ValidationWarning(
        code="HR_SPIKES",
        message=f"Found {len(spike_indices)} heart rate jumps > {max_jump_bpm:.0f} bpm ({ratio:.1%})",
        severity=Severity.WARNING if ratio < 0.1 else Severity.ERROR,
        details={"spike_count": len(spike_indices), "ratio": round(ratio, 3)}
    )


def check_time_alignment(
    hr_length: int,
    time_stream: Optional[Sequence[float]]
) -> Optional[ValidationWarning]:
    """A time stream must match the HR stream sample for sample and never go back."""
    if time_stream is None:
        return None

    if len(time_stream) != hr_length:
        return ValidationWarning(
            code="TIME_LENGTH_MISMATCH",
            message=f"Time stream has {len(time_stream)} samples, heart rate has {hr_length}; "
                    "1 Hz sampling will be assumed",
            severity=Severity.WARNING,
        )

    backwards = int((np.diff(np.asarray(time_stream, dtype=float)) <= 0).sum())
    if backwards:
        return ValidationWarning(
            code="TIME_NOT_MONOTONIC",
            message=f"Time stream does not increase at {backwards} samples",
            severity=Severity.INFO,
            details={"non_increasing_count": backwards}
        )
    return None


# ============================================================
# Main Validation Function
# ============================================================

def validate_hr_stream(
    hr_stream: Sequence[float],
    time_stream: Optional[Sequence[float]] = None,
    min_length: Optional[int] = None,
    valid_range: Optional[Tuple[float, float]] = None,
    max_missing_ratio: float = 0.2,
    max_jump_bpm: float = 30.0
) -> ValidationResult:
    """
    Perform complete validation of a heart rate stream.

    This function NEVER raises exceptions - all issues are returned as warnings.

    Args:
        hr_stream: Heart rate samples (bpm)
        time_stream: Optional elapsed-time stream (seconds)
        min_length: Minimum stream length (default Config.MIN_HR_STREAM_LENGTH)
        valid_range: Plausible (min, max) bpm (default from Config)
        max_missing_ratio: Max acceptable missing sample ratio
        max_jump_bpm: Largest plausible sample-to-sample jump

    Returns:
        ValidationResult with is_valid flag, warnings, and statistics
    """
    if hr_stream is None or len(hr_stream) == 0:
        return ValidationResult(
            is_valid=False,
            warnings=[ValidationWarning(
                code="EMPTY_STREAM",
                message="Heart rate stream is empty or None",
                severity=Severity.ERROR
            )]
        )

    min_length = Config.MIN_HR_STREAM_LENGTH if min_length is None else min_length
    valid_range = valid_range or (Config.VALIDATION_MIN_HR, Config.VALIDATION_MAX_HR)

    warnings = []
    spike_indices = []
    stats = {}

    try:
        hr = pd.Series(hr_stream, dtype=float)

        for check in (
            check_minimum_length(hr, min_length),
            detect_missing_samples(hr, max_missing_ratio),
            check_hr_range(hr, valid_range),
            check_time_alignment(len(hr), time_stream),
        ):
            if check:
                warnings.append(check)

        spike_indices, spike_warning = detect_spikes(hr, max_jump_bpm)
        if spike_warning:
            warnings.append(spike_warning)

        valid_data = hr.dropna()
        stats = {
            "length": len(hr),
            "valid_count": len(valid_data),
            "mean": round(valid_data.mean(), 1) if len(valid_data) > 0 else None,
            "max": round(valid_data.max(), 1) if len(valid_data) > 0 else None,
            "spike_count": len(spike_indices)
        }

    except (TypeError, ValueError) as e:
        # Non-numeric samples
        warnings.append(ValidationWarning(
            code="VALIDATION_ERROR",
            message=f"Validation failed: {e}",
            severity=Severity.ERROR
        ))

    return ValidationResult(
        is_valid=not any(w.severity == Severity.ERROR for w in warnings),
        warnings=warnings,
        stats=stats,
        artifact_indices=spike_indices
    )


__all__ = [
    'Severity',
    'ValidationWarning',
    'ValidationResult',
    'check_minimum_length',
    'detect_missing_samples',
    'check_hr_range',
    'detect_spikes',
    'check_time_alignment',
    'validate_hr_stream',
]
