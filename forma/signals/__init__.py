"""
Signals Module - Stream Checks

Quality checks on raw activity streams, run before or beside scoring.
NO PERSISTENCE OR UI DEPENDENCIES ALLOWED.

Sub-modules:
- validation: Heart rate stream validation, artifact detection, warnings
- drift: Cardiac drift (aerobic efficiency decline within a workout)
"""

from forma.signals.validation import (
    Severity,
    ValidationWarning,
    ValidationResult,
    check_minimum_length,
    detect_missing_samples,
    check_hr_range,
    detect_spikes,
    check_time_alignment,
    validate_hr_stream,
)

from forma.signals.drift import (
    DriftSeverity,
    DriftResult,
    NO_DRIFT,
    detect_cardiac_drift,
)

__all__ = [
    # Validation
    'Severity',
    'ValidationWarning',
    'ValidationResult',
    'check_minimum_length',
    'detect_missing_samples',
    'check_hr_range',
    'detect_spikes',
    'check_time_alignment',
    'validate_hr_stream',
    # Drift
    'DriftSeverity',
    'DriftResult',
    'NO_DRIFT',
    'detect_cardiac_drift',
]
