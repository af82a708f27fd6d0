"""
Models Module - Data Models

This module contains the records produced and consumed by the load engine.
NO PERSISTENCE OR UI DEPENDENCIES ALLOWED.

Sub-modules:
- records: daily load samples, activity scores, weekly profiles, snapshots
"""

from .records import (
    DailyLoadSample,
    ActivityTrimpRecord,
    WeeklyLoadProfile,
    TrainingSnapshot,
)

__all__ = [
    "DailyLoadSample",
    "ActivityTrimpRecord",
    "WeeklyLoadProfile",
    "TrainingSnapshot",
]
