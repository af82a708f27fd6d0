"""
Load Records - dataclasses exchanged with external collaborators.

Plain structured data only: the store persists them, charts render them.
`calculated_at` / `generated_at` timestamps are excluded from equality so
recomputation with identical inputs compares equal.
"""
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from typing import Any, Dict, List, Optional


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class DailyLoadSample:
    """One calendar day's load state for one athlete."""
    date: date
    user_id: str
    daily_trimp: float
    ctl: float  # Chronic Training Load (fitness)
    atl: float  # Acute Training Load (fatigue)
    tsb: float  # Training Stress Balance (form)
    acwr: Optional[float]  # Acute:Chronic Workload Ratio
    formula_version: str
    calculated_at: datetime = field(default_factory=_utcnow, compare=False)
    engine_status: Optional[Dict[str, Any]] = field(default=None, compare=False)

    def to_dict(self) -> Dict[str, Any]:
        """Serialise for a row-oriented store (ISO dates)."""
        return {
            "date": self.date.isoformat(),
            "user_id": self.user_id,
            "daily_trimp": self.daily_trimp,
            "ctl": self.ctl,
            "atl": self.atl,
            "tsb": self.tsb,
            "acwr": self.acwr,
            "formula_version": self.formula_version,
            "calculated_at": self.calculated_at.isoformat(),
            "engine_status": self.engine_status,
        }


@dataclass(frozen=True)
class ActivityTrimpRecord:
    """One workout's computed load score with the audit trail of its zone model."""
    activity_id: str
    trimp_score: float  # >= 0, one decimal
    formula_version: str
    calculated_at: datetime = field(default_factory=_utcnow, compare=False)
    hr_zones_time: List[float] = field(default_factory=lambda: [0.0] * 5)
    zone_model_type: Optional[str] = None
    zone_model_version: Optional[int] = None
    zone_snapshot: Optional[List[Dict[str, Any]]] = None
    intensity_factor: Optional[float] = None
    aerobic_efficiency: Optional[float] = None


@dataclass(frozen=True)
class WeeklyLoadProfile:
    """Monday-to-Sunday aggregate of daily TRIMP."""
    week_start_date: date  # Monday
    user_id: str
    total_trimp: float
    monotony: float
    strain: float
    formula_version: str
    calculated_at: datetime = field(default_factory=_utcnow, compare=False)


@dataclass(frozen=True)
class TrainingSnapshot:
    """UI-independent payload describing the athlete's current training state."""
    current_profile: DailyLoadSample
    recent_week: Optional[WeeklyLoadProfile]
    next_workouts: List[Dict[str, Any]] = field(default_factory=list)
    generated_at: datetime = field(default_factory=_utcnow, compare=False)
