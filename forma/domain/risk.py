"""
Risk Classification Domain Module.

Maps load metrics to discrete risk tiers with a display label, a colour hint
and an interpretation sentence. Every classifier is a sorted threshold ladder
returning the first matching tier; all of them are total and never raise.
Non-finite input lands in the outermost tier on its side (NaN falls through
to the last tier).
"""
from dataclasses import dataclass
from enum import Enum


class RiskLevel(str, Enum):
    """Domain enum for risk tiers."""
    OPTIMAL = "optimal"
    TRANSITION = "transition"
    FRESH = "fresh"
    OVERLOAD = "overload"
    DANGER = "danger"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class RiskStatus:
    """Result of a risk classification.

    Attributes:
        level: Risk tier
        label: Display name of the tier
        color: UI colour hint (never interpreted by the engine)
        interpretation: Human-readable explanation
    """
    level: RiskLevel
    label: str
    color: str
    interpretation: str


# TSB (form)
TSB_DETRAINING = RiskStatus(
    RiskLevel.FRESH, "Detraining", "#4ECDC4",
    "Too much rest. You are losing physiological adaptations.",
)
TSB_FRESH = RiskStatus(
    RiskLevel.FRESH, "Fresh", "#7FB069",
    "Ready to race or perform a maximal intensity test.",
)
TSB_TRANSITION = RiskStatus(
    RiskLevel.TRANSITION, "Transition", "#E6E6E6",
    "Maintenance or active recovery.",
)
TSB_OPTIMAL = RiskStatus(
    RiskLevel.OPTIMAL, "Optimal", "#F4D35E",
    "The ideal training zone for cardiovascular improvement.",
)
TSB_OVERLOAD = RiskStatus(
    RiskLevel.OVERLOAD, "Overload", "#EE5D5D",
    "High risk of injury or overtraining. Consider resting.",
)

# ACWR
ACR_UNDERTRAINING = RiskStatus(
    RiskLevel.TRANSITION, "Under-training", "#E6E6E6",
    "Current load is not enough to maintain your level.",
)
ACR_SAFE = RiskStatus(
    RiskLevel.OPTIMAL, "Safe Zone", "#7FB069",
    "Balanced and productive load.",
)
ACR_OVERREACHING = RiskStatus(
    RiskLevel.OVERLOAD, "Overreaching", "#F4D35E",
    "High load. Monitor fatigue and sleep.",
)
ACR_DANGER = RiskStatus(
    RiskLevel.DANGER, "Danger Zone", "#EE5D5D",
    "Drastic load increase. Imminent injury risk.",
)

# Ramp rate (weekly CTL change)
RAMP_UNLOADING = RiskStatus(
    RiskLevel.TRANSITION, "Unloading", "#E6E6E6",
    "Absorbing previous load.",
)
RAMP_HEALTHY = RiskStatus(
    RiskLevel.OPTIMAL, "Healthy Progression", "#7FB069",
    "Sustainable fitness growth.",
)
RAMP_AGGRESSIVE = RiskStatus(
    RiskLevel.OVERLOAD, "Aggressive Progression", "#F4D35E",
    "Fast growth. Watch your recovery.",
)
RAMP_STRUCTURAL_RISK = RiskStatus(
    RiskLevel.DANGER, "Structural Risk", "#EE5D5D",
    "Too fast. Risk of bone or ligament stress.",
)


def tsb_status(tsb: float) -> RiskStatus:
    """Interpret TSB (form)."""
    if tsb > 20:
        return TSB_DETRAINING
    if tsb > 5:
        return TSB_FRESH
    if tsb >= -10:
        return TSB_TRANSITION
    if tsb >= -30:
        return TSB_OPTIMAL
    return TSB_OVERLOAD


def acr_ratio(atl: float, ctl: float) -> float:
    """ATL / CTL, or 0 when there is no chronic load."""
    return atl / ctl if ctl > 0 else 0.0


def acr_status(atl: float, ctl: float) -> RiskStatus:
    """Interpret the Acute:Chronic workload ratio."""
    ratio = acr_ratio(atl, ctl)
    if ratio < 0.8:
        return ACR_UNDERTRAINING
    if ratio <= 1.3:
        return ACR_SAFE
    if ratio <= 1.5:
        return ACR_OVERREACHING
    return ACR_DANGER


def ramp_rate_status(weekly_delta: float) -> RiskStatus:
    """Interpret the weekly CTL change (ramp rate)."""
    if weekly_delta < 0:
        return RAMP_UNLOADING
    if weekly_delta <= 5:
        return RAMP_HEALTHY
    if weekly_delta <= 8:
        return RAMP_AGGRESSIVE
    return RAMP_STRUCTURAL_RISK
