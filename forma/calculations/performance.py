"""
Performance-specific metrics: Aerobic Efficiency (EF), Intensity Factor (IF),
intensity classification and athlete rank by fitness (CTL).
"""
from dataclasses import dataclass
from typing import List


def calculate_ef(output: float, avg_hr: float) -> float:
    """
    Aerobic Efficiency.

    EF = output (speed in m/s, or power in W) / average HR
    """
    if not output or not avg_hr:
        return 0.0
    return output / avg_hr


def calculate_if(output: float, threshold: float, is_pace: bool = False) -> float:
    """
    Intensity Factor = normalized output / threshold output.

    For pace (s/km) lower is faster, so the ratio is inverted:
    threshold 4:00/km (240 s) at 4:30/km (270 s) -> IF = 240 / 270 = 0.89.
    """
    if not output or not threshold:
        return 0.0
    if is_pace:
        return threshold / output
    return output / threshold


INTENSITY_CLASSES = (
    (0.75, "Recovery"),
    (0.85, "Endurance"),
    (0.95, "Tempo"),
    (1.05, "Threshold"),
    (1.2, "VO2Max"),
)


def classify_intensity(if_value: float) -> str:
    """Classify a workout by its intensity factor."""
    for upper, label in INTENSITY_CLASSES:
        if if_value < upper:
            return label
    return "Anaerobic"


@dataclass(frozen=True)
class AthleteRank:
    name: str
    min_ctl: float
    max_ctl: float
    description: str
    color: str


ATHLETE_RANKS: List[AthleteRank] = [
    AthleteRank("Beginner", 0, 20, "Building the habit and waking up the engine.", "#A0A0B0"),
    AthleteRank("Active", 20, 45, "Regular athlete with an established base.", "#4CAF7D"),
    AthleteRank("Committed", 45, 70, "Serious training with good aerobic capacity.", "#45B7D1"),
    AthleteRank("Advanced", 70, 95, "High performance, well above average.", "#FF9234"),
    AthleteRank("Elite", 95, 250, "Professional level. Exceptional physical capacity.", "#C77DFF"),
]


def classify_athlete_rank(ctl: float) -> AthleteRank:
    """Rank by CTL (consistent load over 42 days); the top rank absorbs everything above."""
    for rank in ATHLETE_RANKS:
        if ctl < rank.max_ctl:
            return rank
    return ATHLETE_RANKS[-1]
