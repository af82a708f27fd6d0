"""
Forma Load - continuous Banister TRIMP.

Uses a continuous exponential weighting of heart rate reserve instead of
discrete zones, so there is no jump in load at a zone boundary:

    Load = sum(delta_t * x * 0.64 * e^(b * x)) / 60,   x = (HR - HRrest) / (HRmax - HRrest)

b = 1.92 for males, 1.67 for females. Result is on a per-minute scale,
comparable to zone TRIMP.
"""
import math
from dataclasses import dataclass
from typing import Optional, Sequence

from forma.config import Config

BANISTER_COEFFICIENTS = {"male": 1.92, "female": 1.67}


@dataclass(frozen=True)
class FormaLoadConfig:
    """Physiological parameters for the continuous model."""
    max_hr: float
    rest_hr: float = Config.DEFAULT_REST_HR
    gender: str = "male"


def _sample_load(hr: float, rest_hr: float, hr_range: float, b: float) -> float:
    x = (hr - rest_hr) / hr_range
    return x * 0.64 * math.exp(b * x)


def calculate_forma_load(
    hr_stream: Sequence[float],
    config: FormaLoadConfig,
    time_stream: Optional[Sequence[float]] = None,
) -> float:
    """
    Continuous TRIMP from a heart rate stream.

    Args:
        hr_stream: Heart rate samples (bpm)
        config: max/rest HR and gender
        time_stream: Optional elapsed-time stream; without it (or on length
            mismatch) samples are treated as 1 Hz

    Returns:
        Load value (0 when the HR range is not positive or the stream is empty)
    """
    hr_range = config.max_hr - config.rest_hr
    if hr_range <= 0 or hr_stream is None or len(hr_stream) == 0:
        return 0.0

    b = BANISTER_COEFFICIENTS.get(str(config.gender).lower(), BANISTER_COEFFICIENTS["female"])
    total = 0.0

    if time_stream is None or len(time_stream) != len(hr_stream):
        for hr in hr_stream:
            if not hr >= config.rest_hr:
                continue
            total += _sample_load(hr, config.rest_hr, hr_range, b) / 60.0
        return total

    for i in range(len(hr_stream) - 1):
        hr = hr_stream[i]
        if not hr >= config.rest_hr:
            continue
        delta = time_stream[i + 1] - time_stream[i]
        # Skip pauses and non-monotonic time
        if delta <= 0 or delta > Config.MAX_SAMPLE_GAP_SEC:
            continue
        total += _sample_load(hr, config.rest_hr, hr_range, b) * delta / 60.0

    return total
