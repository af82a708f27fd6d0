"""
Domain Module.

Contains domain-level concepts and value objects.
"""
from .risk import (
    RiskLevel,
    RiskStatus,
    tsb_status,
    acr_ratio,
    acr_status,
    ramp_rate_status,
)

__all__ = [
    "RiskLevel",
    "RiskStatus",
    "tsb_status",
    "acr_ratio",
    "acr_status",
    "ramp_rate_status",
]
