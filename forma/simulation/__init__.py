"""Forward simulation of the load model."""
from .projection import simulate_load, project_tsb, find_peak_day

__all__ = ["simulate_load", "project_tsb", "find_peak_day"]
