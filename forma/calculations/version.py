"""
Formula Versioning.

Version tags recorded on every computed sample and activity score.
Bump a tag whenever the numbers a formula produces would change, so stored
results can be traced back to the method that produced them.
"""

# GLOBAL CONSTANTS - Single Source of Truth
FORMULA_VERSION = "1.0.0"
SMOOTHING_VERSION = "1.0.0"
WEEKLY_METRICS_VERSION = "1.0.0"
ZONE_MODEL_VERSION = 1


def tag_formula(policy: str, version: str = FORMULA_VERSION) -> str:
    """Build the 'policy@version' tag stored on activity scores."""
    return f"{policy}@{version}"
