"""
Forma - training load modeling engine.

Daily TRIMP in, CTL / ATL / TSB / ACWR out, plus risk tiers and a
rest-day form projection.
"""

__version__ = "1.0.0"
