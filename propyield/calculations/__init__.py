"""
Financial Calculation Engine

Core calculation modules for property investment analysis: amortization,
yearly projection, IRR, scoring, rent recommendation, and market insights.
All functions are pure and never raise for numeric edge cases.
"""

from propyield.calculations import (
    amortization,
    insights,
    irr,
    metrics,
    projection,
    rent,
    report,
    scoring,
)

__all__ = ["amortization", "insights", "irr", "metrics", "projection", "rent", "report", "scoring"]
