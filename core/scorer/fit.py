#!/usr/bin/env python3
"""
Fit Classification - Map a match score to a fit bucket.
"""

from typing import Optional

from core.config_loader import FitThresholds
from core.matcher.models import Fit

_DEFAULT_THRESHOLDS = FitThresholds()


def classify_fit(score: float, thresholds: Optional[FitThresholds] = None) -> Fit:
    """
    excellent >= 80 > good >= 60 > fair >= 40 > poor (default thresholds).
    """
    thresholds = thresholds or _DEFAULT_THRESHOLDS
    if score >= thresholds.excellent:
        return Fit.EXCELLENT
    if score >= thresholds.good:
        return Fit.GOOD
    if score >= thresholds.fair:
        return Fit.FAIR
    return Fit.POOR
