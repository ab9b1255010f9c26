# app/services/status_aggregator.py
"""
Time-weighted activity status.

Every report contributes its level score (1-3) weighted by recency:
    weight = max(0, 1 - age_minutes / decay_window)
The weighted average is then bucketed:
    < 1.6 → Light,  1.6 ≤ x < 2.3 → Medium,  ≥ 2.3 → Busy
The status is recomputed from the raw reports on every call; nothing is cached.
"""

from typing import Iterable, Optional
from app.services.activity_report import ActivityLevel, ActivityReport, parse_level
from app.config import settings

MS_PER_MINUTE = 60_000


def report_weight(report: ActivityReport, now: int, decay_minutes: float) -> float:
    age_minutes = (now - report.observed_at) / MS_PER_MINUTE
    # Future-dated reports count as fresh, never more
    return min(1.0, max(0.0, 1.0 - age_minutes / decay_minutes))


def weighted_average(reports: Iterable[ActivityReport], now: int,
                     decay_minutes: Optional[float] = None) -> Optional[float]:
    """Weighted mean level score, or None when no report carries weight."""
    decay = decay_minutes or settings.DECAY_WINDOW_MINUTES
    weighted_sum = 0.0
    weight_total = 0.0
    for report in reports:
        score = int(parse_level(report.level))
        weight = report_weight(report, now, decay)
        weighted_sum += score * weight
        weight_total += weight

    if weight_total == 0:
        return None
    return weighted_sum / weight_total


def level_for_score(score: Optional[float],
                    light_upper: Optional[float] = None,
                    medium_upper: Optional[float] = None) -> ActivityLevel:
    if score is None:
        return ActivityLevel.LIGHT
    light_upper = settings.LIGHT_UPPER_BOUND if light_upper is None else light_upper
    medium_upper = settings.MEDIUM_UPPER_BOUND if medium_upper is None else medium_upper
    if score < light_upper:
        return ActivityLevel.LIGHT
    if score < medium_upper:
        return ActivityLevel.MEDIUM
    return ActivityLevel.BUSY


def compute_status(reports: Iterable[ActivityReport], now: int,
                   decay_minutes: Optional[float] = None) -> ActivityLevel:
    """Current status for one area's reports as of `now` (epoch ms). Light when there is no signal."""
    return level_for_score(weighted_average(reports, now, decay_minutes))
