# scoring.py
# Schedule metadata and the scalar ranking score (lower is better).

from dataclasses import dataclass
from typing import Dict, List, Sequence

from conflicts import section_intervals
from filter_engine import has_preferred_professor
from models import ScheduleMetadata, Section
from schemas import ScheduleFilters
from time_utils import gap_minutes, minutes_to_hhmm

__all__ = ["ScoreWeights", "DEFAULT_WEIGHTS", "compute_metadata", "score_schedule"]

_NO_START = 23 * 60 + 59  # "2359"
_NO_END = 0  # "0000"


@dataclass(frozen=True)
class ScoreWeights:
    # Fewest days on campus first, then preferred professors, then idle time, then finish hour.
    latest_hour: float = 10
    gap_minute: float = 1
    day_on_campus: float = 50
    preferred_professor: float = 100
    compact_bonus: float = 50


DEFAULT_WEIGHTS = ScoreWeights()


def compute_metadata(sections: Sequence[Section], filters: ScheduleFilters) -> ScheduleMetadata:
    # Works on partial schedules too; the max-gap check in the search relies on that.
    earliest = _NO_START
    latest = _NO_END
    total_credits: float = 0
    preferred = 0
    by_day: Dict[str, List[tuple]] = {}

    for section in sections:
        total_credits += section.credit_hours
        if has_preferred_professor(section, filters.required_professors):
            preferred += 1
        for interval in section_intervals(section):
            by_day.setdefault(interval.day, []).append((interval.start, interval.end))
            earliest = min(earliest, interval.start)
            latest = max(latest, interval.end)

    total_gaps = 0
    for intervals in by_day.values():
        intervals.sort()
        for (_, end), (next_start, _) in zip(intervals, intervals[1:]):
            gap = gap_minutes(end, next_start)
            if gap > 0:
                total_gaps += gap

    return ScheduleMetadata(
        earliest_start_time=minutes_to_hhmm(earliest),
        latest_end_time=minutes_to_hhmm(latest),
        total_gap_minutes=total_gaps,
        days_on_campus=len(by_day),
        total_credits=total_credits,
        preferred_professor_count=preferred,
    )


def score_schedule(metadata: ScheduleMetadata, filters: ScheduleFilters,
                   weights: ScoreWeights = DEFAULT_WEIGHTS) -> float:
    latest_hour = int(metadata.latest_end_time[:2])
    score = (
        latest_hour * weights.latest_hour
        + metadata.total_gap_minutes * weights.gap_minute
        + metadata.days_on_campus * weights.day_on_campus
        - metadata.preferred_professor_count * weights.preferred_professor
    )
    if filters.prefer_compact:
        score -= weights.compact_bonus
    return score
