# filter_engine.py
# Per-section hard constraints, applied to each course's pool before the search starts.

import logging
from typing import Dict, Iterable, List, Optional, Sequence

from conflicts import section_intervals
from models import Faculty, Section
from schemas import ScheduleFilters
from time_utils import hhmm_to_minutes, times_overlap

logger = logging.getLogger(__name__)

__all__ = [
    "professor_matches",
    "has_preferred_professor",
    "section_passes_filters",
    "filter_sections_for_course",
    "group_sections_by_course",
]


def professor_matches(faculty: Faculty, wanted: str) -> bool:
    # Identifier equality, or a case-sensitive fragment of the display name.
    return faculty.banner_id == wanted or wanted in faculty.display_name


def _any_professor(section: Section, names: Iterable[str]) -> bool:
    names = list(names)
    return any(professor_matches(f, n) for f in section.faculty for n in names)


def has_preferred_professor(section: Section, preferred: Optional[Sequence[str]]) -> bool:
    if not preferred:
        return False
    return _any_professor(section, preferred)


def _reject(section: Section, reason: str) -> bool:
    logger.debug("Section %s-%s (%s) excluded: %s",
                 section.course_code, section.section_label, section.reference_number, reason)
    return False


def section_passes_filters(section: Section, filters: ScheduleFilters) -> bool:
    if filters.only_open_sections and not section.open_section:
        return _reject(section, "closed")

    if section.reference_number in filters.forbidden_sections:
        return _reject(section, "forbidden section")

    if filters.forbidden_professors and _any_professor(section, filters.forbidden_professors):
        return _reject(section, "forbidden professor")

    intervals = section_intervals(section)
    # A TBA section must not slip past the user's time constraints.
    if not intervals and filters.has_time_filters:
        return _reject(section, "no meeting times while time filters are active")

    max_end = hhmm_to_minutes(filters.max_end_time) if filters.max_end_time else None
    min_start = hhmm_to_minutes(filters.min_start_time) if filters.min_start_time else None
    day_filters = {df.day: df for df in filters.specific_day_filters}

    for interval in intervals:
        if interval.day in filters.free_days:
            return _reject(section, f"meets on {interval.day} (free day)")

        for window in filters.blocked_windows:
            if window.day == interval.day and times_overlap(
                interval.start, interval.end,
                hhmm_to_minutes(window.start_time), hhmm_to_minutes(window.end_time),
            ):
                return _reject(section, f"overlaps blocked window {window.day} "
                                        f"{window.start_time}-{window.end_time}")

        if max_end is not None and interval.end > max_end:
            return _reject(section, f"ends after {filters.max_end_time}")
        if min_start is not None and interval.start < min_start:
            return _reject(section, f"starts before {filters.min_start_time}")

        day_filter = day_filters.get(interval.day)
        if day_filter:
            if day_filter.max_end_time and interval.end > hhmm_to_minutes(day_filter.max_end_time):
                return _reject(section, f"ends after {day_filter.max_end_time} on {interval.day}")
            if day_filter.min_start_time and interval.start < hhmm_to_minutes(day_filter.min_start_time):
                return _reject(section, f"starts before {day_filter.min_start_time} on {interval.day}")

    return True


def filter_sections_for_course(sections: Iterable[Section], filters: ScheduleFilters) -> List[Section]:
    return [s for s in sections if section_passes_filters(s, filters)]


def group_sections_by_course(sections: Iterable[Section]) -> Dict[str, List[Section]]:
    grouped: Dict[str, List[Section]] = {}
    for section in sections:
        grouped.setdefault(section.course_code, []).append(section)
    return grouped
