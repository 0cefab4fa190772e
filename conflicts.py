# conflicts.py
# Weekly time-interval expansion and the pairwise conflict rule between sections.

from typing import Dict, Iterable, List, Sequence, Set

from models import Section, TimeInterval
from time_utils import hhmm_to_minutes, times_overlap

__all__ = [
    "section_intervals",
    "sections_conflict",
    "has_conflict_with_any",
    "build_conflict_matrix",
    "has_conflict_in_matrix",
]

ConflictMatrix = Dict[str, Set[str]]


def section_intervals(section: Section) -> List[TimeInterval]:
    # One (day, start, end) per weekday of every timed meeting entry; TBA entries add nothing.
    intervals: List[TimeInterval] = []
    for meeting in section.meeting_times:
        if meeting.is_tba:
            continue
        start = hhmm_to_minutes(meeting.begin_time)
        end = hhmm_to_minutes(meeting.end_time)
        for day in meeting.days:
            intervals.append(TimeInterval(day, start, end))
    return intervals


def sections_conflict(a: Section, b: Section) -> bool:
    # Determines if two sections have any time overlap on any given day.
    if a.cycle and b.cycle and a.cycle != b.cycle:
        return False  # Half-term sections in different cycles never meet at the same time.

    intervals_a = section_intervals(a)
    intervals_b = section_intervals(b)
    for ia in intervals_a:
        for ib in intervals_b:
            if ia.day == ib.day and times_overlap(ia.start, ia.end, ib.start, ib.end):
                return True
    return False


def has_conflict_with_any(section: Section, chosen: Iterable[Section]) -> bool:
    return any(sections_conflict(section, other) for other in chosen)


def build_conflict_matrix(sections: Sequence[Section]) -> ConflictMatrix:
    """Map every reference number in the pool to the reference numbers it clashes with.

    Each unordered pair is tested once and recorded in both directions so the
    search can look a pair up from either side.
    """
    matrix: ConflictMatrix = {s.reference_number: set() for s in sections}
    for i in range(len(sections)):
        for j in range(i + 1, len(sections)):
            a, b = sections[i], sections[j]
            if sections_conflict(a, b):
                matrix[a.reference_number].add(b.reference_number)
                matrix[b.reference_number].add(a.reference_number)
    return matrix


def has_conflict_in_matrix(reference_number: str, chosen_refs: Iterable[str], matrix: ConflictMatrix) -> bool:
    conflicts = matrix.get(reference_number)
    if not conflicts:
        return False
    return any(ref in conflicts for ref in chosen_refs)
