# grouping.py
# Collapses schedules that share a weekly time pattern into one shape with
# interchangeable sections per course slot.

import re
from typing import Dict, List, Sequence

from models import GroupedCourseSlot, GroupedSchedule, Schedule, Section

__all__ = ["schedule_pattern", "group_equivalent_schedules", "available_sections"]

_LEADING_NUMBER = re.compile(r"^\s*(\d+)")


def _section_number(section: Section) -> int:
    match = _LEADING_NUMBER.match(section.section_label)
    return int(match.group(1)) if match else 0


def schedule_pattern(schedule: Schedule) -> str:
    # Room, label and professor are ignored: only course, days and clock times count.
    patterns = []
    for section in sorted(schedule.sections, key=lambda s: s.course_code):
        course_pattern = sorted(
            f"{section.course_code}:{','.join(sorted(m.days))}:{m.begin_time}-{m.end_time}"
            for m in section.meeting_times
        )
        patterns.append("|".join(course_pattern))
    return "||".join(patterns)


def group_equivalent_schedules(schedules: Sequence[Schedule]) -> List[GroupedSchedule]:
    by_pattern: Dict[str, List[Schedule]] = {}
    for schedule in schedules:
        by_pattern.setdefault(schedule_pattern(schedule), []).append(schedule)

    grouped: List[GroupedSchedule] = []
    for members in by_pattern.values():
        base = members[0]

        per_course: Dict[str, Dict[str, Section]] = {}
        for schedule in members:
            for section in schedule.sections:
                per_course.setdefault(section.course_code, {}).setdefault(section.reference_number, section)

        slots = []
        for base_section in base.sections:
            options = sorted(per_course[base_section.course_code].values(), key=_section_number)
            slots.append(GroupedCourseSlot(base_section.course_code, tuple(options)))

        grouped.append(GroupedSchedule(
            id=base.id,
            slots=tuple(slots),
            score=base.score,
            metadata=base.metadata,
            original_schedule_ids=tuple(s.id for s in members),
        ))
    return grouped


def available_sections(grouped: Sequence[GroupedSchedule], course_code: str) -> List[Section]:
    # Every distinct section offered for one course across all grouped schedules.
    seen: Dict[str, Section] = {}
    for schedule in grouped:
        for slot in schedule.slots:
            if slot.course_code == course_code:
                for section in slot.sections:
                    seen.setdefault(section.reference_number, section)
    return list(seen.values())
