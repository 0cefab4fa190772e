# normalizer.py
# Converts raw Banner course records into the Section / MeetingEntry shapes the search consumes.

import html
from typing import Any, Dict, Iterable, List, Optional

from models import WEEKDAYS, Faculty, MeetingEntry, Section
from time_utils import TBA, convert_date_format

__all__ = [
    "UNASSIGNED_FACULTY",
    "extract_days",
    "extract_cycle",
    "normalize_course",
    "normalize_courses",
    "validate_course_record",
]

UNASSIGNED_FACULTY = Faculty(banner_id="", display_name="Por Asignar", email="", is_primary=True)

CYCLE_MARKERS = (
    ("Ciclo 1 de 8 semanas", 1),
    ("Ciclo 2 de 8 semanas", 2),
)


def extract_days(meeting_time: Dict[str, Any]) -> List[str]:
    # Banner carries one boolean flag per weekday.
    return [day for day in WEEKDAYS if meeting_time.get(day)]


def extract_cycle(title: str) -> Optional[int]:
    for marker, cycle in CYCLE_MARKERS:
        if marker in title:
            return cycle
    return None


def _normalize_faculty(record: Dict[str, Any]) -> List[Faculty]:
    return [
        Faculty(
            banner_id=f.get("bannerId") or "",
            display_name=f.get("displayName") or "",
            email=f.get("emailAddress") or "",
            is_primary=bool(f.get("primaryIndicator")),
        )
        for f in record.get("faculty") or []
    ]


def _normalize_meeting_times(record: Dict[str, Any]) -> List[MeetingEntry]:
    meetings: List[MeetingEntry] = []
    for meeting_faculty in record.get("meetingsFaculty") or []:
        mt = meeting_faculty.get("meetingTime") or {}
        days = extract_days(mt)
        begin, end = mt.get("beginTime"), mt.get("endTime")
        if not days and not (begin and end):
            continue  # Nothing scheduled at all for this entry.

        meetings.append(MeetingEntry(
            begin_time=begin or TBA,
            end_time=end or TBA,
            days=tuple(days),
            building=mt.get("building") or "",
            building_description=html.unescape(mt.get("buildingDescription") or ""),
            room=mt.get("room") or "",
            start_date=convert_date_format(mt.get("startDate")),
            end_date=convert_date_format(mt.get("endDate")),
        ))
    return meetings


def normalize_course(record: Dict[str, Any]) -> Section:
    # Required keys are indexed directly so a malformed record fails loudly.
    credit_hours = record.get("creditHours")
    if credit_hours is None:
        credit_hours = record.get("creditHourLow") or 0

    return Section(
        id=record.get("id"),
        term=record.get("term") or "",
        reference_number=str(record["courseReferenceNumber"]),
        course_code=record["subjectCourse"],
        title=record["courseTitle"],
        subject=record.get("subject") or "",
        course_number=record.get("courseNumber") or "",
        section_label=record.get("sequenceNumber") or "",
        credit_hours=credit_hours,
        maximum_enrollment=record.get("maximumEnrollment") or 0,
        enrollment=record.get("enrollment") or 0,
        seats_available=record.get("seatsAvailable") or 0,
        open_section=bool(record.get("openSection")),
        schedule_type=record.get("scheduleTypeDescription") or "",
        wait_available=record.get("waitAvailable") or 0,
        faculty=tuple(_normalize_faculty(record) or [UNASSIGNED_FACULTY]),
        meeting_times=tuple(_normalize_meeting_times(record)),
        cross_list=record.get("crossList") or None,
        cycle=extract_cycle(record["courseTitle"]),
    )


def normalize_courses(records: Iterable[Dict[str, Any]]) -> List[Section]:
    return [normalize_course(r) for r in records]


def validate_course_record(record: Dict[str, Any]) -> List[str]:
    errors: List[str] = []
    for key, label in (
        ("id", "id"),
        ("courseReferenceNumber", "courseReferenceNumber"),
        ("subjectCourse", "subjectCourse"),
        ("courseTitle", "courseTitle"),
    ):
        if not record.get(key):
            errors.append(f"Missing {label}")

    for key in ("maximumEnrollment", "enrollment", "seatsAvailable"):
        if (record.get(key) or 0) < 0:
            errors.append(f"Invalid {key}")

    for meeting_faculty in record.get("meetingsFaculty") or []:
        mt = meeting_faculty.get("meetingTime") or {}
        begin, end = mt.get("beginTime"), mt.get("endTime")
        if begin and end and begin >= end:
            errors.append(f"Invalid time range: {begin} - {end}")
    return errors
