# models.py
# Immutable records shared by the catalog, the search engine and the API.

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from time_utils import TBA

WEEKDAYS = ("monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday")


@dataclass(frozen=True)
class Faculty:
    banner_id: str
    display_name: str
    email: str = ""
    is_primary: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "bannerId": self.banner_id,
            "displayName": self.display_name,
            "email": self.email,
            "isPrimary": self.is_primary,
        }


@dataclass(frozen=True)
class MeetingEntry:
    begin_time: str
    end_time: str
    days: Tuple[str, ...] = ()
    building: str = ""
    building_description: str = ""
    room: str = ""
    start_date: str = ""
    end_date: str = ""

    @property
    def is_tba(self) -> bool:
        return self.begin_time == TBA or self.end_time == TBA or not self.days

    def to_dict(self) -> Dict[str, Any]:
        return {
            "beginTime": self.begin_time,
            "endTime": self.end_time,
            "days": list(self.days),
            "building": self.building,
            "buildingDescription": self.building_description,
            "room": self.room,
            "startDate": self.start_date,
            "endDate": self.end_date,
        }


@dataclass(frozen=True)
class Section:
    """One offering of a course, as produced by the normalizer.

    ``reference_number`` is the stable key used everywhere in the search
    (conflict matrix, required/forbidden lists, schedule ids).
    """

    reference_number: str
    course_code: str
    section_label: str
    meeting_times: Tuple[MeetingEntry, ...] = ()
    credit_hours: float = 0
    open_section: bool = True
    seats_available: int = 0
    faculty: Tuple[Faculty, ...] = ()
    cross_list: Optional[str] = None
    cycle: Optional[int] = None
    title: str = ""
    subject: str = ""
    course_number: str = ""
    term: str = ""
    schedule_type: str = ""
    maximum_enrollment: int = 0
    enrollment: int = 0
    wait_available: int = 0
    id: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "id": self.id,
            "term": self.term,
            "courseReferenceNumber": self.reference_number,
            "subjectCourse": self.course_code,
            "courseTitle": self.title,
            "subject": self.subject,
            "courseNumber": self.course_number,
            "section": self.section_label,
            "creditHours": self.credit_hours,
            "maximumEnrollment": self.maximum_enrollment,
            "enrollment": self.enrollment,
            "seatsAvailable": self.seats_available,
            "openSection": self.open_section,
            "scheduleType": self.schedule_type,
            "waitAvailable": self.wait_available,
            "faculty": [f.to_dict() for f in self.faculty],
            "meetingTimes": [m.to_dict() for m in self.meeting_times],
        }
        if self.cross_list:
            out["crossList"] = self.cross_list
        if self.cycle:
            out["cycle"] = self.cycle
        return out


@dataclass(frozen=True)
class TimeInterval:
    # Minutes from midnight, half-open [start, end).
    day: str
    start: int
    end: int


@dataclass(frozen=True)
class ScheduleMetadata:
    earliest_start_time: str
    latest_end_time: str
    total_gap_minutes: int
    days_on_campus: int
    total_credits: float
    preferred_professor_count: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "earliestStartTime": self.earliest_start_time,
            "latestEndTime": self.latest_end_time,
            "totalGaps": self.total_gap_minutes,
            "daysOnCampus": self.days_on_campus,
            "totalCredits": self.total_credits,
            "preferredProfessorsCount": self.preferred_professor_count,
        }


@dataclass(frozen=True)
class Schedule:
    id: str
    sections: Tuple[Section, ...]
    score: float
    metadata: ScheduleMetadata

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "sections": [s.to_dict() for s in self.sections],
            "score": self.score,
            "metadata": self.metadata.to_dict(),
        }


@dataclass(frozen=True)
class SearchResult:
    schedules: List[Schedule] = field(default_factory=list)
    total_found: int = 0
    search_time_ms: float = 0.0
    limit_reached: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "schedules": [s.to_dict() for s in self.schedules],
            "totalFound": self.total_found,
            "searchTimeMs": round(self.search_time_ms, 3),
            "limitReached": self.limit_reached,
        }


@dataclass(frozen=True)
class GroupedCourseSlot:
    course_code: str
    sections: Tuple[Section, ...]

    @property
    def display_section(self) -> Section:
        return self.sections[0]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "subjectCourse": self.course_code,
            "sections": [s.to_dict() for s in self.sections],
            "displaySection": self.display_section.to_dict(),
        }


@dataclass(frozen=True)
class GroupedSchedule:
    id: str
    slots: Tuple[GroupedCourseSlot, ...]
    score: float
    metadata: ScheduleMetadata
    original_schedule_ids: Tuple[str, ...]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "sections": [slot.to_dict() for slot in self.slots],
            "score": self.score,
            "metadata": self.metadata.to_dict(),
            "originalScheduleIds": list(self.original_schedule_ids),
        }
