import json

import pytest

from models import Faculty, MeetingEntry, Section

DAY_FLAGS = ("monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday")


def _meeting(days, begin, end, room=""):
    return MeetingEntry(begin_time=begin, end_time=end, days=tuple(days), room=room)


def _section(ref, course, label="1", meetings=(), **kwargs):
    kwargs.setdefault("faculty", (Faculty("P000", "Por Asignar"),))
    return Section(
        reference_number=ref,
        course_code=course,
        section_label=label,
        meeting_times=tuple(_meeting(*m) if isinstance(m, tuple) else m for m in meetings),
        **kwargs,
    )


def _banner_record(ref, course, title="Curso", label="1", days=(), begin="0800", end="0930", **extra):
    meeting_time = {flag: flag in days for flag in DAY_FLAGS}
    meeting_time.update({
        "beginTime": begin,
        "endTime": end,
        "building": "ML",
        "buildingDescription": "Edificio Mario Laserna",
        "room": "ML_510",
        "startDate": "21/01/2025",
        "endDate": "24/05/2025",
    })
    record = {
        "id": int(ref),
        "term": "202510",
        "courseReferenceNumber": ref,
        "subjectCourse": course,
        "courseTitle": title,
        "subject": course[:4],
        "courseNumber": course[4:],
        "sequenceNumber": label,
        "creditHours": 3,
        "creditHourLow": 3,
        "maximumEnrollment": 30,
        "enrollment": 10,
        "seatsAvailable": 20,
        "openSection": True,
        "scheduleTypeDescription": "Teorica",
        "waitAvailable": 0,
        "crossList": None,
        "faculty": [{
            "bannerId": "900" + ref,
            "displayName": "Prof " + ref,
            "emailAddress": "p%s@example.edu" % ref,
            "primaryIndicator": True,
        }],
        "meetingsFaculty": [{"meetingTime": meeting_time}],
    }
    record.update(extra)
    return record


@pytest.fixture
def meeting():
    return _meeting


@pytest.fixture
def make_section():
    return _section


@pytest.fixture
def banner_record():
    return _banner_record


@pytest.fixture
def catalog_file(tmp_path):
    records = [
        _banner_record("10001", "ADMI1101", "Introducción a la Administración", "A", ("monday", "wednesday"), "0800", "0930"),
        _banner_record("10002", "ADMI1101", "Introducción a la Administración", "B", ("tuesday", "thursday"), "0800", "0930"),
        _banner_record("20001", "MATE1203", "Cálculo Diferencial", "F", ("monday", "wednesday"), "0800", "0930"),
        _banner_record("20002", "MATE1203", "Cálculo Diferencial", "G", ("tuesday", "thursday"), "1000", "1130"),
        _banner_record("30001", "FISI1518", "Física I", "1", ("friday",), "0700", "0900", openSection=False),
    ]
    path = tmp_path / "courses.json"
    path.write_text(json.dumps({"success": True, "totalCount": len(records), "data": records}), encoding="utf-8")
    return path
