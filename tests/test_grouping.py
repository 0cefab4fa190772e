from grouping import available_sections, group_equivalent_schedules, schedule_pattern
from models import MeetingEntry, Schedule, ScheduleMetadata
from schedule_finder import generate_schedules

MW = ("monday", "wednesday")
TT = ("tuesday", "thursday")


def test_same_time_sections_collapse_into_one_slot(make_section):
    course_sections = {
        "ADMI1101": [
            make_section("a10", "ADMI1101", "10", meetings=[MeetingEntry("0800", "0930", MW, room="ML_510")]),
            make_section("a2", "ADMI1101", "2", meetings=[MeetingEntry("0800", "0930", ("wednesday", "monday"), room="AU_101")]),
        ],
        "MATE1203": [make_section("m1", "MATE1203", "1", meetings=[(TT, "1000", "1130")])],
    }
    result = generate_schedules(course_sections)
    assert result.total_found == 2

    grouped = group_equivalent_schedules(result.schedules)
    assert len(grouped) == 1
    group = grouped[0]
    assert set(group.original_schedule_ids) == {s.id for s in result.schedules}
    assert group.id == result.schedules[0].id

    slots = {slot.course_code: slot for slot in group.slots}
    # Ordered by the numeric value of the label, not its text.
    assert [s.reference_number for s in slots["ADMI1101"].sections] == ["a2", "a10"]
    assert slots["ADMI1101"].display_section.reference_number == "a2"
    assert [s.reference_number for s in slots["MATE1203"].sections] == ["m1"]


def test_different_time_patterns_stay_separate(make_section):
    course_sections = {
        "ADMI1101": [
            make_section("a1", "ADMI1101", "1", meetings=[(MW, "0800", "0930")]),
            make_section("a2", "ADMI1101", "2", meetings=[(MW, "1000", "1130")]),
        ],
    }
    result = generate_schedules(course_sections)
    grouped = group_equivalent_schedules(result.schedules)
    assert len(grouped) == 2
    assert [g.id for g in grouped] == [s.id for s in result.schedules]


def test_pattern_ignores_room_and_label_order(make_section):
    meta = ScheduleMetadata("0800", "0930", 0, 2, 3, 0)
    one = Schedule("x", (make_section("1", "ADMI1101", "A", meetings=[MeetingEntry("0800", "0930", MW, room="R1")]),), 0, meta)
    two = Schedule("y", (make_section("2", "ADMI1101", "B", meetings=[MeetingEntry("0800", "0930", MW[::-1], room="R2")]),), 0, meta)
    assert schedule_pattern(one) == schedule_pattern(two) == "ADMI1101:monday,wednesday:0800-0930"


def test_available_sections_across_groups(make_section):
    course_sections = {
        "ADMI1101": [
            make_section("a1", "ADMI1101", "1", meetings=[(MW, "0800", "0930")]),
            make_section("a2", "ADMI1101", "2", meetings=[(MW, "0800", "0930")]),
            make_section("a3", "ADMI1101", "3", meetings=[(TT, "0800", "0930")]),
        ],
    }
    grouped = group_equivalent_schedules(generate_schedules(course_sections).schedules)
    assert len(grouped) == 2
    refs = sorted(s.reference_number for s in available_sections(grouped, "ADMI1101"))
    assert refs == ["a1", "a2", "a3"]
    assert available_sections(grouped, "MATE1203") == []
