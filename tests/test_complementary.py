import pytest

from complementary import (
    are_courses_complementary,
    base_course_code,
    is_complementary_compatible,
    parse_course_code,
    section_prefix,
)


def test_parse_course_code():
    assert parse_course_code("FISI1518P").base == "FISI1518"
    assert parse_course_code("FISI1518P").suffix == "P"
    assert parse_course_code("MATE1203").suffix == ""
    assert parse_course_code("bad") is None


@pytest.mark.parametrize("code, base", [
    ("FISI1518P", "FISI1518"),
    ("MATE1203C", "MATE1203"),
    ("QUIM1101L", "QUIM1101"),
    ("MATE1203", None),
    ("MATE1203X", None),
])
def test_base_course_code(code, base):
    assert base_course_code(code) == base


def test_complementary_pairs_in_either_order():
    assert are_courses_complementary("FISI1518", "FISI1518P")
    assert are_courses_complementary("FISI1518P", "FISI1518")
    assert not are_courses_complementary("FISI1518", "FISI1519P")
    assert not are_courses_complementary("FISI1518P", "FISI1518C")
    assert not are_courses_complementary("FISI1518", "MATE1203")


@pytest.mark.parametrize("label, prefix", [("D", "D"), ("D1", "D"), ("AB12", "AB"), ("12", "12")])
def test_section_prefix(label, prefix):
    assert section_prefix(label) == prefix


def test_complement_must_match_main_label(make_section):
    main_d = make_section("1", "FISI1518", "D")
    lab_d1 = make_section("2", "FISI1518P", "D1")
    lab_e1 = make_section("3", "FISI1518P", "E1")

    assert is_complementary_compatible(lab_d1, [main_d])
    assert not is_complementary_compatible(lab_e1, [main_d])
    # Same rule when the main section is the one being added.
    assert is_complementary_compatible(main_d, [lab_d1])
    assert not is_complementary_compatible(main_d, [lab_e1])


def test_direction_matters(make_section):
    # The complement's prefix must start with the main prefix, not the reverse.
    main_dx = make_section("1", "MATE1203", "DX")
    comp_d1 = make_section("2", "MATE1203C", "D1")
    assert not is_complementary_compatible(comp_d1, [main_dx])


def test_unrelated_courses_are_unrestricted(make_section):
    main_d = make_section("1", "FISI1518", "D")
    other = make_section("2", "MATE1203C", "Z9")
    assert is_complementary_compatible(other, [main_d])
    assert is_complementary_compatible(other, [])
