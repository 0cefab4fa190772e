# complementary.py
# Pairing rule between a main course and its lab / complementary offering.
#
# FISI1518 section "D" may only sit next to FISI1518P sections "D1", "D2", ...
# MATE1203 section "F" may only sit next to MATE1203C sections "F1", "F2", ...

import logging
import re
from typing import Iterable, NamedTuple, Optional

from models import Section

logger = logging.getLogger(__name__)

# Suffix appended to a base course code, and what the linked offering is.
COMPLEMENTARY_SUFFIXES = (
    ("P", "lab"),
    ("C", "complementary"),
    ("L", "lab"),
)

_COURSE_CODE = re.compile(r"^([A-Z]{4})(\d{4})([A-Z]?)$")
_LABEL_PREFIX = re.compile(r"^([A-Z]+)")


class CourseCode(NamedTuple):
    subject: str
    number: str
    suffix: str

    @property
    def base(self) -> str:
        return self.subject + self.number


def parse_course_code(code: str) -> Optional[CourseCode]:
    match = _COURSE_CODE.match(code)
    if not match:
        return None
    return CourseCode(*match.groups())


def base_course_code(code: str) -> Optional[str]:
    # "FISI1518P" -> "FISI1518"; None when the code is not a recognized complement.
    parsed = parse_course_code(code)
    if parsed is None or not parsed.suffix:
        return None
    if parsed.suffix not in dict(COMPLEMENTARY_SUFFIXES):
        return None
    return parsed.base


def _is_plain(code: str) -> bool:
    parsed = parse_course_code(code)
    return parsed is not None and not parsed.suffix


def are_courses_complementary(code_a: str, code_b: str) -> bool:
    if _is_plain(code_a) and base_course_code(code_b) == code_a:
        return True
    return _is_plain(code_b) and base_course_code(code_a) == code_b


def section_prefix(label: str) -> str:
    # "D" -> "D", "D2" -> "D"; labels without leading letters are used whole.
    match = _LABEL_PREFIX.match(label)
    return match.group(1) if match else label


def is_complementary_compatible(candidate: Section, chosen: Iterable[Section]) -> bool:
    """Check a candidate against the sections already in the partial schedule.

    Only main/complement pairs are restricted: the complement's label prefix
    has to start with the main section's prefix.
    """
    new_code = candidate.course_code
    new_prefix = section_prefix(candidate.section_label)

    for existing in chosen:
        if not are_courses_complementary(new_code, existing.course_code):
            continue

        existing_prefix = section_prefix(existing.section_label)
        if base_course_code(new_code) is not None:
            base_prefix, comp_prefix = existing_prefix, new_prefix
        else:
            base_prefix, comp_prefix = new_prefix, existing_prefix

        if not comp_prefix.startswith(base_prefix):
            logger.debug(
                "Complementary mismatch: %s section %r does not pair with %s section %r",
                new_code, candidate.section_label, existing.course_code, existing.section_label,
            )
            return False
    return True
