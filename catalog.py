# catalog.py
# Read-only course catalog: a timestamped snapshot of the normalized sections,
# reloaded from the JSON file once it is older than the TTL.

import json
import logging
import time
import unicodedata
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Tuple

from filter_engine import group_sections_by_course
from models import Section
from normalizer import normalize_course, validate_course_record

logger = logging.getLogger(__name__)

__all__ = ["normalize_for_search", "CatalogSnapshot", "CatalogProvider", "load_records"]


def normalize_for_search(text: str) -> str:
    # "Programación" -> "PROGRAMACION"
    decomposed = unicodedata.normalize("NFD", text)
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return stripped.upper().strip()


@dataclass(frozen=True)
class CatalogSnapshot:
    loaded_at: float
    sections: Tuple[Section, ...] = ()
    _by_course: Dict[str, List[Section]] = field(default_factory=dict, repr=False, compare=False)

    @classmethod
    def build(cls, sections: List[Section], loaded_at: float) -> "CatalogSnapshot":
        return cls(loaded_at, tuple(sections), group_sections_by_course(sections))

    def by_course(self) -> Dict[str, List[Section]]:
        return self._by_course

    def sections_for(self, code: str) -> List[Section]:
        return list(self._by_course.get(code.strip().upper(), []))

    def filter(self, term: Optional[str] = None, subject: Optional[str] = None,
               open_only: bool = False) -> List[Section]:
        return [
            s for s in self.sections
            if (not term or s.term == term)
            and (not subject or s.subject == subject)
            and (not open_only or s.open_section)
        ]

    def search(self, query: str) -> Dict[str, List[Section]]:
        # Accent- and case-insensitive match on course code or title, grouped per course.
        needle = normalize_for_search(query)
        matches = [
            s for s in self.sections
            if needle in normalize_for_search(s.course_code) or needle in normalize_for_search(s.title)
        ]
        return group_sections_by_course(matches)

    def subjects(self) -> List[str]:
        return sorted({s.subject for s in self.sections if s.subject})


def load_records(path: str) -> List[Dict[str, Any]]:
    with open(path, encoding="utf-8") as f:
        payload = json.load(f)
    # Either the raw Banner response ({"data": [...]}) or a bare list of records.
    records = payload.get("data", []) if isinstance(payload, dict) else payload
    if not isinstance(records, list):
        raise ValueError(f"{path}: expected a list of course records")
    return records


class CatalogProvider:
    """Owns the current catalog snapshot and its refresh policy.

    ``snapshot()`` reloads lazily once the snapshot is older than ``ttl_seconds``;
    ``refresh()`` forces a reload. Searches only ever see a complete snapshot.
    """

    def __init__(self, path: str, ttl_seconds: float = 3600,
                 clock: Callable[[], float] = time.monotonic):
        self.path = path
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._snapshot: Optional[CatalogSnapshot] = None

    def is_stale(self) -> bool:
        if self._snapshot is None:
            return True
        return self._clock() - self._snapshot.loaded_at >= self.ttl_seconds

    def snapshot(self) -> CatalogSnapshot:
        if self.is_stale():
            return self.refresh()
        return self._snapshot

    def refresh(self) -> CatalogSnapshot:
        records = load_records(self.path)
        sections: List[Section] = []
        for record in records:
            errors = validate_course_record(record)
            if errors:
                raise ValueError(f"Invalid course record {record.get('courseReferenceNumber')!r}: {'; '.join(errors)}")
            sections.append(normalize_course(record))

        self._snapshot = CatalogSnapshot.build(sections, self._clock())
        logger.info("Loaded %d sections from %s", len(sections), self.path)
        return self._snapshot
