# schedule_finder.py
# Enumerates conflict-free course schedules using a backtracking DFS over pre-filtered section pools.

import hashlib
import logging
import time
from typing import List, Mapping, Optional, Sequence, Set, Tuple

from complementary import is_complementary_compatible
from conflicts import build_conflict_matrix, has_conflict_in_matrix
from filter_engine import filter_sections_for_course
from models import Schedule, SearchResult, Section
from schemas import ScheduleFilters
from scoring import DEFAULT_WEIGHTS, ScoreWeights, compute_metadata, score_schedule

__all__ = [
    "DEFAULT_MAX_RESULTS",
    "LARGE_SEARCH_SPACE",
    "generate_schedules",
    "schedule_id",
    "find_unresolvable_pairs",
    "empty_courses",
]

logger = logging.getLogger(__name__)

DEFAULT_MAX_RESULTS = 500
LARGE_SEARCH_SPACE = 100_000


def schedule_id(sections: Sequence[Section]) -> str:
    # Stable under reordering: hashed from the sorted reference numbers.
    key = "-".join(sorted(s.reference_number for s in sections))
    return hashlib.md5(key.encode("utf-8")).hexdigest()[:16]


def _filtered_pools(
    course_sections: Mapping[str, Sequence[Section]],
    filters: ScheduleFilters,
) -> List[Tuple[str, List[Section]]]:
    return [(code, filter_sections_for_course(sections, filters)) for code, sections in course_sections.items()]


def empty_courses(
    course_sections: Mapping[str, Sequence[Section]],
    filters: Optional[ScheduleFilters] = None,
) -> List[str]:
    # Courses left with no section once the filters are applied.
    filters = filters or ScheduleFilters()
    return [code for code, pool in _filtered_pools(course_sections, filters) if not pool]


def generate_schedules(
    course_sections: Mapping[str, Sequence[Section]],
    filters: Optional[ScheduleFilters] = None,
    max_results: int = DEFAULT_MAX_RESULTS,
    weights: ScoreWeights = DEFAULT_WEIGHTS,
) -> SearchResult:
    """Return up to ``max_results`` clash-free schedules, best score first.

    ``course_sections`` maps each requested course code to its eligible sections.
    Exactly one section per course ends up in every schedule. A course whose pool
    is empty after filtering makes the whole request unsatisfiable, which is
    reported as an empty result rather than an error.
    """
    if max_results < 1:
        raise ValueError(f"max_results must be a positive integer, got {max_results}")
    filters = filters or ScheduleFilters()
    started = time.perf_counter()

    def elapsed_ms() -> float:
        return (time.perf_counter() - started) * 1000

    per_course = _filtered_pools(course_sections, filters)
    if not per_course:
        return SearchResult([], 0, elapsed_ms(), False)
    for code, pool in per_course:
        if not pool:
            logger.info("No section of %s passes the filters; no schedule possible", code)
            return SearchResult([], 0, elapsed_ms(), False)

    # Smallest branching factor first so dead ends are found near the root.
    per_course.sort(key=lambda item: len(item[1]))

    search_space = 1
    for _, pool in per_course:
        search_space *= len(pool)
    if search_space > LARGE_SEARCH_SPACE:
        logger.warning("Large search space: %d combinations before pruning", search_space)

    pools = [pool for _, pool in per_course]
    matrix = build_conflict_matrix([s for pool in pools for s in pool])

    required = set(filters.required_sections)
    allowed: List[Set[str]] = [{s.reference_number for s in pool} & required for pool in pools]

    schedules: List[Schedule] = []  # Accumulated results, capped at max_results.
    stack: List[Section] = []  # The current path (partial schedule) in the DFS traversal.

    def dfs(i: int) -> bool:
        # Returns True once the cap is hit so every pending frame unwinds.
        if i == len(pools):
            metadata = compute_metadata(stack, filters)
            schedules.append(Schedule(
                id=schedule_id(stack),
                sections=tuple(stack),
                score=score_schedule(metadata, filters, weights),
                metadata=metadata,
            ))
            return len(schedules) >= max_results

        chosen_refs = [s.reference_number for s in stack]
        for sec in pools[i]:
            if allowed[i] and sec.reference_number not in allowed[i]:
                continue
            if has_conflict_in_matrix(sec.reference_number, chosen_refs, matrix):
                continue
            if not is_complementary_compatible(sec, stack):
                continue
            if filters.max_gap_minutes is not None:
                partial = compute_metadata(stack + [sec], filters)
                if partial.total_gap_minutes > filters.max_gap_minutes * (partial.days_on_campus or 1):
                    continue

            stack.append(sec)
            stop = dfs(i + 1)
            stack.pop()
            if stop:
                return True
        return False

    dfs(0)
    schedules.sort(key=lambda s: s.score)

    result = SearchResult(
        schedules=schedules,
        total_found=len(schedules),
        search_time_ms=elapsed_ms(),
        limit_reached=len(schedules) >= max_results,
    )
    logger.info("Generated %d schedules for %s in %.1f ms (limit reached: %s)",
                result.total_found, ", ".join(course_sections), result.search_time_ms, result.limit_reached)
    return result


def find_unresolvable_pairs(
    course_sections: Mapping[str, Sequence[Section]],
    filters: Optional[ScheduleFilters] = None,
) -> List[List[str]]:
    # Pairs of courses for which no compatible section combination exists.
    filters = filters or ScheduleFilters()
    per_course = _filtered_pools(course_sections, filters)
    bad_pairs: List[List[str]] = []

    for i in range(len(per_course)):
        for j in range(i + 1, len(per_course)):
            (name_a, pool_a), (name_b, pool_b) = per_course[i], per_course[j]
            if not pool_a or not pool_b:
                continue  # Reported separately as empty courses.
            matrix = build_conflict_matrix(pool_a + pool_b)
            if not any(
                sb.reference_number not in matrix[sa.reference_number]
                and is_complementary_compatible(sb, [sa])
                for sa in pool_a
                for sb in pool_b
            ):
                bad_pairs.append([name_a, name_b])
    return bad_pairs
