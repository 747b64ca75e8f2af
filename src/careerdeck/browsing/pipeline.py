"""Pure filter/sort/search functions over catalog records.

Nothing here holds state: identical input always gives identical output, and
an empty result is a normal outcome rather than an error.
"""

from __future__ import annotations

import logging
import unicodedata
from typing import Iterable, Mapping

from careerdeck.browsing.filter_chain import build_filter_chain
from careerdeck.models import (
    DIFFICULTIES,
    SKILLS_MATCH_ALL,
    SKILLS_MATCH_ANY,
    SORT_ALPHABETICAL_ASC,
    SORT_ALPHABETICAL_DESC,
    SORT_MOST_VIEWED,
    FilterCriteria,
    Job,
    Sector,
)

logger = logging.getLogger(__name__)


def collation_key(text: str) -> str:
    """Case- and accent-insensitive sort key, independent of the process locale."""
    decomposed = unicodedata.normalize("NFKD", text)
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return stripped.casefold()


def normalize_criteria(criteria: FilterCriteria) -> FilterCriteria:
    """Clamp and tidy user-entered criteria instead of rejecting them.

    A reversed salary range is swapped and negative bounds become 0.
    Difficulty values are lower-cased; unknown ones are kept so they match
    nothing. Blank or repeated skills are removed.
    """
    salary_range = None
    if criteria.salary_range is not None:
        low, high = criteria.salary_range
        low, high = max(low, 0), max(high, 0)
        if low > high:
            low, high = high, low
        salary_range = (low, high)

    difficulty: list[str] = []
    for level in criteria.difficulty:
        level = level.strip().lower()
        if not level:
            continue
        if level not in DIFFICULTIES:
            logger.debug("Unknown difficulty %r in filter; it matches no job.", level)
        if level not in difficulty:
            difficulty.append(level)

    skills: list[str] = []
    seen: set[str] = set()
    for skill in criteria.skills:
        skill = skill.strip()
        if skill and skill.casefold() not in seen:
            seen.add(skill.casefold())
            skills.append(skill)

    mode = criteria.skills_mode.strip().lower()
    if mode not in (SKILLS_MATCH_ANY, SKILLS_MATCH_ALL):
        mode = SKILLS_MATCH_ANY

    return FilterCriteria(
        skills=tuple(skills),
        salary_range=salary_range,
        difficulty=tuple(difficulty),
        skills_mode=mode,
    )


def filter_jobs(jobs: Iterable[Job], criteria: FilterCriteria) -> list[Job]:
    """Return the jobs passing every constraint in *criteria*, in input order."""
    chain = build_filter_chain(normalize_criteria(criteria))
    if chain is None:
        return list(jobs)
    return [job for job in jobs if chain.evaluate(job) is None]


def search_jobs(jobs: Iterable[Job], query: str) -> list[Job]:
    """Case-insensitive substring match on name, description and skills."""
    needle = collation_key(query.strip())
    if not needle:
        return list(jobs)
    matches = []
    for job in jobs:
        haystack = [job.name, job.description, *job.skills]
        if any(needle in collation_key(text) for text in haystack):
            matches.append(job)
    return matches


def sort_jobs(
    jobs: Iterable[Job],
    option: str,
    view_counts: Mapping[str, int] | None = None,
) -> list[Job]:
    """Stable sort of *jobs* by name or by descending view count.

    Jobs missing from *view_counts* count as 0 views.
    """
    if option == SORT_MOST_VIEWED:
        counts = view_counts or {}
        return sorted(jobs, key=lambda job: counts.get(job.id, 0), reverse=True)
    return _sort_by_name(jobs, option)


def sort_sectors(sectors: Iterable[Sector], option: str) -> list[Sector]:
    """Stable sort of *sectors* by name.

    Sectors carry no view counter, so ``most-viewed`` keeps the input order.
    """
    if option == SORT_MOST_VIEWED:
        return list(sectors)
    return _sort_by_name(sectors, option)


def _sort_by_name(items: Iterable, option: str) -> list:
    if option == SORT_ALPHABETICAL_ASC:
        return sorted(items, key=lambda item: collation_key(item.name))
    if option == SORT_ALPHABETICAL_DESC:
        # sorted() keeps equal keys in input order even with reverse=True.
        return sorted(items, key=lambda item: collation_key(item.name), reverse=True)
    raise ValueError(f"Unknown sort option: {option!r}")

