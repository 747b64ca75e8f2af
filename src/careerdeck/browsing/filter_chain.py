"""Chain of Responsibility filtering for catalog jobs."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

from careerdeck.models import SKILLS_MATCH_ALL, FilterCriteria, Job

logger = logging.getLogger(__name__)


class JobFilter(ABC):
    """Abstract base for a single filter in the chain."""

    def __init__(self) -> None:
        self._next: JobFilter | None = None

    def set_next(self, handler: JobFilter) -> JobFilter:
        self._next = handler
        return handler

    def evaluate(self, job: Job) -> str | None:
        """Return a rejection reason string, or ``None`` to accept.

        If this filter accepts, delegates to the next filter in the chain.
        """
        reason = self._check(job)
        if reason is not None:
            return reason
        if self._next:
            return self._next.evaluate(job)
        return None

    @abstractmethod
    def _check(self, job: Job) -> str | None:
        ...


class DifficultyFilter(JobFilter):
    """Reject jobs whose difficulty is not among the selected levels."""

    def __init__(self, allowed: tuple[str, ...]) -> None:
        super().__init__()
        self._allowed = frozenset(allowed)

    def _check(self, job: Job) -> str | None:
        if job.difficulty not in self._allowed:
            return f"difficulty:{job.difficulty}"
        return None


class SkillsFilter(JobFilter):
    """Reject jobs lacking the selected skills (any one, or all of them)."""

    def __init__(self, skills: tuple[str, ...], mode: str) -> None:
        super().__init__()
        self._wanted = frozenset(s.casefold() for s in skills)
        self._require_all = mode == SKILLS_MATCH_ALL

    def _check(self, job: Job) -> str | None:
        have = {s.casefold() for s in job.skills}
        if self._require_all:
            missing = self._wanted - have
            if missing:
                return "missing_skills:" + ",".join(sorted(missing))
        elif not self._wanted & have:
            return "no_matching_skill"
        return None


class SalaryBandFilter(JobFilter):
    """Reject jobs whose salary range does not overlap the band."""

    def __init__(self, low: float, high: float) -> None:
        super().__init__()
        self._low = low
        self._high = high

    def _check(self, job: Job) -> str | None:
        if not job.salary.overlaps(self._low, self._high):
            return f"salary_outside:{self._low:g}-{self._high:g}"
        return None


def build_filter_chain(criteria: FilterCriteria) -> JobFilter | None:
    """Assemble and return the head of the filter chain (or ``None`` if empty).

    *criteria* is expected to be normalised already.
    """
    filters: list[JobFilter] = []
    if criteria.difficulty:
        filters.append(DifficultyFilter(criteria.difficulty))
    if criteria.skills:
        filters.append(SkillsFilter(criteria.skills, criteria.skills_mode))
    if criteria.salary_range is not None:
        low, high = criteria.salary_range
        filters.append(SalaryBandFilter(low, high))

    if not filters:
        return None

    for i in range(len(filters) - 1):
        filters[i].set_next(filters[i + 1])

    logger.debug("Built filter chain with %d filter(s).", len(filters))
    return filters[0]
