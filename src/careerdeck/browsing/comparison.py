"""Side-by-side comparison rows for the compare view."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from careerdeck.models import Job, SalaryRange, difficulty_score

SKILL_PREVIEW = 4


@dataclass(frozen=True)
class ComparisonColumn:
    """What the compare view shows for one job."""

    job: Job
    salary: SalaryRange
    difficulty: str
    difficulty_score: int  # 1-3
    top_skills: tuple[str, ...]
    more_skills: int
    roadmap_steps: int
    certificate_count: int
    required_certificates: int


def build_comparison(jobs: Iterable[Job]) -> list[ComparisonColumn]:
    """One column per job, in the order given."""
    columns = []
    for job in jobs:
        columns.append(
            ComparisonColumn(
                job=job,
                salary=job.salary,
                difficulty=job.difficulty,
                difficulty_score=difficulty_score(job.difficulty),
                top_skills=job.skills[:SKILL_PREVIEW],
                more_skills=max(len(job.skills) - SKILL_PREVIEW, 0),
                roadmap_steps=len(job.roadmap),
                certificate_count=len(job.certificates),
                required_certificates=len(job.required_certificates),
            )
        )
    return columns
