"""Load-once, read-only catalog of sectors and jobs."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Iterable, Mapping

import yaml

from careerdeck.exceptions import (
    CatalogIntegrityError,
    ConfigurationError,
    UnknownJobError,
    UnknownSectorError,
)
from careerdeck.models import (
    CERTIFICATE_TYPES,
    DIFFICULTIES,
    LINK_TYPES,
    Certificate,
    Gradient,
    Job,
    LearningLink,
    RoadmapStep,
    SalaryRange,
    Sector,
)

logger = logging.getLogger(__name__)


class Catalog:
    """Immutable dataset of sectors and jobs with referential integrity.

    Construction validates the whole dataset and raises
    :class:`CatalogIntegrityError` listing every problem found.
    """

    def __init__(self, sectors: Iterable[Sector], jobs: Iterable[Job]) -> None:
        self._sectors: tuple[Sector, ...] = tuple(sectors)
        self._jobs: tuple[Job, ...] = tuple(jobs)
        problems = _validate(self._sectors, self._jobs)
        if problems:
            raise CatalogIntegrityError(problems)
        self._sectors_by_id = {s.id: s for s in self._sectors}
        self._jobs_by_id = {j.id: j for j in self._jobs}

    # ---- factories ----

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Catalog":
        """Build a catalog from a ``{"sectors": [...], "jobs": [...]}`` mapping."""
        for section in ("sectors", "jobs"):
            if not isinstance(data.get(section) or [], list):
                raise CatalogIntegrityError([f"{section!r} must be a list of records"])
        try:
            sectors = [_parse_sector(raw) for raw in data.get("sectors") or []]
            jobs = [_parse_job(raw) for raw in data.get("jobs") or []]
        except (AttributeError, KeyError, TypeError, ValueError) as exc:
            raise CatalogIntegrityError([f"malformed record: {exc}"]) from exc
        return cls(sectors, jobs)

    @classmethod
    def from_yaml(cls, path: str | Path) -> "Catalog":
        path = Path(path)
        try:
            with open(path, encoding="utf-8") as fh:
                data = yaml.safe_load(fh) or {}
        except OSError as exc:
            raise ConfigurationError(f"Cannot read catalog {path}: {exc}") from exc
        except yaml.YAMLError as exc:
            raise CatalogIntegrityError([f"{path} is not valid YAML: {exc}"]) from exc
        if not isinstance(data, dict):
            raise CatalogIntegrityError([f"{path} must contain a mapping"])
        catalog = cls.from_dict(data)
        logger.info(
            "Loaded catalog from %s: %d sector(s), %d job(s).",
            path,
            len(catalog.sectors),
            len(catalog.jobs),
        )
        return catalog

    # ---- accessors ----

    @property
    def sectors(self) -> tuple[Sector, ...]:
        return self._sectors

    @property
    def jobs(self) -> tuple[Job, ...]:
        return self._jobs

    def __len__(self) -> int:
        return len(self._jobs)

    def __contains__(self, job_id: object) -> bool:
        return job_id in self._jobs_by_id

    def get_job(self, job_id: str) -> Job:
        try:
            return self._jobs_by_id[job_id]
        except KeyError:
            raise UnknownJobError(job_id) from None

    def get_sector(self, sector_id: str) -> Sector:
        try:
            return self._sectors_by_id[sector_id]
        except KeyError:
            raise UnknownSectorError(sector_id) from None

    def find_job(self, job_id: str) -> Job | None:
        return self._jobs_by_id.get(job_id)

    def find_sector(self, sector_id: str) -> Sector | None:
        return self._sectors_by_id.get(sector_id)

    def sector_for(self, job: Job) -> Sector:
        return self._sectors_by_id[job.sector_id]

    def jobs_in_sector(self, sector_id: str) -> list[Job]:
        """Jobs belonging to *sector_id*, in catalog order."""
        return [j for j in self._jobs if j.sector_id == sector_id]

    def resolve_jobs(self, job_ids: Iterable[str]) -> list[Job]:
        """Map ids to jobs, keeping the order of *job_ids* and skipping unknown ids."""
        found = (self._jobs_by_id.get(job_id) for job_id in job_ids)
        return [job for job in found if job is not None]

    def all_skills(self) -> list[str]:
        return sorted({skill for job in self._jobs for skill in job.skills}, key=str.casefold)


# ---- parsing ----


def _parse_sector(raw: Mapping[str, Any]) -> Sector:
    gradient = raw.get("gradient") or {}
    return Sector(
        id=str(raw["id"]),
        name=str(raw["name"]),
        description=str(raw.get("description", "")),
        icon=str(raw.get("icon", "")),
        gradient=Gradient(
            start=str(gradient.get("from", "")),
            end=str(gradient.get("to", "")),
        ),
    )


def _parse_job(raw: Mapping[str, Any]) -> Job:
    salary = raw["salary"]
    return Job(
        id=str(raw["id"]),
        sector_id=str(raw["sector_id"]),
        name=str(raw["name"]),
        description=str(raw.get("description", "")),
        detailed_description=str(raw.get("detailed_description", "")),
        icon=str(raw.get("icon", "")),
        difficulty=str(raw["difficulty"]).strip().lower(),
        salary=SalaryRange(minimum=float(salary["min"]), maximum=float(salary["max"])),
        skills=tuple(str(s) for s in raw.get("skills") or ()),
        roadmap=tuple(
            RoadmapStep(title=str(step["title"]), description=str(step.get("description", "")))
            for step in raw.get("roadmap") or ()
        ),
        certificates=tuple(
            Certificate(name=str(c["name"]), type=str(c["type"]).strip().lower())
            for c in raw.get("certificates") or ()
        ),
        links=tuple(
            LearningLink(
                name=str(link["name"]),
                url=str(link["url"]),
                platform=str(link.get("platform", "")),
                type=str(link.get("type", "free")).strip().lower(),
            )
            for link in raw.get("links") or ()
        ),
    )


# ---- integrity ----


def _validate(sectors: tuple[Sector, ...], jobs: tuple[Job, ...]) -> list[str]:
    problems: list[str] = []

    sector_ids: set[str] = set()
    for sector in sectors:
        if sector.id in sector_ids:
            problems.append(f"duplicate sector id {sector.id!r}")
        sector_ids.add(sector.id)

    job_ids: set[str] = set()
    for job in jobs:
        if job.id in job_ids:
            problems.append(f"duplicate job id {job.id!r}")
        job_ids.add(job.id)
        if job.sector_id not in sector_ids:
            problems.append(f"job {job.id!r} references unknown sector {job.sector_id!r}")
        if job.salary.minimum < 0 or job.salary.minimum > job.salary.maximum:
            problems.append(
                f"job {job.id!r} has invalid salary range "
                f"{job.salary.minimum:g}-{job.salary.maximum:g}"
            )
        if job.difficulty not in DIFFICULTIES:
            problems.append(f"job {job.id!r} has unknown difficulty {job.difficulty!r}")
        if not job.skills:
            problems.append(f"job {job.id!r} lists no skills")
        for cert in job.certificates:
            if cert.type not in CERTIFICATE_TYPES:
                problems.append(f"job {job.id!r} certificate {cert.name!r} has type {cert.type!r}")
        for link in job.links:
            if link.type not in LINK_TYPES:
                problems.append(f"job {job.id!r} link {link.name!r} has type {link.type!r}")

    return problems
