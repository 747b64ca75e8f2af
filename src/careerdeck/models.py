"""Domain models for CareerDeck."""

from __future__ import annotations

from dataclasses import dataclass, field

DIFFICULTIES: tuple[str, ...] = ("beginner", "intermediate", "advanced")
CERTIFICATE_TYPES: tuple[str, ...] = ("required", "optional")
LINK_TYPES: tuple[str, ...] = ("free", "paid")

SORT_ALPHABETICAL_ASC = "alphabetical-asc"
SORT_ALPHABETICAL_DESC = "alphabetical-desc"
SORT_MOST_VIEWED = "most-viewed"
SORT_OPTIONS: tuple[str, ...] = (
    SORT_ALPHABETICAL_ASC,
    SORT_ALPHABETICAL_DESC,
    SORT_MOST_VIEWED,
)

SKILLS_MATCH_ANY = "any"
SKILLS_MATCH_ALL = "all"

_DIFFICULTY_SCORES: dict[str, int] = {
    "beginner": 1,
    "intermediate": 2,
    "advanced": 3,
}


def difficulty_score(difficulty: str) -> int:
    """Return 1-3 for a known difficulty, 0 otherwise."""
    return _DIFFICULTY_SCORES.get(difficulty, 0)


@dataclass(frozen=True)
class Gradient:
    start: str
    end: str


@dataclass(frozen=True)
class Sector:
    """A group of related careers."""

    id: str
    name: str
    description: str = ""
    icon: str = ""
    gradient: Gradient = field(default_factory=lambda: Gradient("", ""))


@dataclass(frozen=True)
class SalaryRange:
    minimum: float
    maximum: float

    def overlaps(self, low: float, high: float) -> bool:
        """True if this range shares at least one value with ``[low, high]``."""
        return self.minimum <= high and self.maximum >= low


@dataclass(frozen=True)
class RoadmapStep:
    title: str
    description: str = ""


@dataclass(frozen=True)
class Certificate:
    name: str
    type: str  # required, optional


@dataclass(frozen=True)
class LearningLink:
    name: str
    url: str
    platform: str = ""
    type: str = "free"  # free, paid


@dataclass(frozen=True)
class Job:
    """Immutable representation of a career entry in the catalog."""

    id: str
    sector_id: str
    name: str
    salary: SalaryRange
    difficulty: str
    skills: tuple[str, ...]
    description: str = ""
    detailed_description: str = ""
    icon: str = ""
    roadmap: tuple[RoadmapStep, ...] = ()
    certificates: tuple[Certificate, ...] = ()
    links: tuple[LearningLink, ...] = ()

    @property
    def required_certificates(self) -> tuple[Certificate, ...]:
        return tuple(c for c in self.certificates if c.type == "required")


@dataclass(frozen=True)
class FilterCriteria:
    """User-selected constraints for the job filter.

    Empty ``skills`` or ``difficulty`` and a ``None`` salary range mean no
    constraint on that field.
    """

    skills: tuple[str, ...] = ()
    salary_range: tuple[float, float] | None = None
    difficulty: tuple[str, ...] = ()
    skills_mode: str = SKILLS_MATCH_ANY
