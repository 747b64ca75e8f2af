"""Shared test fixtures."""

from __future__ import annotations

import pytest
import yaml

from careerdeck.catalog.loader import Catalog
from careerdeck.storage.memory_store import MemoryStore

SAMPLE_CATALOG = {
    "sectors": [
        {"id": "tech", "name": "Technology", "gradient": {"from": "#000", "to": "#fff"}},
        {"id": "health", "name": "Healthcare"},
        {"id": "arts", "name": "arts & Media"},
    ],
    "jobs": [
        {
            "id": "swe",
            "sector_id": "tech",
            "name": "Software Engineer",
            "difficulty": "intermediate",
            "salary": {"min": 60000, "max": 90000},
            "skills": ["Python", "Git", "SQL", "Testing", "Docker"],
            "roadmap": [{"title": "Learn Python"}, {"title": "Build projects", "description": "Ship"}],
            "certificates": [
                {"name": "AWS Developer", "type": "optional"},
                {"name": "Security+", "type": "required"},
            ],
        },
        {
            "id": "support",
            "sector_id": "tech",
            "name": "IT Support",
            "difficulty": "beginner",
            "salary": {"min": 30000, "max": 50000},
            "skills": ["Networking", "Customer Service"],
        },
        {
            "id": "ds",
            "sector_id": "tech",
            "name": "data Scientist",
            "difficulty": "advanced",
            "salary": {"min": 80000, "max": 150000},
            "skills": ["Python", "Statistics"],
        },
        {
            "id": "nurse",
            "sector_id": "health",
            "name": "Registered Nurse",
            "difficulty": "intermediate",
            "salary": {"min": 55000, "max": 95000},
            "skills": ["Patient Care", "Communication"],
            "links": [{"name": "Nursing 101", "url": "https://example.com", "platform": "edX", "type": "free"}],
        },
    ],
}


@pytest.fixture()
def catalog() -> Catalog:
    return Catalog.from_dict(SAMPLE_CATALOG)


@pytest.fixture()
def store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture()
def catalog_yaml(tmp_path):
    """Write the sample catalog as YAML and return its path."""
    p = tmp_path / "catalog.yaml"
    p.write_text(yaml.safe_dump(SAMPLE_CATALOG))
    return p


@pytest.fixture()
def tmp_settings_yaml(tmp_path, catalog_yaml):
    """Write a minimal settings.yaml and return its path."""
    content = """\
catalog_file: "{catalog}"
state_dir: "{state}"
storage_backend: "SQLite"
compare_limit: 3
recently_viewed_cap: 5
recently_viewed_display: 3
default_sort: " Most-Viewed "
skills_match: "any"
""".format(catalog=str(catalog_yaml), state=str(tmp_path / ".state"))
    p = tmp_path / "settings.yaml"
    p.write_text(content)
    return p
