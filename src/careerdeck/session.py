"""Session wiring: one catalog, one store, one shared browsing state."""

from __future__ import annotations

import logging
from pathlib import Path

from careerdeck.browsing.comparison import ComparisonColumn, build_comparison
from careerdeck.browsing.pipeline import filter_jobs, search_jobs, sort_jobs, sort_sectors
from careerdeck.catalog.loader import Catalog
from careerdeck.exceptions import UnknownJobError
from careerdeck.models import FilterCriteria, Job, Sector
from careerdeck.settings import AppSettings
from careerdeck.state.engine import BrowsingState
from careerdeck.storage.base import KeyValueStore
from careerdeck.storage.json_store import JsonFileStore
from careerdeck.storage.memory_store import MemoryStore
from careerdeck.storage.sqlite_store import SqliteStore

logger = logging.getLogger(__name__)


def build_store(settings: AppSettings) -> KeyValueStore:
    """Create the key-value store selected by ``settings.storage_backend``."""
    state_dir = Path(settings.state_dir)
    if settings.storage_backend == "memory":
        return MemoryStore()
    if settings.storage_backend == "json":
        return JsonFileStore(state_dir / "browsing_state.json")
    return SqliteStore(state_dir / "browsing_state.db")


class BrowsingSession:
    """Everything a presentation shell needs, behind one handle.

    Screens share a single session so favorites, the compare list and
    history stay consistent between them.
    """

    def __init__(
        self,
        catalog: Catalog,
        state: BrowsingState,
        settings: AppSettings | None = None,
        store: KeyValueStore | None = None,
    ) -> None:
        self._catalog = catalog
        self._state = state
        self._settings = settings or AppSettings()
        self._store = store

    @classmethod
    def open(cls, settings: AppSettings) -> "BrowsingSession":
        """Load the catalog and hydrate browsing state from the configured store."""
        catalog = Catalog.from_yaml(settings.catalog_file)
        store = build_store(settings)
        state = BrowsingState(
            store,
            compare_limit=settings.compare_limit,
            recently_viewed_cap=settings.recently_viewed_cap,
        )
        logger.info("Opened browsing session (%s backend).", settings.storage_backend)
        return cls(catalog, state, settings, store=store)

    def __enter__(self) -> "BrowsingSession":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        if self._store is not None:
            self._store.close()
            self._store = None

    @property
    def catalog(self) -> Catalog:
        return self._catalog

    @property
    def state(self) -> BrowsingState:
        return self._state

    @property
    def settings(self) -> AppSettings:
        return self._settings

    # ---- screens ----

    def view_job(self, job_id: str) -> Job:
        """Open a job's detail: record the view and return the job.

        Raises :class:`UnknownJobError` without recording anything if the id
        is not in the catalog.
        """
        job = self._catalog.find_job(job_id)
        if job is None:
            raise UnknownJobError(job_id)
        self._state.record_view(job_id)
        return job

    def browse_sectors(self, sort: str | None = None) -> list[Sector]:
        return sort_sectors(self._catalog.sectors, sort or self._settings.default_sort)

    def sector_jobs(self, sector_id: str, sort: str | None = None) -> list[Job]:
        self._catalog.get_sector(sector_id)
        return self._sort(self._catalog.jobs_in_sector(sector_id), sort)

    def filter_jobs(
        self,
        criteria: FilterCriteria,
        sort: str | None = None,
        sector_id: str | None = None,
    ) -> list[Job]:
        """Filter the whole catalog, or only *sector_id* when given, then sort."""
        if sector_id is None:
            jobs = self._catalog.jobs
        else:
            self._catalog.get_sector(sector_id)
            jobs = self._catalog.jobs_in_sector(sector_id)
        return self._sort(filter_jobs(jobs, criteria), sort)

    def search(self, query: str, sort: str | None = None) -> list[Job]:
        return self._sort(search_jobs(self._catalog.jobs, query), sort)

    def recently_viewed_jobs(self) -> list[Job]:
        """Recently viewed jobs for the home screen, most recent first."""
        ids = self._state.recently_viewed()
        return self._catalog.resolve_jobs(ids)[:self._settings.recently_viewed_display]

    def favorite_jobs(self, sort: str | None = None) -> list[Job]:
        favorites = self._state.favorites()
        return self._sort([j for j in self._catalog.jobs if j.id in favorites], sort)

    def compare_jobs(self) -> list[Job]:
        return self._catalog.resolve_jobs(self._state.compare_list())

    def comparison(self) -> list[ComparisonColumn]:
        return build_comparison(self.compare_jobs())

    def _sort(self, jobs: list[Job], sort: str | None) -> list[Job]:
        return sort_jobs(
            jobs,
            sort or self._settings.default_sort,
            view_counts=self._state.view_counts(),
        )
