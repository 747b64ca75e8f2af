"""Custom exception hierarchy for CareerDeck."""


class CareerDeckError(Exception):
    """Base exception for all CareerDeck errors."""


class CatalogIntegrityError(CareerDeckError):
    """Raised when the catalog fails validation at load time."""

    def __init__(self, problems: list[str]) -> None:
        self.problems = list(problems)
        super().__init__("Catalog failed validation: " + "; ".join(self.problems))


class UnknownJobError(CareerDeckError, LookupError):
    """Raised when a job id does not resolve in the catalog."""

    def __init__(self, job_id: str) -> None:
        self.job_id = job_id
        super().__init__(f"Unknown job id: {job_id!r}")


class UnknownSectorError(CareerDeckError, LookupError):
    """Raised when a sector id does not resolve in the catalog."""

    def __init__(self, sector_id: str) -> None:
        self.sector_id = sector_id
        super().__init__(f"Unknown sector id: {sector_id!r}")


class CompareFullError(CareerDeckError):
    """Raised when adding a job to a compare list that is already at its limit."""

    def __init__(self, limit: int) -> None:
        self.limit = limit
        super().__init__(f"Compare list is full ({limit} jobs).")


class PersistenceError(CareerDeckError):
    """Raised when the key-value store cannot be read or written."""


class ConfigurationError(CareerDeckError):
    """Raised when settings are invalid or missing."""
