"""Pydantic-based settings loaded from YAML with env-var overrides."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings

from careerdeck.exceptions import ConfigurationError
from careerdeck.models import SKILLS_MATCH_ALL, SKILLS_MATCH_ANY, SORT_OPTIONS

_PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent

_STORAGE_BACKENDS = ("sqlite", "json", "memory")


class AppSettings(BaseSettings):
    """Application configuration with YAML + env var support.

    Env vars are prefixed with ``CAREERDECK_``.
    Example: ``CAREERDECK_STORAGE_BACKEND=json``
    """

    model_config = {"env_prefix": "CAREERDECK_"}

    # --- catalog ---
    catalog_file: str = str(_PROJECT_ROOT / "catalog.example.yaml")

    # --- persistence ---
    state_dir: str = ".state"
    storage_backend: str = "sqlite"  # sqlite, json, memory

    # --- browsing limits ---
    compare_limit: int = Field(default=3, ge=1)
    recently_viewed_cap: int = Field(default=10, ge=1)  # stored entries
    recently_viewed_display: int = Field(default=3, ge=0)  # shown on home

    # --- presentation defaults ---
    default_sort: str = "alphabetical-asc"
    skills_match: str = SKILLS_MATCH_ANY

    @field_validator("storage_backend")
    @classmethod
    def _check_backend(cls, v: str) -> str:
        v = v.strip().lower()
        if v not in _STORAGE_BACKENDS:
            raise ValueError(f"storage_backend must be one of {', '.join(_STORAGE_BACKENDS)}")
        return v

    @field_validator("default_sort")
    @classmethod
    def _normalise_sort(cls, v: str) -> str:
        v = v.strip().lower()
        if v not in SORT_OPTIONS:
            raise ValueError(f"default_sort must be one of {', '.join(SORT_OPTIONS)}")
        return v

    @field_validator("skills_match")
    @classmethod
    def _normalise_skills_match(cls, v: str) -> str:
        v = v.strip().lower()
        if v not in (SKILLS_MATCH_ANY, SKILLS_MATCH_ALL):
            raise ValueError("skills_match must be 'any' or 'all'")
        return v

    # ---- factory ----

    @classmethod
    def from_yaml(cls, path: str | Path | None = None) -> "AppSettings":
        """Load settings from a YAML file, then overlay env vars.

        Env vars (``CAREERDECK_*``) take priority over YAML values.
        """
        if path is None:
            path = _PROJECT_ROOT / "settings.yaml"
        path = Path(path)
        raw: dict[str, Any] = {}
        if path.exists():
            try:
                with open(path) as fh:
                    raw = yaml.safe_load(fh) or {}
            except yaml.YAMLError as exc:
                raise ConfigurationError(f"{path} is not valid YAML: {exc}") from exc
            if not isinstance(raw, dict):
                raise ConfigurationError(f"{path} must contain a mapping of settings.")

        prefix = "CAREERDECK_"
        for key in list(raw.keys()):
            if f"{prefix}{key.upper()}" in os.environ:
                del raw[key]

        try:
            return cls(**raw)
        except ValidationError as exc:
            raise ConfigurationError(f"Invalid settings in {path}: {exc}") from exc
