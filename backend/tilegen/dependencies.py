"""FastAPI dependency injection."""

from __future__ import annotations

from functools import lru_cache

from tilegen.config import settings
from tilegen.store.parameters import ParameterStore


def get_settings():
    return settings


@lru_cache(maxsize=1)
def get_parameter_store() -> ParameterStore:
    return ParameterStore(settings.tilegen_parameters_file)
