"""Parameter store — JSON persistence of the current parameter set.

Mirrors the settings actions of the editing GUI: every update is saved
immediately, "reset" goes back to defaults, and settings files can be
exported and imported. Files use the camelCase keys of ParameterSet aliases.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from tilegen.models.parameters import ParameterSet

logger = logging.getLogger(__name__)

# Default data directory
_DEFAULT_DATA_DIR = Path(__file__).parent / "data"
_DEFAULT_FILENAME = "parameters.json"


class ParameterStore:
    """File-backed holder of one ParameterSet."""

    def __init__(self, path: Path | None = None) -> None:
        self.path = Path(path) if path else _DEFAULT_DATA_DIR / _DEFAULT_FILENAME
        self._current: ParameterSet | None = None

    @property
    def current(self) -> ParameterSet:
        if self._current is None:
            self._current = self.load()
        return self._current

    def load(self) -> ParameterSet:
        """Read the file; a missing or unreadable file yields defaults."""
        if not self.path.exists():
            logger.debug("No parameter file at %s, using defaults", self.path)
            return ParameterSet()
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
            params = ParameterSet.model_validate(data)
        except (OSError, json.JSONDecodeError, ValidationError) as e:
            logger.warning("Ignoring unreadable parameter file %s: %s", self.path, e)
            return ParameterSet()
        logger.info("Loaded parameters from %s", self.path)
        return params

    def save(self, params: ParameterSet) -> ParameterSet:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(params.to_settings(), indent=2), encoding="utf-8")
        self._current = params
        logger.info("Saved parameters to %s", self.path)
        return params

    def update(self, changes: dict[str, Any]) -> ParameterSet:
        """Merge partial changes (field names or aliases) into the current set and save."""
        aliases = {name: f.alias or name for name, f in ParameterSet.model_fields.items()}
        changes = {aliases.get(key, key): value for key, value in changes.items()}
        merged = {**self.current.to_settings(), **changes}
        return self.save(ParameterSet.model_validate(merged))

    def reset(self) -> ParameterSet:
        if self.path.exists():
            self.path.unlink()
        self._current = ParameterSet()
        logger.info("Parameters reset to defaults")
        return self._current

    def export_settings(self, indent: int = 2) -> str:
        return json.dumps(self.current.to_settings(), indent=indent)

    def import_settings(self, text: str | bytes) -> ParameterSet:
        """Replace the current set with a settings file's contents.

        Raises ValueError for anything that is not a valid settings object.
        """
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid settings file: {e}") from e
        return self.import_document(data)

    def import_document(self, data: Any) -> ParameterSet:
        """Same as import_settings for an already-decoded document."""
        if not isinstance(data, dict):
            raise ValueError("Invalid settings file: expected a JSON object")
        try:
            params = ParameterSet.model_validate(data)
        except ValidationError as e:
            raise ValueError(f"Invalid settings file: {e}") from e
        return self.save(params)
