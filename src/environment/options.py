"""Declared, persisted configurator options.

Configurators declare the options they own into an ``OptionsSchema``
(name, default, value type).  The ``OptionStore`` holds the values that
were set during earlier runs in a small JSON blob in the project root and
validates every read and write against the schema.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from src.utils import save_json


class OptionError(ValueError):
    """Raised on invalid option declarations, unknown names, or mistyped values."""


def _matches_type(value: Any, value_type: type) -> bool:
    # bool is an int subclass; only accept it where bool was declared
    if isinstance(value, bool) and value_type is not bool:
        return False
    return isinstance(value, value_type)


# ---------------------------------------------------------------------------
# Schema
# ---------------------------------------------------------------------------


class OptionDefinition(BaseModel):
    """A single declared option."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    name: str = Field(..., min_length=1)
    default: Any = None
    value_type: type = Field(default=bool)

    @model_validator(mode="after")
    def _check_default(self) -> "OptionDefinition":
        if not _matches_type(self.default, self.value_type):
            raise ValueError(
                f"default {self.default!r} of option '{self.name}' "
                f"is not of type {self.value_type.__name__}"
            )
        return self

    def validate_value(self, value: Any) -> Any:
        """Return *value* unchanged or raise ``OptionError`` if mistyped."""
        if not _matches_type(value, self.value_type):
            raise OptionError(
                f"Option '{self.name}' expects {self.value_type.__name__}, "
                f"got {type(value).__name__} ({value!r})"
            )
        return value


class OptionsSchema:
    """Registry of every option declared by the configurators of a run."""

    def __init__(self) -> None:
        self._definitions: dict[str, OptionDefinition] = {}

    def declare(self, name: str, default: Any, value_type: type) -> OptionDefinition:
        """Register an option.

        Re-declaring an identical option is allowed so that configurators
        can share one; a conflicting re-declaration raises ``OptionError``.
        """
        try:
            definition = OptionDefinition(name=name, default=default, value_type=value_type)
        except ValueError as exc:
            raise OptionError(str(exc)) from exc

        existing = self._definitions.get(name)
        if existing is not None:
            if existing != definition:
                raise OptionError(f"Option '{name}' is already declared differently")
            return existing

        self._definitions[name] = definition
        return definition

    def get_definition(self, name: str) -> OptionDefinition:
        try:
            return self._definitions[name]
        except KeyError:
            raise OptionError(f"Unknown option '{name}'") from None

    def __contains__(self, name: object) -> bool:
        return name in self._definitions


# ---------------------------------------------------------------------------
# Persisted values
# ---------------------------------------------------------------------------


class OptionStore:
    """Persisted option values backed by a JSON file.

    Values that were never set fall back to the schema default.  Keys found
    in the file that no configurator declared are kept as they are, so a
    run with fewer configurators does not lose the state of the others.
    """

    def __init__(
        self,
        schema: OptionsSchema,
        path: Path | None = None,
        values: dict[str, Any] | None = None,
    ) -> None:
        self.schema = schema
        self.path = path
        self._values: dict[str, Any] = {}
        for name, value in (values or {}).items():
            if name in schema:
                schema.get_definition(name).validate_value(value)
            self._values[name] = value

    @classmethod
    def load(cls, schema: OptionsSchema, path: Path) -> "OptionStore":
        """Read the option blob at *path*; a missing file means no values."""
        values: dict[str, Any] = {}
        if path.exists():
            try:
                data = json.loads(path.read_text(encoding="utf-8"))
            except json.JSONDecodeError as exc:
                raise OptionError(f"Option file {path} is not valid JSON: {exc}") from exc
            if not isinstance(data, dict):
                raise OptionError(f"Option file {path} must contain a JSON object")
            values = data
        return cls(schema, path, values)

    def get(self, name: str) -> Any:
        definition = self.schema.get_definition(name)
        return self._values.get(name, definition.default)

    def set(self, name: str, value: Any) -> None:
        definition = self.schema.get_definition(name)
        self._values[name] = definition.validate_value(value)

    def is_set(self, name: str) -> bool:
        """Whether *name* holds an explicitly stored value."""
        return name in self._values

    def save(self, path: Path | None = None) -> Path:
        """Write all stored values to *path* (defaults to the load path)."""
        target = path or self.path
        if target is None:
            raise OptionError("OptionStore has no path to save to")
        return save_json(self._values, target, sort_keys=True)
