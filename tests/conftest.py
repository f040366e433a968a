"""Shared pytest fixtures for the webpack-environment test suite.

Provides reusable fixtures for:
- Temporary project directories
- Scripted confirmation answers
- Option schema / store / registry wired with the standard collaborators
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable

import pytest

from src.configurators import (
    DockerConfigurator,
    GitignoreConfigurator,
    MakefileConfigurator,
    WebpackConfigurator,
)
from src.environment import (
    ConfiguratorRegistry,
    ExecutionContext,
    OptionsSchema,
    OptionStore,
)


# ---------------------------------------------------------------------------
# Paths & Directories
# ---------------------------------------------------------------------------

@pytest.fixture
def tmp_project_dir(tmp_path: Path) -> Path:
    """Empty temporary project directory (auto-cleanup)."""
    project_dir = tmp_path / "test-project"
    project_dir.mkdir()
    yield project_dir


# ---------------------------------------------------------------------------
# Prompts
# ---------------------------------------------------------------------------


class ScriptedAnswers:
    """Confirmation callable answering from a question -> answer mapping.

    Questions missing from the mapping are answered with their default.
    Every question asked is recorded in ``asked``.
    """

    def __init__(self, answers: dict[str, bool] | None = None) -> None:
        self.answers = answers or {}
        self.asked: list[str] = []

    def __call__(self, question: str, default: bool) -> bool:
        self.asked.append(question)
        return self.answers.get(question, default)


@pytest.fixture
def scripted_answers() -> Callable[..., ScriptedAnswers]:
    """Factory for ``ScriptedAnswers``."""
    return ScriptedAnswers


@pytest.fixture
def make_context(tmp_project_dir: Path) -> Callable[..., ExecutionContext]:
    """Factory building an ``ExecutionContext`` on the temp project."""

    def _make(answers: Any = None) -> ExecutionContext:
        confirm_fn = answers if callable(answers) else ScriptedAnswers(answers)
        return ExecutionContext(tmp_project_dir, confirm_fn=confirm_fn)

    return _make


# ---------------------------------------------------------------------------
# Options & registry
# ---------------------------------------------------------------------------


@pytest.fixture
def schema() -> OptionsSchema:
    """Schema with the shared document-root and webpack options declared."""
    schema = OptionsSchema()
    schema.declare("document-root", "public", str)
    WebpackConfigurator().configure_options(schema)
    return schema


@pytest.fixture
def option_store(schema: OptionsSchema, tmp_project_dir: Path) -> OptionStore:
    return OptionStore.load(schema, tmp_project_dir / ".environment.json")


@pytest.fixture
def docker() -> DockerConfigurator:
    return DockerConfigurator()


@pytest.fixture
def make() -> MakefileConfigurator:
    return MakefileConfigurator()


@pytest.fixture
def gitignore() -> GitignoreConfigurator:
    return GitignoreConfigurator()


@pytest.fixture
def registry(option_store, docker, make, gitignore) -> ConfiguratorRegistry:
    """Registry holding docker, make and gitignore collaborators."""
    registry = ConfiguratorRegistry(option_store)
    registry.register(docker)
    registry.register(make)
    registry.register(gitignore)
    return registry
