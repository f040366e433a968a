"""Integration tests for a full configurator run.

These tests run the real pipeline with the standard configurators against
a temporary project and verify that the generated files are well-formed
and that a second run leaves the project alone.

No external services (Docker, Node, yarn) are required; the dry-run Make
check is skipped when ``make`` is not installed.
"""

from __future__ import annotations

import json
import re
import shutil
import subprocess
from pathlib import Path

import pytest
import yaml

from src.config import EnvironmentConfig
from src.configurators import default_configurators
from src.environment import ExecutionContext
from src.pipeline import ConfiguratorPipeline


GENERATED = ("package.json", "webpack.config.js", "postcss.config.js", "app.js")


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

class _Answers:
    def __init__(self, answers: dict[str, bool]) -> None:
        self.answers = answers
        self.asked: list[str] = []

    def __call__(self, question: str, default: bool) -> bool:
        self.asked.append(question)
        return self.answers.get(question, default)


def _run(project_root: Path, answers: dict[str, bool]) -> _Answers:
    config = EnvironmentConfig(project_root=project_root)
    recorder = _Answers(answers)
    context = ExecutionContext(project_root, confirm_fn=recorder)
    ConfiguratorPipeline(config, default_configurators(config), context).run()
    return recorder


def _make_rules(makefile: str) -> dict[str, list[str]]:
    """Map each rule's target to its prerequisites, minus ``$(...)`` calls."""
    rules: dict[str, list[str]] = {}
    for line in makefile.splitlines():
        if not line or line[0] in "\t#" or line.startswith("export ") or ":" not in line:
            continue
        target, _, prerequisites = line.partition(":")
        rules[target.strip()] = re.sub(r"\$\([^)]*\)", " ", prerequisites).split()
    return rules


def _snapshot(root: Path) -> dict[str, str]:
    return {
        str(p.relative_to(root)): p.read_text(encoding="utf-8")
        for p in sorted(root.rglob("*"))
        if p.is_file()
    }


# ---------------------------------------------------------------------------
# Tests
# ---------------------------------------------------------------------------

@pytest.mark.integration
class TestEnvironmentRun:
    ANSWERS = {
        "Use Bootstrap?": False,
        "Add jQuery?": True,
        "Enable autoprefixer?": True,
        "Enable sass support?": False,
    }

    def test_first_run_generates_project(self, tmp_project_dir: Path):
        recorder = _run(tmp_project_dir, self.ANSWERS)
        assert recorder.asked == list(self.ANSWERS)

        package = json.loads((tmp_project_dir / "package.json").read_text())
        assert package["dependencies"] == {"jquery": "^3.3.1"}
        assert "node-sass" not in package["devDependencies"]
        assert "sass-loader" not in package["devDependencies"]

        compose = yaml.safe_load((tmp_project_dir / "docker-compose.yml").read_text())
        service = compose["services"]["webpack"]
        assert service["image"] == "node:carbon"
        assert service["ports"] == ["9000:9000"]
        assert service["working_dir"] == "/var/www"

        makefile = (tmp_project_dir / "Makefile").read_text()
        assert "export YARN ?= docker-compose run --rm --no-deps webpack yarn" in makefile
        assert "install: node_modules" in makefile

        assert "yarn-error.log" in (tmp_project_dir / ".gitignore").read_text().splitlines()

        state = json.loads((tmp_project_dir / ".environment.json").read_text())
        assert state["webpack-generated"] is True

    def test_second_run_is_idempotent(self, tmp_project_dir: Path):
        _run(tmp_project_dir, self.ANSWERS)
        before = _snapshot(tmp_project_dir)

        recorder = _run(tmp_project_dir, {})

        assert recorder.asked == []
        assert _snapshot(tmp_project_dir) == before

    def test_deleted_files_are_not_regenerated(self, tmp_project_dir: Path):
        _run(tmp_project_dir, self.ANSWERS)
        for name in GENERATED:
            (tmp_project_dir / name).unlink()

        recorder = _run(tmp_project_dir, {})

        assert recorder.asked == []
        assert not any((tmp_project_dir / name).exists() for name in GENERATED)
        assert (tmp_project_dir / "docker-compose.yml").exists()

    def test_makefile_prerequisites_resolve(self, tmp_project_dir: Path):
        _run(tmp_project_dir, self.ANSWERS)

        rules = _make_rules((tmp_project_dir / "Makefile").read_text())
        assert rules["docker-compose.log"] == ["docker-compose.yml"]
        assert rules["node_modules"] == ["docker-compose.log"]
        for target, prerequisites in rules.items():
            for prerequisite in prerequisites:
                assert prerequisite in rules or (tmp_project_dir / prerequisite).exists(), (
                    f"{target} depends on {prerequisite}, which is neither a target nor a file"
                )

    @pytest.mark.skipif(shutil.which("make") is None, reason="make is not installed")
    def test_make_install_dry_run(self, tmp_project_dir: Path):
        _run(tmp_project_dir, self.ANSWERS)

        result = subprocess.run(
            ["make", "-n", "install"],
            cwd=tmp_project_dir,
            capture_output=True,
            text=True,
        )

        assert result.returncode == 0, result.stderr
        assert "docker-compose pull > docker-compose.log" in result.stdout
        assert "install" in result.stdout
