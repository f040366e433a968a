"""Makefile target registry.

Configurators add environment variables and targets; when this
configurator runs it renders the ``Makefile`` from ``Makefile.j2``.
"""

from __future__ import annotations

from src.environment import Configurator, ConfiguratorRegistry, ExecutionContext

from .templates import TemplateRenderer


class MakeTarget:
    """A named Make rule with dependencies and recipe lines."""

    def __init__(self, name: str) -> None:
        self.name = name
        self.dependencies: list[str] = []
        self.commands: list[str] = []

    def add_dependency(self, dependency: MakeTarget | str) -> None:
        """Depend on another target or on a raw prerequisite string."""
        value = dependency.name if isinstance(dependency, MakeTarget) else dependency
        if value not in self.dependencies:
            self.dependencies.append(value)

    def add_command(self, command: str) -> None:
        if command not in self.commands:
            self.commands.append(command)

    @property
    def rule(self) -> str:
        """The ``target: prerequisites`` line."""
        return " ".join([f"{self.name}:", *self.dependencies])


class MakefileConfigurator(Configurator):
    """Collects Make targets and writes the project ``Makefile``."""

    name = "make"
    makefile = "Makefile"

    def __init__(self, renderer: TemplateRenderer | None = None) -> None:
        self.renderer = renderer or TemplateRenderer()
        self.environment: dict[str, str] = {}
        self.targets: dict[str, MakeTarget] = {}

    def set_environment_variable(self, name: str, value: str) -> None:
        """Export *name* to every recipe, overridable from the shell."""
        self.environment[name] = value

    def __getitem__(self, name: str) -> MakeTarget:
        if name not in self.targets:
            self.targets[name] = MakeTarget(name)
        return self.targets[name]

    def render(self) -> str:
        return self.renderer.render(
            "Makefile.j2",
            {"environment": self.environment, "targets": list(self.targets.values())},
        )

    def configure(self, context: ExecutionContext, registry: ConfiguratorRegistry) -> None:
        if not self.targets and not self.environment:
            return

        makefile_path = context.resolve(self.makefile)
        makefile_path.write_text(self.render(), encoding="utf-8")
        context.info(
            f"Wrote [bold]{self.makefile}[/bold] with targets: " + ", ".join(self.targets)
        )
