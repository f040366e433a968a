"""``.gitignore`` maintenance."""

from __future__ import annotations

from src.environment import Configurator, ConfiguratorRegistry, ExecutionContext


class GitignoreConfigurator(Configurator):
    """Appends registered patterns that are missing from ``.gitignore``.

    Existing lines are never removed or reordered.  Patterns added after
    this configurator has run are not written, so it is registered after
    the configurators that contribute to it.
    """

    name = "gitignore"
    gitignore_file = ".gitignore"

    def __init__(self) -> None:
        self.patterns: list[str] = []

    def add(self, pattern: str) -> None:
        pattern = pattern.strip()
        if pattern and pattern not in self.patterns:
            self.patterns.append(pattern)

    def configure(self, context: ExecutionContext, registry: ConfiguratorRegistry) -> None:
        if not self.patterns:
            return

        path = context.resolve(self.gitignore_file)
        existing = path.read_text(encoding="utf-8") if path.exists() else ""
        present = {line.strip() for line in existing.splitlines()}
        missing = [p for p in self.patterns if p not in present]
        if not missing:
            return

        content = existing
        if content and not content.endswith("\n"):
            content += "\n"
        content += "".join(f"{p}\n" for p in missing)
        path.write_text(content, encoding="utf-8")
        context.info(f"Added {', '.join(missing)} to [bold]{self.gitignore_file}[/bold]")
