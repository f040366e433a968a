"""Execution context handed to every configurator.

Wraps the project root for path resolution, interactive confirmation
through ``rich.prompt.Confirm``, and console output.
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable

from rich.prompt import Confirm

from src.utils import console, print_info, print_warning

ConfirmFn = Callable[[str, bool], bool]


class ExecutionContext:
    """Filesystem, prompt, and output access for one configurator run.

    Attributes:
        project_root: Directory all relative paths are resolved against.
        assume_yes: When ``True`` every confirmation returns its default
            without prompting.
    """

    def __init__(
        self,
        project_root: str | Path,
        *,
        assume_yes: bool = False,
        confirm_fn: ConfirmFn | None = None,
    ) -> None:
        self.project_root = Path(project_root)
        self.assume_yes = assume_yes
        self._confirm_fn = confirm_fn

    def resolve(self, relative_path: str | Path) -> Path:
        """Return *relative_path* resolved against the project root."""
        return self.project_root / relative_path

    def confirm(self, question: str, default: bool = True) -> bool:
        """Ask a yes/no question and return the answer."""
        if self._confirm_fn is not None:
            return bool(self._confirm_fn(question, default))
        if self.assume_yes:
            return default
        return Confirm.ask(question, default=default, console=console)

    def info(self, message: str) -> None:
        print_info(message)

    def warn(self, message: str) -> None:
        print_warning(message)
