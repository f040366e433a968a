"""Shared utility functions for webpack-environment.

Provides Rich-based console output and the JSON helpers used for the
persisted option blob and the generated ``package.json``.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.table import Table

console = Console()


# ---------------------------------------------------------------------------
# JSON I/O
# ---------------------------------------------------------------------------


def dump_json(data: Any, *, sort_keys: bool = False) -> str:
    """Serialise *data* as pretty-printed JSON with a 4-space indent.

    Slashes and non-ASCII characters are written as-is and empty mappings
    stay ``{}``, so the result matches what Node tooling writes itself.
    """
    return json.dumps(data, indent=4, ensure_ascii=False, sort_keys=sort_keys)


def save_json(data: dict[str, Any] | list[Any], path: str | Path, *, sort_keys: bool = False) -> Path:
    """Save data as pretty-printed JSON followed by a newline.

    Parent directories are created automatically.
    """
    file_path = Path(path)
    file_path.parent.mkdir(parents=True, exist_ok=True)
    file_path.write_text(dump_json(data, sort_keys=sort_keys) + "\n", encoding="utf-8")
    return file_path


def file_contains(path: str | Path, needle: str) -> bool:
    """Return ``True`` if the text of *path* contains *needle*."""
    return needle in Path(path).read_text(encoding="utf-8")


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


def print_summary_table(data: dict[str, str], title: str = "Summary") -> None:
    """Print a two-column key/value summary table.

    Args:
        data: Mapping of label -> value.
        title: Table title.
    """
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Item", style="dim", no_wrap=True)
    table.add_column("Value")

    for key, value in data.items():
        table.add_row(key, str(value))

    console.print(table)
    console.print()


def print_info(message: str) -> None:
    """Print a plain informational message."""
    console.print(message)


def print_success(message: str) -> None:
    """Print a green success message."""
    console.print(f"[bold green]{message}[/bold green]")


def print_error(message: str) -> None:
    """Print a red error message."""
    console.print(f"[bold red]{message}[/bold red]")


def print_warning(message: str) -> None:
    """Print a yellow warning message."""
    console.print(f"[bold yellow]{message}[/bold yellow]")
