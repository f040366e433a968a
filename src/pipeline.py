"""webpack-environment configurator pipeline.

Runs a set of configurators once, in dependency order:

1. Declare options  -- every configurator registers the options it owns.
2. Load state       -- persisted option values from ``.environment.json``.
3. Order            -- topological sort over the configurators' influences.
4. Configure        -- each configurator configures its siblings / writes files.
5. Save state       -- the option store is written back.

Usage::

    python -m src.pipeline --project-root ./my-project
    python -m src.pipeline --project-root ./my-project --mode watch --yes
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any

from src.config import EnvironmentConfig
from src.environment import (
    Configurator,
    ConfiguratorError,
    ConfiguratorRegistry,
    ExecutionContext,
    OptionsSchema,
    OptionStore,
)
from src.utils import console, print_error, print_success, print_summary_table

DOCUMENT_ROOT_OPTION = "document-root"


# ---------------------------------------------------------------------------
# Ordering
# ---------------------------------------------------------------------------


def resolve_order(configurators: list[Configurator]) -> list[Configurator]:
    """Sort *configurators* so that each runs before those it influences.

    Ties keep the given order.  Influences naming configurators that are
    not part of the run are ignored.

    Raises:
        ConfiguratorError: If the influences form a cycle.
    """
    names = [c.name for c in configurators]
    by_name = dict(zip(names, configurators))
    in_degree = {name: 0 for name in names}
    edges: dict[str, list[str]] = {name: [] for name in names}

    for configurator in configurators:
        for target in configurator.influences():
            if target not in by_name or target in edges[configurator.name]:
                continue
            edges[configurator.name].append(target)
            in_degree[target] += 1

    ordered: list[Configurator] = []
    pending = list(names)
    while pending:
        ready = next((name for name in pending if in_degree[name] == 0), None)
        if ready is None:
            raise ConfiguratorError(
                "pipeline", "circular influences between " + ", ".join(pending)
            )
        pending.remove(ready)
        ordered.append(by_name[ready])
        for target in edges[ready]:
            in_degree[target] -= 1

    return ordered


# ---------------------------------------------------------------------------
# Pipeline
# ---------------------------------------------------------------------------


class ConfiguratorPipeline:
    """Runs configurators against one project.

    Attributes:
        config: Run configuration.
        schema: Options declared by the configurators.
        options: Persisted option values.
        registry: Sibling lookup handed to every configurator.
        context: Execution context handed to every configurator.
    """

    def __init__(
        self,
        config: EnvironmentConfig,
        configurators: list[Configurator],
        context: ExecutionContext | None = None,
    ) -> None:
        self.config = config
        self.configurators = list(configurators)
        self.context = context or ExecutionContext(
            config.project_root, assume_yes=config.assume_yes
        )

        self.schema = OptionsSchema()
        self.schema.declare(DOCUMENT_ROOT_OPTION, config.document_root, str)
        for configurator in self.configurators:
            configurator.configure_options(self.schema)

        self.options = OptionStore.load(self.schema, config.state_path)
        if not self.options.is_set(DOCUMENT_ROOT_OPTION):
            self.options.set(DOCUMENT_ROOT_OPTION, config.document_root)
        self.registry = ConfiguratorRegistry(self.options)
        for configurator in self.configurators:
            self.registry.register(configurator)

        self.order = resolve_order(self.configurators)

    def run(self) -> dict[str, Any]:
        """Configure every configurator in order and persist the options.

        Returns:
            Summary with the execution order and the state file path.

        Raises:
            ConfiguratorError: If a configurator cannot operate.  The option
                store is not saved in that case.
        """
        self.config.project_root.mkdir(parents=True, exist_ok=True)

        for configurator in self.order:
            configurator.configure(self.context, self.registry)

        state_path = self.options.save()
        return {
            "order": [c.name for c in self.order],
            "state_file": str(state_path),
        }


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for ``python -m src.pipeline``."""
    import argparse

    from src.configurators import default_configurators

    parser = argparse.ArgumentParser(
        description="webpack-environment -- set up a Webpack Encore toolchain",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  python -m src.pipeline --project-root ./my-project\n"
            "  python -m src.pipeline --mode watch --yes\n"
        ),
    )
    parser.add_argument(
        "--project-root", "-p",
        default=None,
        help="Project directory (default: $WEBPACK_ENV_PROJECT_ROOT or .)",
    )
    parser.add_argument(
        "--document-root",
        default=None,
        help="Web document root the build is written below (default: public)",
    )
    parser.add_argument(
        "--mode",
        choices=["dev-server", "watch"],
        default=None,
        help="Run the webpack container as a dev server or a file watcher",
    )
    parser.add_argument(
        "--yes", "-y",
        action="store_true",
        help="Accept the default answer for every question",
    )

    args = parser.parse_args(argv)

    try:
        config = EnvironmentConfig.from_env()
        if args.project_root:
            config.project_root = Path(args.project_root)
        if args.document_root is not None:
            config.document_root = args.document_root
        if args.mode:
            config.webpack.mode = args.mode
        if args.yes:
            config.assume_yes = True

        pipeline = ConfiguratorPipeline(config, default_configurators(config))
        if args.document_root is not None:
            pipeline.options.set(DOCUMENT_ROOT_OPTION, args.document_root)
        summary = pipeline.run()
    except (ConfiguratorError, ValueError) as exc:
        # OptionError and pydantic's ValidationError are ValueErrors too
        print_error(f"Error: {exc}")
        sys.exit(1)

    console.print()
    print_summary_table(
        {
            "Project": str(config.project_root),
            "Order": " -> ".join(summary["order"]),
            "State": summary["state_file"],
        },
        title="webpack-environment",
    )
    print_success("Environment configured.")


if __name__ == "__main__":
    main()
