"""Base class for pluggable configurators."""

from __future__ import annotations

from typing import TYPE_CHECKING, ClassVar

if TYPE_CHECKING:
    from .context import ExecutionContext
    from .options import OptionsSchema
    from .registry import ConfiguratorRegistry


class Configurator:
    """One step of the configurator pipeline.

    Subclasses set ``name`` (the key other configurators look them up by)
    and implement :meth:`configure`.
    """

    name: ClassVar[str] = ""

    def influences(self) -> list[str]:
        """Names of configurators this one configures.

        Those configurators are executed after this one.
        """
        return []

    def configure_options(self, schema: OptionsSchema) -> None:
        """Declare the persisted options this configurator owns."""

    def configure(self, context: ExecutionContext, registry: ConfiguratorRegistry) -> None:
        """Configure sibling configurators and write to the project."""
        raise NotImplementedError(f"{type(self).__name__} must implement configure()")
