"""Name-keyed registry of the configurators taking part in a run."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from .options import OptionStore

if TYPE_CHECKING:
    from .base import Configurator


class ConfiguratorError(Exception):
    """Raised when a configurator cannot operate; aborts the whole run."""

    def __init__(self, configurator: str, message: str) -> None:
        self.configurator = configurator
        super().__init__(f"{configurator}: {message}")


class ConfiguratorRegistry:
    """Looks up sibling configurators by name and exposes the option store."""

    def __init__(self, options: OptionStore) -> None:
        self.options = options
        self._configurators: dict[str, Configurator] = {}

    def register(self, configurator: Configurator) -> None:
        name = configurator.name
        if not name:
            raise ConfiguratorError(type(configurator).__name__, "configurator has no name")
        if name in self._configurators:
            raise ConfiguratorError(name, "a configurator with this name is already registered")
        self._configurators[name] = configurator

    def get(self, name: str) -> Configurator | None:
        """Return the configurator registered as *name*, or ``None``."""
        return self._configurators.get(name)

    # -- Options -----------------------------------------------------------

    def get_option(self, name: str) -> Any:
        return self.options.get(name)

    def set_option(self, name: str, value: Any) -> None:
        self.options.set(name, value)
