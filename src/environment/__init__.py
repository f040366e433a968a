"""Host layer for configurators.

Provides the pieces a configurator runs against:

    Configurator          - base class (name, influences, options, configure)
    ExecutionContext      - path resolution, confirmation prompts, output
    OptionsSchema         - declared options (name, default, type)
    OptionStore           - persisted option values
    ConfiguratorRegistry  - sibling lookup by name
"""

from .base import Configurator
from .context import ExecutionContext
from .options import OptionDefinition, OptionError, OptionsSchema, OptionStore
from .registry import ConfiguratorError, ConfiguratorRegistry

__all__ = [
    "Configurator",
    "ConfiguratorError",
    "ConfiguratorRegistry",
    "ExecutionContext",
    "OptionDefinition",
    "OptionError",
    "OptionStore",
    "OptionsSchema",
]
