"""Configurators shipped with webpack-environment.

Quick usage::

    from src.configurators import default_configurators
    from src.pipeline import ConfiguratorPipeline

    pipeline = ConfiguratorPipeline(config, default_configurators(config))
    pipeline.run()
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .docker import DockerConfigurator, ServiceDefinition
from .gitignore import GitignoreConfigurator
from .makefile import MakefileConfigurator, MakeTarget
from .templates import TemplateRenderer
from .webpack import WebpackConfigurator, WebpackOptions

if TYPE_CHECKING:
    from src.config import EnvironmentConfig
    from src.environment import Configurator


def default_configurators(config: EnvironmentConfig) -> list[Configurator]:
    """The standard set: webpack plus the collaborators it configures.

    ``gitignore`` declares no influences and must stay after every
    configurator that adds patterns to it; registered earlier, it would run
    first and write ``.gitignore`` before the patterns arrive.
    """
    renderer = TemplateRenderer()
    return [
        WebpackConfigurator(config.webpack, renderer),
        MakefileConfigurator(renderer),
        DockerConfigurator(),
        GitignoreConfigurator(),
    ]


__all__ = [
    "DockerConfigurator",
    "GitignoreConfigurator",
    "MakeTarget",
    "MakefileConfigurator",
    "ServiceDefinition",
    "TemplateRenderer",
    "WebpackConfigurator",
    "WebpackOptions",
    "default_configurators",
]
