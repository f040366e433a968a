"""Docker Compose service registry.

Other configurators describe the containers they need through
:meth:`DockerConfigurator.define_service`; when this configurator runs it
writes every defined service to ``docker-compose.yml`` and, when a
Makefile configurator is present, adds the ``docker-compose.log`` target
that pulls the images.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import yaml
from pydantic import BaseModel, Field

from src.environment import Configurator, ConfiguratorRegistry, ExecutionContext


class ServiceDefinition(BaseModel):
    """A single docker-compose service."""

    image: str = Field(..., min_length=1)
    command: str = Field(default="")
    ports: list[str] = Field(default_factory=list)
    volumes: list[str] = Field(default_factory=list)
    working_dir: str = Field(default="")

    def as_compose(self) -> dict[str, Any]:
        """Return the compose mapping, leaving out empty entries."""
        return self.model_dump(exclude_defaults=True)


class DockerConfigurator(Configurator):
    """Collects service definitions and renders ``docker-compose.yml``."""

    name = "docker"
    compose_file = "docker-compose.yml"
    compose_version = "3"
    log_file = "docker-compose.log"

    def __init__(self) -> None:
        self.services: dict[str, ServiceDefinition] = {}

    def define_service(
        self,
        name: str,
        definition: ServiceDefinition | Mapping[str, Any],
    ) -> ServiceDefinition:
        """Register (or replace) the service *name*."""
        if not isinstance(definition, ServiceDefinition):
            definition = ServiceDefinition.model_validate(dict(definition))
        self.services[name] = definition
        return definition

    def influences(self) -> list[str]:
        return ["make"]

    def render(self) -> str:
        document = {
            "version": self.compose_version,
            "services": {
                name: service.as_compose() for name, service in self.services.items()
            },
        }
        return yaml.safe_dump(document, sort_keys=False, default_flow_style=False)

    def configure(self, context: ExecutionContext, registry: ConfiguratorRegistry) -> None:
        if not self.services:
            return

        # pulled images are recorded in the log, which other targets depend on
        make = registry.get("make")
        if make is not None:
            make[self.log_file].add_dependency(self.compose_file)
            make[self.log_file].add_command(f"docker-compose pull > {self.log_file}")

        compose_path = context.resolve(self.compose_file)
        compose_path.write_text(self.render(), encoding="utf-8")
        context.info(
            f"Wrote [bold]{self.compose_file}[/bold] with services: "
            + ", ".join(self.services)
        )
