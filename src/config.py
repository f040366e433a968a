"""webpack-environment configuration.

Centralised, typed configuration for a configurator run. All settings use
Pydantic v2 models so they can be validated at construction time and
read from environment variables without boiler-plate.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, Field


class WebpackSettings(BaseModel):
    """Settings for the Node container that runs Webpack Encore."""

    service_name: str = Field(default="webpack", min_length=1)
    image: str = Field(default="node:carbon", min_length=1)
    mode: Literal["dev-server", "watch"] = Field(
        default="dev-server",
        description="Run a persistent dev server (with published port) or a file watcher",
    )
    dev_server_port: int = Field(default=9000, ge=1, le=65535)
    yarn_cache: str = Field(default="~/.cache/yarn")

    @property
    def command(self) -> str:
        """Startup command of the container for the selected mode."""
        if self.mode == "watch":
            return "yarn run encore dev --watch"
        return f"yarn run encore dev-server --host 0.0.0.0 --port {self.dev_server_port}"

    @property
    def ports(self) -> list[str]:
        """Port mappings; only a dev server publishes one."""
        if self.mode == "watch":
            return []
        return [f"{self.dev_server_port}:{self.dev_server_port}"]


class EnvironmentConfig(BaseModel):
    """Global configuration for one configurator pipeline run.

    Instances are typically created once by the CLI entry point and then
    handed to ``ConfiguratorPipeline``.
    """

    project_root: Path = Field(default=Path("."))
    state_file: str = Field(default=".environment.json", min_length=1)
    document_root: str = Field(default="public")
    assume_yes: bool = Field(
        default=False, description="Answer every confirmation with its default"
    )
    webpack: WebpackSettings = Field(default_factory=WebpackSettings)

    # ------------------------------------------------------------------
    # Derived paths
    # ------------------------------------------------------------------

    @property
    def state_path(self) -> Path:
        """Path to the persisted option blob."""
        return self.project_root / self.state_file

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def from_env(cls) -> "EnvironmentConfig":
        """Build an ``EnvironmentConfig`` from environment variables.

        Recognised variables (all optional):
            WEBPACK_ENV_PROJECT_ROOT, WEBPACK_ENV_DOCUMENT_ROOT,
            WEBPACK_ENV_ASSUME_YES, WEBPACK_ENV_NODE_IMAGE, WEBPACK_ENV_MODE,
            WEBPACK_ENV_DEV_SERVER_PORT.
        """
        webpack_kwargs: dict[str, Any] = {}
        if os.environ.get("WEBPACK_ENV_NODE_IMAGE"):
            webpack_kwargs["image"] = os.environ["WEBPACK_ENV_NODE_IMAGE"]
        if os.environ.get("WEBPACK_ENV_MODE"):
            webpack_kwargs["mode"] = os.environ["WEBPACK_ENV_MODE"]
        if os.environ.get("WEBPACK_ENV_DEV_SERVER_PORT"):
            webpack_kwargs["dev_server_port"] = int(os.environ["WEBPACK_ENV_DEV_SERVER_PORT"])

        assume_yes = os.environ.get("WEBPACK_ENV_ASSUME_YES", "").strip().lower()

        return cls(
            project_root=Path(os.environ.get("WEBPACK_ENV_PROJECT_ROOT", ".")),
            document_root=os.environ.get("WEBPACK_ENV_DOCUMENT_ROOT", "public"),
            assume_yes=assume_yes in ("1", "true", "yes", "on"),
            webpack=WebpackSettings(**webpack_kwargs),
        )
