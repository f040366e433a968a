"""Webpack Encore frontend tooling.

Registers a Node container with the docker configurator and dependency
targets with the Makefile configurator on every run.  On the first run
only it generates the frontend files that are missing from the project:

- ``package.json``       -- Encore plus the dependencies chosen by the user
- ``webpack.config.js``  -- Encore configuration
- ``postcss.config.js``  -- only when autoprefixing is enabled
- ``app.js``             -- entry point boilerplate

Existing files are never overwritten.  Once generation has run, the
``webpack-generated`` option keeps it from running again, even if the user
later deletes the generated files.
"""

from __future__ import annotations

from pydantic import BaseModel

from src.config import WebpackSettings
from src.environment import (
    Configurator,
    ConfiguratorError,
    ConfiguratorRegistry,
    ExecutionContext,
    OptionsSchema,
)
from src.utils import dump_json, file_contains

from .docker import DockerConfigurator
from .gitignore import GitignoreConfigurator
from .makefile import MakefileConfigurator
from .templates import TemplateRenderer

GENERATED_OPTION = "webpack-generated"
ENCORE_PACKAGE = "@symfony/webpack-encore"

# Pinned version ranges written to package.json.
ENCORE_VERSION = "^0.17.0"
BOOTSTRAP_VERSION = "^4.1.1"
POPPER_VERSION = "^1.14.3"
JQUERY_VERSION = "^3.3.1"
POSTCSS_LOADER_VERSION = "^2.1.5"
AUTOPREFIXER_VERSION = "^7.0.1"
NODE_SASS_VERSION = "^4.9.0"
SASS_LOADER_VERSION = "^7.0.1"

PACKAGE_SCRIPTS: dict[str, str] = {
    "dev-server": "encore dev-server",
    "dev": "encore dev",
    "watch": "encore dev --watch",
    "build": "encore production",
}


class WebpackOptions(BaseModel):
    """Answers collected from the user for the generated files."""

    bootstrap: bool = False
    jquery: bool = False
    enable_autoprefixer: bool = False
    enable_sass: bool = False
    enable_postcss: bool = False


class WebpackConfigurator(Configurator):
    """Sets up a Webpack Encore build inside a Node container."""

    name = "webpack"

    def __init__(
        self,
        settings: WebpackSettings | None = None,
        renderer: TemplateRenderer | None = None,
    ) -> None:
        self.settings = settings or WebpackSettings()
        self.renderer = renderer or TemplateRenderer()
        self._options: WebpackOptions | None = None

    def influences(self) -> list[str]:
        return [MakefileConfigurator.name, DockerConfigurator.name]

    def configure_options(self, schema: OptionsSchema) -> None:
        schema.declare(GENERATED_OPTION, False, bool)

    # -- Main entry point --------------------------------------------------

    def configure(self, context: ExecutionContext, registry: ConfiguratorRegistry) -> None:
        docker = registry.get(DockerConfigurator.name)
        make = registry.get(MakefileConfigurator.name)
        if docker is None:
            raise ConfiguratorError(self.name, "won't work without docker")
        if make is None:
            raise ConfiguratorError(self.name, "won't work without make")

        service = self.settings.service_name
        docker.define_service(service, {
            "image": self.settings.image,
            "command": self.settings.command,
            "ports": self.settings.ports,
            "volumes": [
                ".:/var/www:delegated",
                f"{self.settings.yarn_cache}:/usr/local/share/.cache/yarn",
            ],
            "working_dir": "/var/www",
        })

        make.set_environment_variable("YARN", f"docker-compose run --rm --no-deps {service} yarn")
        make["node_modules"].add_dependency("docker-compose.log")
        make["node_modules"].add_dependency("$(wildcard package.* yarn.*)")
        make["node_modules"].add_command("$(YARN) install")
        make["install"].add_dependency(make["node_modules"])
        make["clean"].add_command("rm -rf node_modules")

        gitignore = registry.get(GitignoreConfigurator.name)
        if gitignore is not None:
            gitignore.add("yarn-error.log")

        # everything below only runs once per project

        if registry.get_option(GENERATED_OPTION):
            return

        if self.create_package_json(context):
            context.info("Created [bold]package.json[/bold].")
        elif not file_contains(context.resolve("package.json"), ENCORE_PACKAGE):
            context.warn(
                f"package.json already exists but does not contain {ENCORE_PACKAGE}.\n"
                "You might need to configure it manually for the webpack environment to work.\n"
                "See WebpackConfigurator.create_package_json for the expected content."
            )

        if self.create_webpack_config(context, registry):
            context.info("Created [bold]webpack.config.js[/bold].")

            if self.create_postcss_config(context):
                context.info("Created [bold]postcss.config.js[/bold].")

        if self.create_app_js(context):
            context.warn("There is now an app.js in your project root. Adjust it as needed.")

        registry.set_option(GENERATED_OPTION, True)

    # -- User options ------------------------------------------------------

    def get_options(self, context: ExecutionContext) -> WebpackOptions:
        """Ask the user which frontend features to set up.

        Asked once per configurator instance.  Choosing Bootstrap implies
        jQuery, autoprefixer and Sass, so those questions are skipped.
        """
        if self._options is not None:
            return self._options

        bootstrap = context.confirm("Use Bootstrap?", default=True)
        jquery = bootstrap or context.confirm("Add jQuery?", default=True)
        autoprefixer = bootstrap or context.confirm("Enable autoprefixer?", default=True)
        sass = bootstrap or context.confirm("Enable sass support?", default=True)

        self._options = WebpackOptions(
            bootstrap=bootstrap,
            jquery=jquery,
            enable_autoprefixer=autoprefixer,
            enable_sass=sass,
            enable_postcss=autoprefixer,
        )
        return self._options

    # -- File generation ---------------------------------------------------

    def build_package_json(self, options: WebpackOptions) -> dict:
        dev_dependencies = {ENCORE_PACKAGE: ENCORE_VERSION}
        dependencies: dict[str, str] = {}

        if options.bootstrap:
            dependencies["bootstrap"] = BOOTSTRAP_VERSION
            dependencies["popper.js"] = POPPER_VERSION

        if options.jquery:
            dependencies["jquery"] = JQUERY_VERSION

        if options.enable_postcss:
            dev_dependencies["postcss-loader"] = POSTCSS_LOADER_VERSION

        if options.enable_autoprefixer:
            dev_dependencies["autoprefixer"] = AUTOPREFIXER_VERSION

        if options.enable_sass:
            dev_dependencies["node-sass"] = NODE_SASS_VERSION
            dev_dependencies["sass-loader"] = SASS_LOADER_VERSION

        return {
            "devDependencies": dict(sorted(dev_dependencies.items())),
            "dependencies": dict(sorted(dependencies.items())),
            "license": "UNLICENSED",
            "private": True,
            "scripts": dict(PACKAGE_SCRIPTS),
            "browserslist": ["defaults"],
        }

    def create_package_json(self, context: ExecutionContext) -> bool:
        path = context.resolve("package.json")
        if path.exists():
            return False

        options = self.get_options(context)
        path.write_text(dump_json(self.build_package_json(options)) + "\n", encoding="utf-8")
        return True

    def create_webpack_config(self, context: ExecutionContext, registry: ConfiguratorRegistry) -> bool:
        path = context.resolve("webpack.config.js")
        if path.exists():
            return False

        document_root = str(registry.get_option("document-root")).rstrip("/")
        options = self.get_options(context)
        self.renderer.render_to_file(
            "webpack.config.js.j2",
            path,
            {
                "output_path": f"{document_root}/build/",
                "public_path": "/build",
                "options": options,
            },
        )
        return True

    def create_postcss_config(self, context: ExecutionContext) -> bool:
        path = context.resolve("postcss.config.js")
        if path.exists():
            return False

        options = self.get_options(context)
        if not options.enable_postcss:
            return False

        plugins: dict[str, dict] = {}
        if options.enable_autoprefixer:
            plugins["autoprefixer"] = {}

        self.renderer.render_to_file(
            "postcss.config.js.j2",
            path,
            {"configuration": dump_json({"plugins": plugins})},
        )
        return True

    def create_app_js(self, context: ExecutionContext) -> bool:
        path = context.resolve("app.js")
        if path.exists():
            return False

        self.renderer.render_to_file("app.js.j2", path, {})
        return True
