"""Plugin system: finds `endpoint.py` modules and mounts their routers."""

import importlib
from pathlib import Path
from typing import Any

from fastapi import APIRouter, FastAPI
from structlog import get_logger

logger = get_logger(__name__)

PLUGINS_PACKAGE = "plugins"


class Plugin:
    """A discovered plugin: its route prefix, router and metadata."""

    def __init__(self, name: str, router: APIRouter, metadata: dict[str, Any] | None = None):
        self.name = name
        self.router = router
        self.metadata = metadata or {}

    @property
    def prefix(self) -> str:
        return f"/{self.name}"

    @property
    def version(self) -> str:
        return self.metadata.get("version", "1.0.0")


class PluginDiscovery:
    """Handles automatic discovery and registration of plugins."""

    def __init__(
        self, plugins_dir: Path | None = None, excluded_plugins: list[str] | None = None
    ):
        self.plugins_dir = plugins_dir or Path(__file__).parent
        self.excluded_plugins = set(excluded_plugins or [])
        self.discovered_plugins: dict[str, Plugin] = {}

    def discover_plugins(self) -> dict[str, Plugin]:
        """Discover all valid plugins below the plugins directory."""
        if not self.plugins_dir.exists():
            logger.warning("Plugins directory does not exist", path=str(self.plugins_dir))
            return {}

        for endpoint_file in sorted(self.plugins_dir.rglob("endpoint.py")):
            relative_path = endpoint_file.parent.relative_to(self.plugins_dir)
            if any(part.startswith("_") for part in relative_path.parts):
                continue

            plugin_name = relative_path.as_posix()
            if plugin_name in self.excluded_plugins:
                logger.info("Skipping excluded plugin", plugin=plugin_name)
                continue

            plugin = self._load_plugin(plugin_name)
            if plugin:
                self.discovered_plugins[plugin_name] = plugin

        return self.discovered_plugins

    def _load_plugin(self, plugin_name: str) -> Plugin | None:
        """Import a plugin's endpoint module and read its metadata."""
        module_path = f"{PLUGINS_PACKAGE}.{plugin_name.replace('/', '.')}"
        endpoint_module = importlib.import_module(f"{module_path}.endpoint")

        router = getattr(endpoint_module, "router", None)
        if not isinstance(router, APIRouter):
            logger.warning("No valid router found in endpoint.py", plugin=plugin_name)
            return None

        package = importlib.import_module(module_path)
        metadata = getattr(package, "PLUGIN_METADATA", {})
        return Plugin(plugin_name, router, metadata)

    def register_plugins(self, app: FastAPI) -> None:
        """Register all discovered plugins with the FastAPI app."""
        for plugin in self.discovered_plugins.values():
            app.include_router(plugin.router, prefix=plugin.prefix, tags=[plugin.name.title()])
            logger.info(
                "Registered plugin routes", plugin=plugin.name, version=plugin.version
            )


def init_plugins(app: FastAPI, excluded_plugins: list[str] | None = None) -> PluginDiscovery:
    """Initialize plugin system and register all discovered plugins."""
    discovery = PluginDiscovery(excluded_plugins=excluded_plugins)
    plugins = discovery.discover_plugins()
    discovery.register_plugins(app)

    logger.info("Plugin system initialized", plugin_count=len(plugins))
    return discovery
