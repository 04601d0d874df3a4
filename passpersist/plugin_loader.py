"""
Plugin loader for value providers.

This module discovers and loads provider plugin files from a directory. Each
plugin registers its providers with the global provider registry on import.
"""
import importlib.util
import sys
from pathlib import Path
from typing import List
import logging

from passpersist.paths import PLUGIN_PACKAGE

logger = logging.getLogger(__name__)


def load_plugins_from_directory(
    plugin_dir: str = "plugins", package: str = PLUGIN_PACKAGE
) -> List[str]:
    """Load all Python plugin files from the specified directory.

    Args:
        plugin_dir: Directory containing plugin .py files (default: "plugins")
        package: Module name prefix the plugins are imported under

    Returns:
        List of loaded plugin module names
    """
    plugin_path = Path(plugin_dir)

    if not plugin_path.exists():
        logger.warning(f"Plugin directory '{plugin_dir}' does not exist")
        return []

    if not plugin_path.is_dir():
        logger.warning(f"Plugin path '{plugin_dir}' is not a directory")
        return []

    loaded_plugins = []

    for plugin_file in sorted(plugin_path.glob("*.py")):
        if plugin_file.name.startswith("_"):
            continue

        module_name = f"{package}.{plugin_file.stem}"
        if module_name in sys.modules:
            # Already imported as a package module; its providers are registered
            loaded_plugins.append(module_name)
            continue

        spec = importlib.util.spec_from_file_location(module_name, plugin_file)
        if spec is None or spec.loader is None:
            logger.warning(f"Could not load plugin spec for {plugin_file}")
            continue

        module = importlib.util.module_from_spec(spec)
        sys.modules[module_name] = module
        try:
            spec.loader.exec_module(module)
        except Exception as e:
            del sys.modules[module_name]
            logger.error(f"Failed to load plugin {plugin_file}: {e}", exc_info=True)
            continue

        loaded_plugins.append(module_name)
        logger.info(f"Loaded plugin: {module_name}")

    return loaded_plugins
