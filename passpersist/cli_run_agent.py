"""CLI entry point: run the pass_persist agent on stdin/stdout for snmpd."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Any, Optional

from passpersist.agent import DEFAULT_IDLE_TIMEOUT, PassPersistAgent
from passpersist.app_config import AppConfig
from passpersist.app_logger import AppLogger
from passpersist.paths import PLUGINS_DIR
from passpersist.plugin_loader import load_plugins_from_directory
from passpersist.provider_registry import get_registry

logger = logging.getLogger(__name__)


def _load_config(config_path: Optional[str]) -> Optional[AppConfig]:
    """Load the explicit config, or the default one if it exists.

    An explicitly requested file must exist; a missing default is not an error.
    """
    if config_path is not None:
        return AppConfig(config_path)
    try:
        return AppConfig()
    except FileNotFoundError:
        return None


def _setting(config: Optional[AppConfig], key: str, default: Any) -> Any:
    if config is None:
        return default
    value = config.get(key, default)
    return default if value is None else value


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Serve an OID sub-tree to snmpd using the pass_persist protocol. "
        "Reads requests on stdin and writes replies on stdout."
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to the agent config file (default: agent_config.yaml or data/agent_config.yaml if present)",
    )
    parser.add_argument(
        "--provider",
        default=None,
        help="Name of the registered provider to serve (default: from config, else 'system')",
    )
    parser.add_argument(
        "--plugin-dir",
        default=None,
        help="Directory containing provider plugins (default: bundled plugins directory)",
    )
    parser.add_argument(
        "--idle-timeout",
        type=float,
        default=None,
        help=f"Seconds without a request before exiting (default: from config, else {DEFAULT_IDLE_TIMEOUT:g})",
    )
    parser.add_argument(
        "--dump",
        action="store_true",
        help="Print every value in OID order and exit instead of serving requests",
    )

    args = parser.parse_args(argv)

    try:
        config = _load_config(args.config)
    except FileNotFoundError:
        print(f"Error: Config file not found: {args.config}", file=sys.stderr)
        return 1

    if config is not None:
        try:
            AppLogger.configure(config)
        except OSError as e:
            print(f"Error: cannot open log directory: {e}", file=sys.stderr)
            return 1

    plugin_dir = args.plugin_dir or _setting(config, "plugin_dir", str(PLUGINS_DIR))
    load_plugins_from_directory(plugin_dir)

    registry = get_registry()
    provider_name = args.provider or _setting(config, "provider", "system")
    provider = registry.get(provider_name)
    if provider is None:
        available = ", ".join(registry.list_providers()) or "none"
        print(
            f"Error: Unknown provider '{provider_name}' (available: {available})",
            file=sys.stderr,
        )
        return 1

    if args.idle_timeout is not None:
        idle_timeout = args.idle_timeout
    else:
        idle_timeout = float(_setting(config, "idle_timeout", DEFAULT_IDLE_TIMEOUT))

    agent = PassPersistAgent(provider, idle_timeout=idle_timeout)
    logger.info(f"Serving provider '{provider_name}'")

    try:
        if args.dump:
            agent.dump()
        else:
            agent.run()
    except KeyboardInterrupt:
        logger.info("Agent stopped by user")
    except Exception as e:
        logger.error(f"Error running agent: {e}", exc_info=True)
        print(f"Error running agent: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
