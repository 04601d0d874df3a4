"""
Provider registry for pass_persist value providers.

A provider is a function that takes an empty SnmpTripleSet and pushes the
current triples of its sub-tree into it. Plugins register providers by name
with the ``register_provider`` decorator; the CLI picks one by name.
"""

from typing import Callable, Dict, List, Optional
import logging

from passpersist.types import Provider

logger = logging.getLogger(__name__)


class ProviderRegistry:
    """Registry of named value providers."""

    def __init__(self) -> None:
        self._providers: Dict[str, Provider] = {}

    def register(self, name: str, provider: Provider) -> None:
        """Register a provider function under ``name``, replacing any previous one."""
        if name in self._providers and self._providers[name] is not provider:
            logger.warning(f"Provider '{name}' already registered, replacing")
        self._providers[name] = provider
        logger.debug(f"Registered provider: {name}")

    def get(self, name: str) -> Optional[Provider]:
        return self._providers.get(name)

    def list_providers(self) -> List[str]:
        """Return registered provider names in registration order."""
        return list(self._providers.keys())

    def clear(self) -> None:
        self._providers.clear()


# Global registry instance
_registry = ProviderRegistry()


def register_provider(name: str) -> Callable[[Provider], Provider]:
    """Decorator to register a provider function.

    Usage:
        @register_provider("disks")
        def disks(triples: SnmpTripleSet) -> None:
            triples.add("1.3.6.1.4.1.99999.1.0", "gauge", lambda: free_space("/"))
    """

    def decorator(func: Provider) -> Provider:
        _registry.register(name, func)
        return func

    return decorator


def get_registry() -> ProviderRegistry:
    """Get the global provider registry."""
    return _registry
