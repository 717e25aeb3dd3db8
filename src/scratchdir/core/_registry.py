from __future__ import annotations

from collections.abc import Callable, Iterator
from contextlib import contextmanager

from ._providers import (
    DirectoryProvider,
    SessionDirectoryProvider,
    StandardDirectoryProvider,
)
from ._utils import UnknownProviderError

ProviderFactory = Callable[[], DirectoryProvider]
"""Zero argument callable that makes a new, unused provider."""


class ProviderRegistry:
    """Maps provider variant names to factories that build them.

    Which variant to use is decided by whoever holds the registry; the
    providers themselves never look it up.
    """

    def __init__(self) -> None:
        self._factories: dict[str, ProviderFactory] = {}

    def register(self, name: str, factory: ProviderFactory) -> None:
        if name in self._factories:
            raise ValueError(f"Duplicate provider name: {name}")
        self._factories[name] = factory

    def decorator(self, name: str) -> Callable[[ProviderFactory], ProviderFactory]:
        """Register the decorated class or function under ``name``."""

        def wrapper(factory: ProviderFactory) -> ProviderFactory:
            self.register(name, factory)
            return factory

        return wrapper

    def get(self, name: str) -> ProviderFactory:
        try:
            return self._factories[name]
        except KeyError as e:
            raise UnknownProviderError(
                f"No provider registered as {name!r}, "
                f"choose one of {sorted(self._factories)}"
            ) from e

    def create(self, name: str) -> DirectoryProvider:
        """Build a new provider of the variant registered as ``name``."""
        return self.get(name)()

    def names(self) -> list[str]:
        return sorted(self._factories)

    def clear(self) -> None:
        self._factories.clear()

    def __len__(self) -> int:
        return len(self._factories)

    def __contains__(self, name: str) -> bool:
        return name in self._factories


GLOBAL_PROVIDER_REGISTRY = ProviderRegistry()
GLOBAL_PROVIDER_REGISTRY.register("standard", StandardDirectoryProvider)
GLOBAL_PROVIDER_REGISTRY.register("session", SessionDirectoryProvider)


@contextmanager
def open_provider(
    name: str, registry: ProviderRegistry = GLOBAL_PROVIDER_REGISTRY
) -> Iterator[DirectoryProvider]:
    """Build the named provider and release it however the block is left.

    :param name: The variant name the provider is registered under
    :param registry: Where to look the name up

    :example:
    ```python
    with open_provider("session") as provider:
        handle = provider.create_directory("test_something")
    ```
    """
    provider = registry.create(name)
    try:
        yield provider
    finally:
        provider.release()
