"""The building blocks for making and releasing temporary directories."""

from ._log import config_scratchdir_logging
from ._providers import (
    TEMP_DIR_PREFIX,
    DirectoryHandle,
    DirectoryNamespace,
    DirectoryProvider,
    RootedDirectoryProvider,
    SessionDirectoryProvider,
    StandardDirectoryProvider,
    check_prefix,
)
from ._registry import (
    GLOBAL_PROVIDER_REGISTRY,
    ProviderFactory,
    ProviderRegistry,
    open_provider,
)
from ._settings import (
    ProviderSettings,
    load_provider_settings,
    provider_factory_from_settings,
)
from ._utils import (
    ClosedProviderError,
    ConfinedModel,
    DirectoryCreationError,
    DirectoryProviderError,
    InvalidContextError,
    InvocationContext,
    ReleaseError,
    UnknownProviderError,
    check_context,
)

__all__ = [
    "TEMP_DIR_PREFIX",
    "DirectoryHandle",
    "DirectoryNamespace",
    "DirectoryProvider",
    "RootedDirectoryProvider",
    "SessionDirectoryProvider",
    "StandardDirectoryProvider",
    "check_prefix",
    "GLOBAL_PROVIDER_REGISTRY",
    "ProviderFactory",
    "ProviderRegistry",
    "open_provider",
    "ProviderSettings",
    "load_provider_settings",
    "provider_factory_from_settings",
    "ClosedProviderError",
    "ConfinedModel",
    "DirectoryCreationError",
    "DirectoryProviderError",
    "InvalidContextError",
    "InvocationContext",
    "ReleaseError",
    "UnknownProviderError",
    "check_context",
    "config_scratchdir_logging",
]
