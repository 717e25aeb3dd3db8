from __future__ import annotations

from functools import partial
from pathlib import Path

import yaml
from pydantic import field_validator, model_validator

from ._providers import (
    TEMP_DIR_PREFIX,
    RootedDirectoryProvider,
    SessionDirectoryProvider,
    check_prefix,
)
from ._registry import GLOBAL_PROVIDER_REGISTRY, ProviderFactory, ProviderRegistry
from ._utils import ConfinedModel


class ProviderSettings(ConfinedModel):
    """Which provider variant to build, and how.

    :param provider: Name of a registered variant
    :param prefix: Name prefix, for the rooted and session variants
    :param root: If given, make directories under this absolute path instead
        of the system temporary area
    """

    provider: str = "standard"
    prefix: str = TEMP_DIR_PREFIX
    root: Path | None = None

    @field_validator("root")
    @classmethod
    def root_must_be_absolute(cls, root: Path | None) -> Path | None:
        if root is not None and not root.is_absolute():
            raise ValueError(f"root must be an absolute path, got {root}")
        return root

    @field_validator("prefix")
    @classmethod
    def prefix_must_be_plain_name(cls, prefix: str) -> str:
        return check_prefix(prefix)

    @model_validator(mode="after")
    def check_combination(self) -> ProviderSettings:
        if self.root is not None and self.provider != "standard":
            raise ValueError(
                f"root can only be used with the standard provider, "
                f"not {self.provider!r}"
            )
        if (
            self.prefix != TEMP_DIR_PREFIX
            and self.root is None
            and self.provider != "session"
        ):
            raise ValueError(
                f"prefix cannot be changed for the {self.provider!r} provider "
                "unless a root is given"
            )
        return self


def load_provider_settings(path: Path | str) -> ProviderSettings:
    """Read `ProviderSettings` from a yaml file.

    An empty file gives the defaults.

    :raises ValueError: If the file is not valid yaml or not a mapping
    """
    with open(path) as file:
        try:
            data = yaml.safe_load(file)
        except yaml.YAMLError as e:
            raise ValueError(f"Cannot parse {path} as yaml: {e}") from e
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ValueError(
            f"Expected a mapping in {path}, got {type(data).__name__}"
        )
    return ProviderSettings.model_validate(data)


def provider_factory_from_settings(
    settings: ProviderSettings, registry: ProviderRegistry = GLOBAL_PROVIDER_REGISTRY
) -> ProviderFactory:
    """Turn settings into a zero argument factory for the chosen variant."""
    if settings.root is not None:
        return partial(RootedDirectoryProvider, settings.root, settings.prefix)
    if settings.provider == "session" and settings.prefix != TEMP_DIR_PREFIX:
        return partial(SessionDirectoryProvider, settings.prefix)
    return registry.get(settings.provider)
