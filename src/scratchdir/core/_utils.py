from __future__ import annotations

import logging
from collections.abc import Sized
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict

InvocationContext = Any
"""Opaque handle identifying the calling test unit, owned by the caller."""

logger = logging.getLogger("scratchdir")


class ConfinedModel(BaseModel):
    """A base class confined to explicitly defined fields in the model schema."""

    model_config = ConfigDict(
        extra="forbid",
    )


class DirectoryProviderError(Exception):
    """Base class for every error raised by a directory provider."""


class InvalidContextError(DirectoryProviderError, ValueError):
    """The invocation context passed to a provider is unusable."""


class DirectoryCreationError(DirectoryProviderError, OSError):
    """Storage refused or failed to create a directory.

    The underlying `OSError` is available as ``__cause__``.

    :param message: What went wrong
    :param path: The location that was being created, if one had been chosen
    """

    def __init__(self, message: str, path: Path | None = None):
        super().__init__(message)
        self.path = path

    def __str__(self) -> str:
        message = self.args[0]
        if self.path is not None:
            message = f"{message} at {self.path}"
        if self.__cause__ is not None:
            message = f"{message}: {self.__cause__}"
        return message


class ClosedProviderError(DirectoryProviderError, RuntimeError):
    """A provider was asked to create a directory after `release()`."""


class ReleaseError(DirectoryProviderError, OSError):
    """Teardown of resources held by a provider failed."""


class UnknownProviderError(DirectoryProviderError, KeyError):
    """No provider variant is registered under the requested name."""

    def __str__(self) -> str:
        return str(self.args[0])


def check_context(context: InvocationContext) -> InvocationContext:
    """Check and return an invocation context if it is usable.

    :param context: The opaque context supplied by the caller
    :raises InvalidContextError: If it is None or an empty string or collection
    :returns: The context, unmodified
    """
    if context is None:
        raise InvalidContextError("Invocation context must not be None")
    if isinstance(context, Sized) and len(context) == 0:
        raise InvalidContextError(
            f"Invocation context must not be empty, got {context!r}"
        )
    return context

