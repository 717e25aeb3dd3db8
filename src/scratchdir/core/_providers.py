from __future__ import annotations

import logging
import os
import shutil
import tempfile
import threading
from abc import ABC, abstractmethod
from enum import Enum
from pathlib import Path
from types import TracebackType

from pydantic import ConfigDict, field_validator

from ._utils import (
    ClosedProviderError,
    ConfinedModel,
    DirectoryCreationError,
    InvocationContext,
    ReleaseError,
    check_context,
)

TEMP_DIR_PREFIX = "scratchdir"
"""Name prefix for created directories, only there to make them easy to spot."""


def check_prefix(prefix: str) -> str:
    """Check and return a name prefix if it cannot lead outside its parent.

    :raises ValueError: If it holds a path separator or is . or ..
    """
    separators = [sep for sep in (os.sep, os.altsep) if sep]
    if prefix in (".", "..") or any(sep in prefix for sep in separators):
        raise ValueError(f"prefix must be a plain name, got {prefix!r}")
    return prefix


class DirectoryNamespace(str, Enum):
    """Which filesystem or namespace a `DirectoryHandle` belongs to."""

    DEFAULT = "default"
    """The native filesystem of the host"""

    CUSTOM = "custom"
    """An area owned and torn down by the provider that made the directory"""


class DirectoryHandle(ConfinedModel):
    """
    A directory that a `DirectoryProvider` has created for the caller.

    The directory existed and was empty at the moment the handle was returned.
    From then on it belongs to the caller, the provider keeps no reference to it.

    :param path: Absolute path of the directory
    :param namespace: Which filesystem the path belongs to
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    path: Path
    namespace: DirectoryNamespace = DirectoryNamespace.DEFAULT

    @field_validator("path")
    @classmethod
    def path_must_be_absolute(cls, path: Path) -> Path:
        if not path.is_absolute():
            raise ValueError(f"path must be an absolute path, got {path}")
        return path

    def __fspath__(self) -> str:
        return os.fspath(self.path)

    def __str__(self) -> str:
        return str(self.path)


class DirectoryProvider(ABC):
    """Creates fresh, empty, uniquely named directories for invocation contexts.

    Providers are built with no arguments, used for any number of
    `create_directory` calls, then closed once with `release`. They are also
    context managers, so that a ``with`` block guarantees the release::

        with StandardDirectoryProvider() as provider:
            handle = provider.create_directory(request.node.nodeid)
    """

    def __init__(self) -> None:
        self._closed = False
        self.log = logging.LoggerAdapter(
            logging.getLogger("scratchdir.providers"),
            {"scratchdir_provider_name": type(self).__name__},
        )

    @property
    def closed(self) -> bool:
        """Whether `release` has been called."""
        return self._closed

    def create_directory(self, context: InvocationContext) -> DirectoryHandle:
        """Create a new directory that did not exist before this call.

        :param context: The invocation context of the calling test unit
        :raises ClosedProviderError: If the provider has been released
        :raises InvalidContextError: If the context is None or empty
        :raises DirectoryCreationError: If storage refused to make the directory
        :returns: A handle to the empty directory
        """
        if self._closed:
            raise ClosedProviderError(
                f"{type(self).__name__} has been released, "
                "it cannot create any more directories"
            )
        check_context(context)
        handle = self._create_directory(context)
        self.log.debug(f"Created {handle.path}")
        return handle

    @abstractmethod
    def _create_directory(self, context: InvocationContext) -> DirectoryHandle:
        """Make the directory, raising DirectoryCreationError on failure."""

    def release(self) -> None:
        """Free any resources held by the provider.

        Can be called more than once, only the first call does anything.
        Directories already handed out stay the caller's responsibility.

        :raises ReleaseError: If teardown of held resources failed
        """
        if self._closed:
            return
        self._closed = True
        self._release()
        self.log.debug("Released")

    def _release(self) -> None:
        """Tear down held resources, by default there are none."""

    def __enter__(self) -> DirectoryProvider:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        self.release()


class StandardDirectoryProvider(DirectoryProvider):
    """Makes directories in the system temporary area with `tempfile.mkdtemp`.

    Release does nothing: the operating system, or whatever sweeps the temporary
    area, reclaims the directories.
    """

    def _create_directory(self, context: InvocationContext) -> DirectoryHandle:
        try:
            path = tempfile.mkdtemp(prefix=TEMP_DIR_PREFIX)
        except OSError as e:
            raise DirectoryCreationError(
                "Cannot create temporary directory", Path(tempfile.gettempdir())
            ) from e
        return DirectoryHandle(path=Path(path), namespace=DirectoryNamespace.DEFAULT)


class RootedDirectoryProvider(DirectoryProvider):
    """Like `StandardDirectoryProvider`, but under a root chosen by the caller.

    Register it with ``functools.partial(RootedDirectoryProvider, root)`` to give
    it a zero argument factory.

    :param root: Absolute path of an existing directory to create directories in
    :param prefix: Name prefix for created directories
    """

    def __init__(self, root: Path | str, prefix: str = TEMP_DIR_PREFIX) -> None:
        super().__init__()
        root = Path(root)
        if not root.is_absolute():
            raise ValueError(f"root must be an absolute path, got {root}")
        self._root = root
        self._prefix = check_prefix(prefix)

    @property
    def root(self) -> Path:
        return self._root

    def _create_directory(self, context: InvocationContext) -> DirectoryHandle:
        try:
            path = tempfile.mkdtemp(prefix=self._prefix, dir=self._root)
        except OSError as e:
            raise DirectoryCreationError("Cannot create directory", self._root) from e
        return DirectoryHandle(path=Path(path), namespace=DirectoryNamespace.DEFAULT)


class SessionDirectoryProvider(DirectoryProvider):
    """Makes directories inside a private session area that it owns.

    The session area is created under the system temporary area on the first
    `create_directory`, and each directory inside it is numbered from 00000
    upwards. `release` deletes the session area along with every directory that
    was made in it.

    :param prefix: Name prefix for the session area and the directories in it
    """

    def __init__(self, prefix: str = TEMP_DIR_PREFIX) -> None:
        super().__init__()
        self._prefix = check_prefix(prefix)
        self._root: Path | None = None
        self._count = 0
        self._lock = threading.Lock()

    @property
    def root(self) -> Path | None:
        """The session area, or None if nothing has been created yet."""
        return self._root

    def _ensure_root(self) -> Path:
        if self._root is None:
            try:
                self._root = Path(tempfile.mkdtemp(prefix=f"{self._prefix}-session"))
            except OSError as e:
                raise DirectoryCreationError(
                    "Cannot create session area", Path(tempfile.gettempdir())
                ) from e
            self.log.debug(f"Created session area {self._root}")
        return self._root

    def _create_directory(self, context: InvocationContext) -> DirectoryHandle:
        with self._lock:
            root = self._ensure_root()
            path = root / f"{self._prefix}{self._count:05d}"
            # A failed number is never reused
            self._count += 1
            try:
                path.mkdir()
            except OSError as e:
                raise DirectoryCreationError("Cannot create directory", path) from e
        return DirectoryHandle(path=path, namespace=DirectoryNamespace.CUSTOM)

    def _release(self) -> None:
        with self._lock:
            if self._root is None:
                return
            root, self._root = self._root, None
            try:
                shutil.rmtree(root)
            except OSError as e:
                raise ReleaseError(f"Cannot remove session area {root}") from e
