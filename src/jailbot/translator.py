"""Argument translation: host paths on the command line -> container paths.

For each token, in order:
- escaped tokens are unescaped and passed through unmounted
- literals are passed through unchanged
- existing files get their parent directory mounted under the workspace
  root and are rewritten to the container-side file path
- existing directories are mounted under the workspace root and rewritten
- anything that cannot be mounted is passed through as typed, with a warning

Translation never raises; a bad token only affects itself.
"""

from __future__ import annotations

import os
import posixpath
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .classifier import ClassifiedToken, TokenKind, classify, unescape
from .constants import CONTAINER_WORKDIR
from .logging import get_logger
from .mounts import MountRegistry
from .paths import is_under, resolve_path

if TYPE_CHECKING:
    from collections.abc import Iterable

logger = get_logger(__name__)

_HOST_ROOT_WARNING = "Cannot mount host root over the workspace, passing through: %s"


@dataclass
class Translation:
    """Result of translating a command line."""

    container_args: list[str] = field(default_factory=list)
    mount_specs: list[str] = field(default_factory=list)


def get_container_path(host_path: str, workspace: str = CONTAINER_WORKDIR) -> str | None:
    """Map a host directory to its location under the workspace root.

    The host root has no name to mount under, so it maps to None rather
    than onto the workspace root itself.

    Examples:
        >>> get_container_path("/home/u/proj")
        '/workspace/proj'
        >>> get_container_path("/") is None
        True
    """
    name = os.path.basename(host_path.rstrip("/"))
    if not name:
        return None
    return posixpath.join(workspace, name)


class ArgumentTranslator:
    """Translates command tokens and records the mounts they need.

    The registry is owned by one launch; pass a pre-populated registry to
    share de-duplication with --workdir and --git mounts.
    """

    def __init__(self, registry: MountRegistry | None = None) -> None:
        self.registry = registry if registry is not None else MountRegistry()

    @property
    def workspace(self) -> str:
        return self.registry.workspace

    def translate(self, raw_args: Iterable[str]) -> Translation:
        """Translate a command line.

        Args:
            raw_args: Container command and its arguments.

        Returns:
            Translation with one container argument per input token (same
            order) and every mount spec registered so far.
        """
        container_args = [self.translate_token(token) for token in raw_args]
        return Translation(container_args=container_args, mount_specs=self.registry.specs)

    def translate_token(self, token: str) -> str:
        """Translate a single token, mounting its path if needed."""
        classified = classify(token)

        if classified.kind is TokenKind.ESCAPED:
            unescaped = unescape(classified)
            logger.debug("Escaped path, passing through: %s", unescaped)
            return unescaped

        if classified.kind is TokenKind.LITERAL:
            return token

        return self._translate_path(classified)

    def _translate_path(self, classified: ClassifiedToken) -> str:
        token = classified.raw
        abs_path = resolve_path(classified.value).path

        if is_under(abs_path, self.workspace):
            logger.warning("Skipping container workdir path: %s", token)
            return token

        if not os.path.exists(abs_path):
            logger.warning("Path does not exist: %s", abs_path)
            return token

        if os.path.isfile(abs_path):
            return self._translate_file(token, abs_path)

        if os.path.isdir(abs_path):
            return self._translate_directory(token, abs_path)

        # Sockets, FIFOs, devices
        logger.warning("Not a regular file or directory, passing through: %s", abs_path)
        return token

    def _translate_file(self, token: str, abs_path: str) -> str:
        # Files are reached through a mount of their parent directory
        parent_dir = os.path.dirname(abs_path)
        parent_container = self.registry.target_for(parent_dir)

        if parent_container is None:
            parent_container = get_container_path(parent_dir, self.workspace)
            if parent_container is None:
                logger.warning(_HOST_ROOT_WARNING, token)
                return token
            if not self.registry.try_add(parent_dir, parent_container):
                return token

        file_path = posixpath.join(parent_container, os.path.basename(abs_path))
        logger.debug("Mapped file: %s -> %s", abs_path, file_path)
        return file_path

    def _translate_directory(self, token: str, abs_path: str) -> str:
        container_path = get_container_path(abs_path, self.workspace)
        if container_path is None:
            logger.warning(_HOST_ROOT_WARNING, token)
            return token
        if not self.registry.try_add(abs_path, container_path):
            # Already mounted (under its own target) or unmountable
            return token
        logger.debug("Mapped directory: %s -> %s", abs_path, container_path)
        return container_path

    def mount_workdir(self, path: str) -> bool:
        """Mount a host directory directly at the workspace root.

        Used by --workdir. Problems are logged as warnings, never raised.

        Returns:
            True if the directory was mounted.
        """
        if not path:
            logger.warning("Empty mount path provided")
            return False

        abs_path = resolve_path(path).path

        if is_under(abs_path, self.workspace):
            logger.warning("Cannot mount container workdir path: %s", path)
            return False

        if not os.path.exists(abs_path):
            logger.warning("Mount-only path does not exist: %s", abs_path)
            return False

        if not os.path.isdir(abs_path):
            logger.warning("Mount-only target must be directory: %s", abs_path)
            return False

        return self.registry.try_add(abs_path, self.workspace)


def translate(raw_args: Iterable[str], registry: MountRegistry | None = None) -> Translation:
    """Translate a command line with a fresh (or the given) registry."""
    return ArgumentTranslator(registry).translate(raw_args)
