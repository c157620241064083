"""Host path resolution for container mounts.

Turns a raw command-line token into an absolute, canonical host path.
Resolution never fails: when canonicalization is unavailable the textual
absolute form is returned instead, and ResolvedPath.canonical says which
one the caller got.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class ResolvedPath:
    """Absolute host path derived from a candidate token.

    The path may not exist on disk; existence is checked separately.
    """

    path: str
    canonical: bool = True

    def __str__(self) -> str:
        return self.path


def _current_dir() -> str:
    """Return the working directory, even if it was deleted under us."""
    try:
        return os.getcwd()
    except OSError:
        return os.environ.get("PWD") or "/"


def expand_tilde(token: str) -> str:
    """Expand a leading ``~/`` to the user's home directory.

    Only the ``~/`` form is expanded; ``~user`` and a bare ``~`` are left
    as they are.

    Examples:
        >>> expand_tilde("~/docs")  # doctest: +SKIP
        '/home/user/docs'
        >>> expand_tilde("./docs")
        './docs'
    """
    if token.startswith("~/"):
        return str(Path.home()) + token[1:]
    return token


def _canonicalize(path: str) -> ResolvedPath:
    try:
        return ResolvedPath(str(Path(path).resolve()), canonical=True)
    except (OSError, RuntimeError, ValueError):
        # Symlink loops, unreadable components, embedded NUL
        return ResolvedPath(os.path.normpath(path), canonical=False)


def resolve_path(candidate: str) -> ResolvedPath:
    """Resolve a candidate token to an absolute host path.

    Steps:
    - empty input resolves to the current working directory
    - ``~/`` is replaced by the home directory
    - relative input is joined to the current working directory
    - ``.``, ``..`` and symlinks are resolved when possible

    Args:
        candidate: Token as typed by the user (escape already removed).

    Returns:
        ResolvedPath with a non-empty absolute path.
    """
    if not candidate:
        return _canonicalize(_current_dir())

    target = expand_tilde(candidate)
    if not os.path.isabs(target):
        target = os.path.join(_current_dir(), target)

    return _canonicalize(target)


def is_under(path: str, root: str) -> bool:
    """Check whether path is root itself or lies below it.

    Purely textual; ``/workspacefoo`` is not under ``/workspace``.
    """
    root = root.rstrip("/") or "/"
    if root == "/":
        return path.startswith("/")
    return path == root or path.startswith(root + "/")
