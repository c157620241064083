"""Command-line token classification.

Decides, for each token of the container command, whether it is a host path
that needs mounting, an escaped literal, or an opaque argument. Rules are
applied in a fixed order and the first match wins:

1. ``\\token``     -> ESCAPED (backslash removed later, ``\\~/`` maps to /root)
2. ``@token``      -> LITERAL (npm scoped packages such as @babel/core)
3. existing entry  -> PATH (after ``~/`` expansion)
4. path-shaped     -> PATH, flagged as not existing
5. anything else   -> LITERAL (URLs like https://... included)

Classification has no side effects beyond a filesystem existence check.
"""

from __future__ import annotations

import os
import re
from dataclasses import dataclass
from enum import Enum

from .constants import CONTAINER_HOME
from .paths import expand_tilde

ESCAPE_PREFIX = "\\"
SCOPED_PACKAGE_PREFIX = "@"
PATH_PREFIXES = ("./", "../", "~/", "/")

# scheme://... (http, https, ftp, file, ssh, ...)
_URL_PATTERN = re.compile(r"^[A-Za-z][A-Za-z0-9+.-]*://")


class TokenKind(str, Enum):
    """How a command-line token is treated."""

    LITERAL = "literal"  # Passed through unchanged
    ESCAPED = "escaped"  # Unescaped, passed through unmounted
    PATH = "path"  # Candidate host path


@dataclass(frozen=True)
class ClassifiedToken:
    """Result of classifying one raw token.

    Attributes:
        kind: Classification result.
        value: Text to use downstream. For ESCAPED tokens this is the token
            without its leading backslash; otherwise it equals raw.
        raw: The token exactly as supplied.
        exists: For PATH tokens, whether the path existed at classification.
    """

    kind: TokenKind
    value: str
    raw: str
    exists: bool = False

    @property
    def is_path(self) -> bool:
        return self.kind is TokenKind.PATH


def is_url(token: str) -> bool:
    """Check if token starts with a URL scheme (``https://``, ``file://``...)."""
    return bool(_URL_PATTERN.match(token))


def is_path_shaped(token: str) -> bool:
    """Check if token looks like a path, whether or not it exists.

    Examples:
        >>> is_path_shaped("./build")
        True
        >>> is_path_shaped("src/main.py")
        True
        >>> is_path_shaped("https://example.com/a")
        False
        >>> is_path_shaped("ls")
        False
    """
    if not token or is_url(token):
        return False
    return token.startswith(PATH_PREFIXES) or "/" in token


def classify(token: str) -> ClassifiedToken:
    """Classify a raw command-line token.

    Args:
        token: Raw token as received on the command line.

    Returns:
        ClassifiedToken describing how the token should be handled.
    """
    if token.startswith(ESCAPE_PREFIX):
        return ClassifiedToken(TokenKind.ESCAPED, token[len(ESCAPE_PREFIX) :], token)

    if not token or token.startswith(SCOPED_PACKAGE_PREFIX):
        return ClassifiedToken(TokenKind.LITERAL, token, token)

    if os.path.exists(expand_tilde(token)):
        return ClassifiedToken(TokenKind.PATH, token, token, exists=True)

    if is_path_shaped(token):
        return ClassifiedToken(TokenKind.PATH, token, token, exists=False)

    return ClassifiedToken(TokenKind.LITERAL, token, token)


def unescape(classified: ClassifiedToken) -> str:
    """Return the container-side text for an ESCAPED token.

    ``\\~/x`` becomes ``/root/x`` (the persistent container home) rather than
    the host home directory; every other escaped token just loses its
    backslash.
    """
    value = classified.value
    if classified.kind is TokenKind.ESCAPED and value.startswith("~/"):
        return CONTAINER_HOME + value[1:]
    return value
