"""Logging for jailbot.

User-facing errors go through the rich console in the CLI. Everything the
launcher decides on its own (mounts added, tokens passed through, docker
calls) goes through the "jailbot" logger tree on stderr:

    jailbot: warning: Path does not exist: /no/such/file

With --verbose (or JAILBOT_DEBUG=1) debug records are shown too and every
line names the module that emitted it:

    jailbot: verbose [mounts]: Added mount: /home/u/docs -> /workspace/docs
"""

from __future__ import annotations

import logging
import os
import sys

from .constants import ENV_DEBUG

ROOT_LOGGER = "jailbot"
_TRUTHY = ("1", "true", "yes")

_handler: logging.Handler | None = None


class LaunchFormatter(logging.Formatter):
    """Formats records as ``jailbot: <level>: message``.

    DEBUG records are labelled "verbose" since that is the flag that shows
    them. With ``show_origin`` the emitting module is added after the label.
    """

    LABELS = {
        logging.DEBUG: "verbose",
        logging.INFO: "info",
        logging.WARNING: "warning",
        logging.ERROR: "error",
        logging.CRITICAL: "error",
    }

    def __init__(self, show_origin: bool = False) -> None:
        super().__init__()
        self.show_origin = show_origin

    def format(self, record: logging.LogRecord) -> str:
        label = self.LABELS.get(record.levelno, record.levelname.lower())
        if self.show_origin:
            origin = record.name.rpartition(".")[2] if record.name != ROOT_LOGGER else ROOT_LOGGER
            label = f"{label} [{origin}]"
        text = f"{ROOT_LOGGER}: {label}: {record.getMessage()}"
        if record.exc_info:
            text = f"{text}\n{self.formatException(record.exc_info)}"
        return text


def debug_from_env(environ: dict[str, str] | None = None) -> bool:
    """True if JAILBOT_DEBUG asks for verbose output."""
    env = os.environ if environ is None else environ
    return env.get(ENV_DEBUG, "").strip().lower() in _TRUTHY


def _configure(debug: bool) -> None:
    global _handler
    root = logging.getLogger(ROOT_LOGGER)
    if _handler is None:
        _handler = logging.StreamHandler(sys.stderr)
        root.addHandler(_handler)
    level = logging.DEBUG if debug else logging.WARNING
    root.setLevel(level)
    _handler.setLevel(level)
    _handler.setFormatter(LaunchFormatter(show_origin=debug))


def get_logger(name: str) -> logging.Logger:
    """Return the logger for a jailbot module.

    Names outside the jailbot tree are moved under it, so
    ``get_logger("translator")`` and ``get_logger("jailbot.translator")``
    are the same logger.
    """
    if _handler is None:
        _configure(debug_from_env())
    if name != ROOT_LOGGER and not name.startswith(ROOT_LOGGER + "."):
        name = f"{ROOT_LOGGER}.{name}"
    return logging.getLogger(name)


def set_debug(enabled: bool = True) -> None:
    """Switch verbose output on or off (used by --verbose)."""
    _configure(enabled)
