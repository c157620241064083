"""CLI utilities for jailbot.

Console setup shared by the CLI modules.
"""

from __future__ import annotations

from rich.console import Console

# stdout belongs to the container; jailbot's own output goes to stderr
console = Console(stderr=True, legacy_windows=False)
