"""jailbot - run commands in a Docker container with automatic path mounting."""

__version__ = "0.3.0"
