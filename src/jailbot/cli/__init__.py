"""CLI package for jailbot.

This package contains the command-line entry point and supporting modules:
- cli: Click command definition (this module)
- run: Mount planning and container execution
- utils: Shared console

Everything before ``--`` is a jailbot option; everything after it is the
container command, passed through argument translation.
"""

from __future__ import annotations

import sys

import click

from .. import __version__
from ..constants import CONTAINER_WORKDIR, ENV_CONTAINER_VOLUME, ENV_IMAGE_NAME
from ..errors import JailbotError
from ..run_config import RunConfig
from .utils import console

SEPARATOR = "--"
_COMMAND_META_KEY = "jailbot.command"

EPILOG = f"""\b
Environment:
  {ENV_IMAGE_NAME}        Docker image name (required, e.g. "debian:trixie-slim")
  {ENV_CONTAINER_VOLUME}  Volume name to mount at /root (e.g. "jailbot_root")

\b
Path arguments after -- are detected and mounted automatically:
  files are reached through a mount of their parent directory,
  directories are mounted under {CONTAINER_WORKDIR}/<name>.
  Prefix an argument with \\ to pass it through unmounted
  (\\~/x becomes /root/x inside the container).

\b
Examples:
  jailbot --verbose -- ls -la
  jailbot --git -- git status
  jailbot --workdir=. -- bash
  jailbot -- cat ./local-file.txt
"""


class SeparatorCommand(click.Command):
    """Command that hands everything after ``--`` to the container untouched.

    Click would otherwise merge tokens before and after the separator into
    the same positional list. The container command is stored in
    ``ctx.meta`` (None when no separator was given).
    """

    def parse_args(self, ctx: click.Context, args: list[str]) -> list[str]:
        if SEPARATOR in args:
            index = args.index(SEPARATOR)
            ctx.meta[_COMMAND_META_KEY] = args[index + 1 :]
            args = args[:index]
        else:
            ctx.meta[_COMMAND_META_KEY] = None
        return super().parse_args(ctx, args)


@click.command(
    cls=SeparatorCommand,
    epilog=EPILOG,
    options_metavar="[OPTIONS] [-- COMMAND...]",
    context_settings={"help_option_names": ["-h", "--help"]},
)
@click.option("--verbose", is_flag=True, help="Enable verbose output")
@click.option(
    "--git",
    is_flag=True,
    help="Mount Git configuration files (~/.gitconfig, ~/.config/git/ignore)",
)
@click.option(
    "--workdir",
    metavar="PATH",
    help=f"Mount directory directly into the container's workdir ({CONTAINER_WORKDIR})",
)
@click.pass_context
@click.version_option(version=__version__, prog_name="jailbot")
def cli(
    ctx: click.Context,
    verbose: bool,
    git: bool,
    workdir: str | None,
) -> None:
    """jailbot - Docker container wrapper with automatic path mounting.

    Everything after -- is run inside the container.
    """
    config = RunConfig.from_cli(
        verbose=verbose,
        git=git,
        workdir=workdir,
        command=ctx.meta.get(_COMMAND_META_KEY),
    )

    # Lazy import: run module pulls in docker/subprocess handling
    from .run import run as _run

    try:
        returncode = _run(config)
    except JailbotError as e:
        console.print(f"[red]Error: {e}[/red]", highlight=False)
        sys.exit(1)

    if returncode:
        sys.exit(returncode)


if __name__ == "__main__":  # pragma: no cover
    cli()
