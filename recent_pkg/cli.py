"""CLI entry point for recent-pkg."""

from __future__ import annotations

import shlex
from pathlib import Path

import click

from recent_pkg import __version__
from recent_pkg.errors import RecentError
from recent_pkg.models import Package
from recent_pkg.pipeline import build_command, find_recent_package, resolve_workspace
from recent_pkg.shell import run_tool, set_verbose


class RecentGroup(click.Group):
    """Command group that treats unknown subcommands as build tool commands.

    ``recent-pkg test --release`` is the same as
    ``recent-pkg run test --release``.
    """

    def resolve_command(
        self, ctx: click.Context, args: list[str]
    ) -> tuple[str | None, click.Command | None, list[str]]:
        if args and not args[0].startswith("-") and args[0] not in self.commands:
            return "run", self.commands["run"], args
        return super().resolve_command(ctx, args)


class ForwardCommand(click.Command):
    """Command that hands its raw arguments to the build tool untouched.

    Bypasses click's option parser so ``--`` and unknown flags survive.
    """

    def parse_args(self, ctx: click.Context, args: list[str]) -> list[str]:
        if not args:
            raise click.UsageError("No build command specified.", ctx=ctx)
        ctx.args = list(args)
        return ctx.args


def _select(ctx: click.Context) -> Package | None:
    """Run the resolution pipeline, turning library errors into CLI errors."""
    try:
        root, config = resolve_workspace(ctx.obj["directory"])
        ctx.obj["config"] = config
        return find_recent_package(root, config)
    except RecentError as exc:
        raise click.ClickException(str(exc)) from exc


@click.group(cls=RecentGroup, invoke_without_command=True)
@click.version_option(__version__, prog_name="recent-pkg")
@click.option(
    "-C",
    "--directory",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=None,
    help="Run as if started in this directory.",
)
@click.option(
    "-v",
    "--verbose",
    is_flag=True,
    envvar="RECENT_PKG_DEBUG",
    help="Print diagnostics to stderr.",
)
@click.pass_context
def cli(ctx: click.Context, directory: Path | None, verbose: bool) -> None:
    """Show and operate on the most recently changed workspace package."""
    set_verbose(verbose)
    ctx.obj = {"directory": directory}
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


@cli.command()
@click.pass_context
def path(ctx: click.Context) -> None:
    """Print the directory of the recently changed package."""
    package = _select(ctx)
    if package is not None:
        click.echo(str(package.path))


@cli.command()
@click.pass_context
def show(ctx: click.Context) -> None:
    """Print the name of the recently changed package."""
    package = _select(ctx)
    if package is not None:
        click.echo(package.name)


@cli.command(cls=ForwardCommand)
@click.pass_context
def run(ctx: click.Context) -> None:
    """Run a build tool command on the recently changed package.

    Arguments are passed through, with --package NAME added after the
    tool's subcommand. Does nothing when no package changed.
    """
    package = _select(ctx)
    if package is None:
        return

    cmd = build_command(package, ctx.args, ctx.obj["config"].tool)
    click.echo(f"run: {shlex.join(cmd)}")
    result = run_tool(*cmd, cwd=ctx.obj["directory"])
    if not result.ok:
        if result.stderr:
            click.echo(f"Error: {result.stderr}", err=True)
        ctx.exit(result.returncode)
