"""Command-line interface for platformrocks."""

import logging

import click
from rich.markup import escape

from platformrocks import __version__
from platformrocks.config import DEFAULT_TEMPLATE, CreateOptions
from platformrocks.console import console
from platformrocks.create import create_web
from platformrocks.errors import ExitCode, classify_error, suggestion_for
from platformrocks.log import configure_logging
from platformrocks.templates import TEMPLATES

logger = logging.getLogger(__name__)

EXAMPLES = """\b
Examples:
  platformrocks my-app                        Create a project with default template
  platformrocks my-app --template web         Create a web application
  platformrocks my-app --pm pnpm              Use pnpm as package manager
  platformrocks my-app --no-git --no-install  Skip git init and dependency installation
  platformrocks my-app --dry-run              Preview what would be created
  platformrocks my-app --force                Overwrite existing directory
"""


def version_callback(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
    """Print version and exit."""
    if not value or ctx.resilient_parsing:
        return
    console.print(f"platformrocks [bold cyan]{__version__}[/bold cyan]")
    ctx.exit()


def handle_error(error: Exception) -> ExitCode:
    """Print an error with its exit code and a hint, return the code."""
    exit_code = classify_error(error)
    message = str(error) or "An unknown error occurred"
    logger.debug("Aborting after %s", type(error).__name__, exc_info=True)

    console.print()
    console.print(
        f"[red]Error: {escape(message)}[/red] "
        f"[yellow](exit code: {int(exit_code)})[/yellow]"
    )
    suggestion = suggestion_for(exit_code)
    if suggestion:
        console.print(f"[cyan]ℹ  {suggestion}[/cyan]")
    return exit_code


@click.command(epilog=EXAMPLES)
@click.argument("app_name", required=False)
@click.option(
    "--version",
    is_flag=True,
    callback=version_callback,
    expose_value=False,
    is_eager=True,
    help="Show version and exit.",
)
@click.option(
    "--template",
    "-t",
    default=DEFAULT_TEMPLATE,
    show_default=True,
    envvar="PLATFORMROCKS_TEMPLATE",
    help=f"Template to use for scaffolding ({', '.join(TEMPLATES)}).",
)
@click.option(
    "--pm",
    envvar="PLATFORMROCKS_PM",
    help="Package manager to use (auto-detected if not specified).",
)
@click.option(
    "--git/--no-git",
    default=True,
    help="Initialize a git repository (default: initialize).",
)
@click.option(
    "--install/--no-install",
    default=True,
    help="Install dependencies (default: install).",
)
@click.option(
    "--force",
    "-f",
    is_flag=True,
    default=False,
    help="Scaffold into a non-empty directory.",
)
@click.option(
    "--dry-run",
    is_flag=True,
    default=False,
    help="Show what would be done without executing.",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    default=False,
    help="Stream subprocess output and enable debug logging.",
)
def main(
    app_name: str | None,
    template: str,
    pm: str | None,
    git: bool,
    install: bool,
    force: bool,
    dry_run: bool,
    verbose: bool,
) -> None:
    """Bootstrap CLI for platform.rocks projects.

    Creates APP_NAME from a template: downloads it, renames the package,
    installs dependencies and initializes git.
    """
    configure_logging(verbose)
    options = CreateOptions(
        template=template,
        pm=pm or None,
        git=git,
        install=install,
        force=force,
        dry_run=dry_run,
        verbose=verbose,
    )
    logger.debug("Options: %s", options.to_dict())

    try:
        create_web(app_name, options)
    except Exception as e:
        raise SystemExit(int(handle_error(e))) from None


if __name__ == "__main__":  # pragma: no cover
    main()
