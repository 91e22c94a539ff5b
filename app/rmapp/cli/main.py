"""Main CLI application entry point.

Defines the ``rmapp APP_NAME`` command: resolve the application, find
its files, then peek at, measure, trash or delete them.
"""

import dataclasses
import logging
from typing import Annotated

import typer
from rich.logging import RichHandler

from rmapp import __version__
from rmapp.cli.display import (
    create_results_table,
    print_deletion_summary,
    print_peek_report,
    print_size_report,
)
from rmapp.core.config import ConfigError, load_config
from rmapp.deleter.models import DeletionMode
from rmapp.deleter.operator import Deleter
from rmapp.finder.catalog import build_catalog
from rmapp.finder.models import DiscoveryOptions, ScanTarget, SizeMode
from rmapp.finder.scanner import Finder
from rmapp.resolver.bundle import (
    AppNotFoundError,
    locate_bundle,
    normalize_app_name,
    resolve_bundle_id,
)
from rmapp.utils.formatting import console, err_console, print_error, print_info, print_warning

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="rmapp",
    help="Remove macOS apps and their associated files.",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"rmapp version {__version__}")
        raise typer.Exit()


def configure_logging(verbose: bool) -> None:
    """Route rmapp log records to stderr through Rich.

    Args:
        verbose: Show debug records instead of warnings only.
    """
    package_logger = logging.getLogger("rmapp")
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
    package_logger.addHandler(
        RichHandler(console=err_console, show_time=False, show_path=False, markup=False)
    )
    package_logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    package_logger.propagate = False


def check_args(*, force: bool, peek: bool, logical: bool, size: bool) -> str | None:
    """Validate flag combinations.

    Returns:
        Error message for an incompatible combination, None if valid.
    """
    if peek and force:
        return "Incompatible options '--force' and '--peek'. Choose one."
    if logical and force:
        return "'--logical' can only be used with '--peek' or '--size', not with '--force'."
    if logical and not (peek or size):
        return "'--logical' must be used with '--peek' or '--size'."
    if peek and size:
        return "'--size' is already shown by '--peek'. Choose one."
    return None


@app.command()
def main(
    app_name: Annotated[
        list[str],
        typer.Argument(
            help='Application to remove, e.g. "Visual Studio Code".',
            show_default=False,
        ),
    ],
    force: Annotated[
        bool,
        typer.Option(
            "--force",
            "-f",
            help="Delete files permanently instead of moving them to the Trash.",
        ),
    ] = False,
    peek: Annotated[
        bool,
        typer.Option("--peek", "-p", help="List matched files without removing them."),
    ] = False,
    logical: Annotated[
        bool,
        typer.Option("--logical", "-l", help="Report logical instead of on-disk sizes."),
    ] = False,
    size: Annotated[
        bool,
        typer.Option("--size", "-s", help="Show the total size of the app's data."),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Show detailed output."),
    ] = False,
    yes: Annotated[
        bool,
        typer.Option("--yes", "-y", help="Skip the confirmation prompt for --force."),
    ] = False,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
) -> None:
    """Remove a macOS app and every file it left behind.

    Files are moved to the Trash by default. Paths that cannot be
    trashed or deleted without administrator rights are handled in one
    privileged batch.
    """
    configure_logging(verbose)

    if len(app_name) > 1:
        joined = " ".join(app_name)
        print_warning("Detected multiple app name arguments. Did you forget the quotes?")
        console.print(f'Try: rmapp "{joined}"')
        raise typer.Exit(code=0)

    error = check_args(force=force, peek=peek, logical=logical, size=size)
    if error:
        print_error(error)
        raise typer.Exit(code=2)

    try:
        config = load_config()
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    options = DiscoveryOptions.from_config(config)
    if logical:
        options = dataclasses.replace(options, size_mode=SizeMode.LOGICAL)

    name = normalize_app_name(app_name[0])
    try:
        bundle_id = resolve_bundle_id(locate_bundle(app_name[0]))
    except AppNotFoundError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    if verbose:
        console.print(f"\nApplication to delete: [app]{name}[/]")
        console.print(f"Resolved Bundle ID: [app]{bundle_id or '-'}[/]\n")

    catalog = build_catalog(extra_roots=config.extra_roots)
    result = Finder(catalog, options).discover(ScanTarget(app_name=name, bundle_id=bundle_id))

    if peek:
        print_peek_report(result.matches, name)
        return

    if size:
        print_size_report(result.matches, name)
        return

    if not result.matches:
        print_info(f"Found 0 files for {name}")
        return

    mode = DeletionMode.FORCE if force else DeletionMode.TRASH
    if mode == DeletionMode.FORCE and not yes:
        confirmed = typer.confirm(
            f"Permanently delete {len(result.matches)} path(s) for {name}?",
            default=False,
        )
        if not confirmed:
            print_info("Aborted.")
            raise typer.Exit(code=0)

    report = Deleter(mode, size_mode=options.size_mode).remove(result.paths)

    if verbose or report.failed:
        console.print(create_results_table(report))

    if report.escalation_failed:
        print_error("Privileged operation failed. Some files may not have been removed.")

    print_deletion_summary(report)

    if report.failed:
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
