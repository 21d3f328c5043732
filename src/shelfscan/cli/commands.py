"""CLI commands for shelfscan.

This module implements the user-facing commands:
- ``scan <folder> [movie|tv]``: check a library and print the naming report.
- ``version``: print the application version.

Design:
- Typer declares the arguments; Rich prints everything.
- Settings resolve CLI > environment > config file > default through
  :func:`shelfscan.utils.config.resolve_setting`.
- Naming violations never fail a run. Only argument errors and filesystem
  errors end with ExitCode.ERROR.
"""

import json
import os
import sys
from enum import Enum
from pathlib import Path
from typing import Annotated, List, Optional

import click
import typer
from rich.console import Console
from rich.markup import escape
from rich.traceback import install as install_traceback

from shelfscan.__about__ import __version__
from shelfscan.cli.console import ConsoleManager
from shelfscan.cli.renderer import format_header, render_report
from shelfscan.core.checker import check_library
from shelfscan.core.scanner import ScanOptions
from shelfscan.models.core import MediaType
from shelfscan.rules.base import VerifierConfig
from shelfscan.rules.tables import DEFAULT_EXCLUDED_FOLDERS, DEFAULT_SCAN_EXTENSIONS
from shelfscan.utils.config import resolve_setting
from shelfscan.utils.debug import debug, setup_logger
from shelfscan.utils.json import DateTimeEncoder

# Install rich traceback handler
install_traceback(show_locals=True)

app = typer.Typer(
    name="shelfscan",
    help="Scans a media library for Plex naming compliance.",
    add_completion=False,
)


class ExitCode(int, Enum):
    """Exit codes for CLI commands."""

    SUCCESS = 0
    ERROR = -1


# First two letters of the media-type argument -> media type.
MEDIA_TYPE_ALIASES = {
    "mo": MediaType.MOVIE,  # movie(s)
    "fi": MediaType.MOVIE,  # film(s)
    "tv": MediaType.TV,  # tv
    "sh": MediaType.TV,  # show(s)
    "te": MediaType.TV,  # television
}


def parse_media_type(value: str) -> MediaType:
    """Normalize a media-type argument such as ``Movies`` or ``shows``.

    Args:
        value: The raw argument.

    Returns:
        The matching MediaType.

    Raises:
        typer.BadParameter: If the value is not a known media type.
    """
    key = value.strip().lower()[:2]
    try:
        return MEDIA_TYPE_ALIASES[key]
    except KeyError:
        raise typer.BadParameter(
            f"Unknown media type override '{value}'. Use 'movie' or 'tv'."
        ) from None


FOLDER = Annotated[
    Optional[Path],
    typer.Argument(help="Folder of content to scan", show_default=False),
]

MEDIA_TYPE = Annotated[
    Optional[str],
    typer.Argument(
        metavar="[movie|tv]",
        help="(Optional) Override auto-detection to content type.",
        show_default=False,
    ),
]

JSON_OUTPUT = Annotated[
    bool,
    typer.Option(
        "--json",
        help="Output the report as JSON",
    ),
]

ALL_DIAGNOSTICS = Annotated[
    Optional[bool],
    typer.Option(
        "--all-diagnostics/--first-diagnostic",
        help="Report every failing check per file instead of the first one",
        show_default=False,
    ),
]

EMBEDDED_TAGS = Annotated[
    Optional[bool],
    typer.Option(
        "--embedded-tags/--strip-tags",
        help=(
            "Require {imdb-}/{tmdb-} and {edition-} tags in their Plex position, "
            "or strip all tags before matching"
        ),
        show_default=False,
    ),
]

EXTENSIONS = Annotated[
    Optional[List[str]],
    typer.Option(
        "--extension",
        "-e",
        help="Media file extension to scan for (repeatable)",
        show_default=False,
    ),
]

EXCLUDE = Annotated[
    Optional[List[str]],
    typer.Option(
        "--exclude",
        help="Folder name to skip with everything below it (repeatable)",
        show_default=False,
    ),
]


@app.callback()
def callback(
    no_rich: bool = typer.Option(
        False,
        "--no-rich",
        help=(
            "Disable Rich coloured output. "
            "Can also be set with the SHELFSCAN_NO_RICH environment variable."
        ),
    ),
) -> None:
    """Scans a media library for Plex naming compliance."""
    setup_logger()
    if no_rich:
        os.environ["SHELFSCAN_NO_RICH"] = "1"


def _fail(console: Console, message: str) -> typer.Exit:
    console.print(f"[red]Error: {escape(message)}[/red]", highlight=False, soft_wrap=True)
    return typer.Exit(ExitCode.ERROR)


# Extra positionals are collected so they can be reported as our own argument error.
@app.command(context_settings={"allow_extra_args": True})
def scan(  # noqa: PLR0913
    ctx: typer.Context,
    folder: FOLDER = None,
    media_type: MEDIA_TYPE = None,
    json_output: JSON_OUTPUT = False,
    all_diagnostics: ALL_DIAGNOSTICS = None,
    embedded_tags: EMBEDDED_TAGS = None,
    extension: EXTENSIONS = None,
    exclude: EXCLUDE = None,
) -> None:
    """Scan a media library and report files that break Plex naming rules."""
    with ConsoleManager() as console:
        if folder is None:
            raise _fail(console, "Folder argument is required.")
        if ctx.args:
            raise _fail(console, "Too many arguments.")

        requested_type: Optional[MediaType] = None
        if media_type:
            try:
                requested_type = parse_media_type(media_type)
            except typer.BadParameter as e:
                raise _fail(console, str(e))

        if not folder.is_dir():
            raise _fail(console, f"Folder '{folder}' does not exist.")

        scan_options = ScanOptions(
            extensions=set(
                resolve_setting(
                    "scan.extensions",
                    default=list(DEFAULT_SCAN_EXTENSIONS),
                    cli_value=list(extension) if extension else None,
                )
            ),
            excluded_folders=set(
                resolve_setting(
                    "scan.excluded_folders",
                    default=list(DEFAULT_EXCLUDED_FOLDERS),
                    cli_value=list(exclude) if exclude else None,
                )
            ),
        )
        config = VerifierConfig(
            embedded_tags=resolve_setting(
                "movie.embedded_tags", default=True, cli_value=embedded_tags
            ),
            collect_all=resolve_setting(
                "report.all_diagnostics", default=False, cli_value=all_diagnostics
            ),
        )
        debug(f"Scan options: {scan_options}, verifier config: {config}")

        if not json_output:
            console.print(format_header(), highlight=False)
            console.print()
            console.print(
                f"Searching for content in {folder}...",
                markup=False,
                highlight=False,
                soft_wrap=True,
            )

        try:
            report = check_library(
                folder,
                requested_type,
                scan_options=scan_options,
                config=config,
            )
        except OSError as e:
            raise _fail(console, f"Scanning failed: {e}")

        if json_output:
            json_str = json.dumps(report.model_dump(), cls=DateTimeEncoder, indent=2)
            sys.stdout.write(json_str + "\n")
            return

        if report.total == 0:
            console.print("[yellow]No media files found.[/yellow]")
        console.print()
        render_report(report, console=console)


@app.command()
def version() -> None:
    """Show the version of shelfscan."""
    with ConsoleManager() as console:
        console.print(f"ShelfScan version: [bold]{__version__}[/bold]")


def main(args: Optional[List[str]] = None) -> None:
    """Main entry point for the CLI.

    Click reports usage errors (unknown options, bad values) with exit code 2;
    they are argument errors here and end with ExitCode.ERROR like the rest.
    """
    try:
        result = app(args=args, prog_name="shelfscan", standalone_mode=False)
    except click.exceptions.UsageError as e:
        with ConsoleManager() as console:
            if e.ctx is not None:
                console.print(e.ctx.get_usage(), markup=False, highlight=False)
            raise SystemExit(_fail(console, e.format_message()).exit_code) from None
    except click.exceptions.Abort:
        sys.stderr.write("Aborted!\n")
        raise SystemExit(1) from None
    # Without standalone mode click returns the code of typer.Exit instead of exiting.
    raise SystemExit(result if isinstance(result, int) else ExitCode.SUCCESS)


if __name__ == "__main__":
    main()
