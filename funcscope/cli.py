"""
funcscope CLI

Lists the function-like constructs of a TypeScript/JavaScript project
together with their signatures, documentation and the interfaces and type
aliases declared beside them.

Usage:
    $ funcscope ./my-project
    $ funcscope ./my-project --file src/utils.ts --fn parseDate
    $ funcscope --with-sub --lint warn --json
"""

from pathlib import Path
from typing import Optional

import typer

from .exceptions import FuncscopeError
from .extractor import run_extractor
from .logging_config import configure_logging
from .models import ExtractionOptions, LintMode

app = typer.Typer(
    name="funcscope",
    help="Extract functions, signatures and docs from a TypeScript project",
    add_completion=False,
)


@app.command()
def main(
    root: Optional[Path] = typer.Argument(
        None,
        help="Project directory (default: current directory)",
        file_okay=False,
        dir_okay=True,
        resolve_path=True,
    ),
    file: Optional[str] = typer.Option(
        None,
        "--file",
        help="Only analyse files whose path ends with this suffix",
    ),
    fn: Optional[str] = typer.Option(
        None,
        "--fn",
        help="Only report functions with exactly this name",
    ),
    with_sub: bool = typer.Option(
        False,
        "--with-sub",
        help="Also report functions nested inside each function",
    ),
    lint: LintMode = typer.Option(
        LintMode.NONE,
        "--lint",
        help="Attach ESLint diagnostics: none, warn or all",
        case_sensitive=False,
    ),
    as_json: bool = typer.Option(
        False,
        "--json",
        help="Print JSON instead of text",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Log progress to stderr",
    ),
) -> None:
    """
    Print the function inventory of a project.

    The project's tsconfig.json is searched for in ROOT and its parent
    directories; only files under ROOT are reported.
    """
    configure_logging("DEBUG" if verbose else "WARNING")

    options = ExtractionOptions(
        root_directory=root or Path.cwd(),
        file_filter=file,
        name_filter=fn,
        recursive=with_sub,
        lint_mode=lint,
    )

    try:
        report = run_extractor(options, output_format="json" if as_json else "text")
    except FuncscopeError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    typer.echo(report)


if __name__ == "__main__":
    app()
