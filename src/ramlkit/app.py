"""Typer application and CLI entry point for ramlkit.

Three commands operate on one RAML document each:

* ``validate`` -- build and expand the document, report success.
* ``document`` -- render the document as Markdown.
* ``resources`` -- list every resource path with its methods.

The :func:`main` function is the console-script entry point declared in
``pyproject.toml``. Every :class:`~ramlkit.exceptions.RamlError` is reported
on stderr and turned into the error's exit code.

See Also:
    :mod:`ramlkit.config`: Parser configuration resolution.
    :mod:`ramlkit.output`: Output formatting initialised in :func:`main_callback`.
"""

from __future__ import annotations

import logging
import signal
import sys
from pathlib import Path
from typing import Any, Optional

import typer

from ramlkit import __version__
from ramlkit.exceptions import RamlError
from ramlkit.exit_codes import EXIT_GENERIC_FAILURE

app = typer.Typer(
    name="ramlkit",
    help="Validate, expand and document RAML 0.8 API definitions.",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich",
)

_log_handler: Optional[logging.Handler] = None


def _version_callback(value: bool) -> None:
    """Print version and exit when --version is passed."""
    if value:
        typer.echo(f"ramlkit {__version__}")
        raise typer.Exit()


def _install_log_handler(handler: logging.Handler, verbose: bool) -> None:
    """Route ``ramlkit.*`` log records through *handler*, replacing any earlier one."""
    global _log_handler
    logger = logging.getLogger("ramlkit")
    if _log_handler is not None:
        logger.removeHandler(_log_handler)
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    _log_handler = handler


@app.callback()
def main_callback(
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    json_output: bool = typer.Option(
        False, "--json", help="JSON output format."
    ),
    plain_output: bool = typer.Option(
        False, "--plain", help="Plain text output."
    ),
    no_color: bool = typer.Option(
        False, "--no-color", help="Disable color output."
    ),
    quiet: bool = typer.Option(
        False, "--quiet", "-q", help="Suppress non-essential output."
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable debug output."
    ),
) -> None:
    """Root callback executed before every sub-command.

    Initialises the global :class:`~ramlkit.output.OutputManager` from
    CLI flags and routes the parser's log records to stderr.
    """
    from ramlkit.output import OutputFormat, OutputManager, set_output

    fmt = OutputFormat.AUTO
    if json_output:
        fmt = OutputFormat.JSON
    elif plain_output:
        fmt = OutputFormat.PLAIN

    output = OutputManager(
        format=fmt,
        no_color=no_color,
        quiet=quiet,
        verbose=verbose,
    )
    set_output(output)
    _install_log_handler(output.logging_handler(), verbose)


def _load(
    source: str,
    base_dir: Optional[Path],
    encoding: Optional[str],
    expand: Optional[bool] = None,
) -> Any:
    """Resolve the parser config and load *source*, exiting on any ramlkit error."""
    from ramlkit.config import resolve_config
    from ramlkit.output import debug, error
    from ramlkit.parser import load_raml

    try:
        config = resolve_config(cli_base_dir=base_dir, cli_encoding=encoding, cli_expand=expand)
        debug(f"Loading {source} (expand={config.expand})")
        return load_raml(source, config)
    except RamlError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None


def _all_resources(resources: list[Any]) -> list[Any]:
    found: list[Any] = []
    for resource in resources:
        found.append(resource)
        found.extend(_all_resources(resource.resources))
    return found


_SOURCE = typer.Argument(..., help="RAML file path, http(s) URL, or '-' for stdin.")
_BASE_DIR = typer.Option(
    None, "--base-dir", "-b", help="Directory relative !include paths resolve against."
)
_ENCODING = typer.Option(None, "--encoding", help="Text encoding of RAML files.")


@app.command("validate")
def validate_command(
    source: str = _SOURCE,
    base_dir: Optional[Path] = _BASE_DIR,
    encoding: Optional[str] = _ENCODING,
) -> None:
    """Check that a RAML document is valid and all its references resolve.

    Example::

        ramlkit validate api.raml
    """
    from ramlkit.output import success

    root = _load(source, base_dir, encoding, expand=True)
    count = len(_all_resources(root.resources))
    success(f"{root.title}: valid RAML ({count} resources)")


@app.command("document")
def document_command(
    source: str = _SOURCE,
    no_expand: bool = typer.Option(
        False, "--no-expand", help="Render traits and resource types unapplied."
    ),
    output_file: Optional[Path] = typer.Option(
        None, "-o", "--output", help="Write the Markdown to this file."
    ),
    base_dir: Optional[Path] = _BASE_DIR,
    encoding: Optional[str] = _ENCODING,
) -> None:
    """Render a RAML document as Markdown.

    Example::

        ramlkit document api.raml -o API.md
    """
    from ramlkit.output import error, print_markdown, success

    root = _load(source, base_dir, encoding, expand=False if no_expand else None)
    text = root.document()

    if output_file is None:
        print_markdown(text)
        return
    try:
        output_file.write_text(text, encoding="utf-8")
    except OSError as exc:
        error(f"Cannot write {output_file}: {exc}")
        raise typer.Exit(code=EXIT_GENERIC_FAILURE) from None
    success(f"Wrote {output_file}")


@app.command("resources")
def resources_command(
    source: str = _SOURCE,
    base_dir: Optional[Path] = _BASE_DIR,
    encoding: Optional[str] = _ENCODING,
) -> None:
    """List every resource path with its HTTP methods.

    Example::

        ramlkit resources api.raml
        ramlkit --json resources api.raml
    """
    from ramlkit.output import get_output, info

    root = _load(source, base_dir, encoding)
    resources = _all_resources(root.resources)
    if not resources:
        info("No resources defined in this document.")
        return

    rows = [
        [
            resource.path,
            ", ".join(verb.upper() for verb in resource.methods),
            resource.display_name or "",
        ]
        for resource in resources
    ]
    get_output().print_table(
        ["Path", "Methods", "Name"], rows, title=f"{root.title} -- Resources ({len(rows)})"
    )


def _setup_signal_handlers() -> None:
    """Install a SIGINT handler so Ctrl-C exits cleanly."""

    def _handler(signum: int, frame: Any) -> None:  # noqa: ANN401
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)

    signal.signal(signal.SIGINT, _handler)


def main() -> None:
    """CLI entry point invoked by the ``ramlkit`` console script.

    Raises:
        SystemExit: Always raised (either by Typer or explicitly).
    """
    _setup_signal_handlers()
    try:
        app()
    except SystemExit:
        raise
    except KeyboardInterrupt:
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)
    except RamlError as exc:
        from ramlkit.output import error

        error(str(exc))
        sys.exit(exc.exit_code)
