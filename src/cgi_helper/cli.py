"""cgi_helper CLI interface.

Commands:
- selftest: Print a header and a rendered sample template
- render: Render a template file as a CGI response
- doctype: Print a DOCTYPE declaration or list the known identifiers
- init: Write a default configuration file

Global options:
- --config: Path to configuration file
- --verbose: Enable verbose logging on stderr
- --quiet: Errors only
- --version: Show version and exit
"""

from pathlib import Path
from typing import Annotated

import typer
from jinja2 import TemplateSyntaxError

from cgi_helper import __version__
from cgi_helper.config import HelperConfig, create_default_config, load_config
from cgi_helper.doctypes import UnknownDoctypeError, available_doctypes, doctype
from cgi_helper.header import emit_header
from cgi_helper.templates.renderer import TemplateRenderer, render
from cgi_helper.utils.logging import configure_from_cli, get_logger

SELFTEST_TEMPLATE = """\
This will be the HTML that I want to print. Any expression
will be embedded with ERB-style tags (&lt;%= expression %&gt;).
"""

app = typer.Typer(
    name="cgi-helper",
    help="Helpers for CGI scripts: response headers, ERB-style templates, DOCTYPEs",
    add_completion=False,
    no_args_is_help=True,
)

# Global state
_config: HelperConfig | None = None
_logger = get_logger()


def _write(text: str) -> None:
    """Print text, adding a newline only if it lacks one."""
    typer.echo(text, nl=not text.endswith("\n"))


def run_selftest() -> None:
    """Emit a text/html header and the rendered sample template on stdout."""
    emit_header("text/html", "html5")
    _write(render(SELFTEST_TEMPLATE))


def parse_vars(values: list[str] | None) -> dict[str, str]:
    """Parse NAME=VALUE pairs into a context mapping.

    Args:
        values: Raw --var values

    Returns:
        Mapping of names to string values

    Raises:
        typer.BadParameter: If a value has no '=' or an empty name
    """
    context: dict[str, str] = {}
    for item in values or []:
        name, sep, value = item.partition("=")
        name = name.strip()
        if not sep or not name:
            raise typer.BadParameter(f"Expected NAME=VALUE, got: {item}")
        context[name] = value
    return context


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"cgi-helper {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    config: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Path to configuration file",
            exists=True,
            dir_okay=False,
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable verbose logging with timestamps",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Log errors only",
        ),
    ] = False,
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit",
        ),
    ] = False,
) -> None:
    """cgi-helper - conveniences for CGI scripts.

    Logs go to stderr; stdout carries the response.
    """
    global _config

    configure_from_cli(verbose=verbose, quiet=quiet)

    try:
        _config = load_config(config_path=config)
    except FileNotFoundError as e:
        _logger.error(str(e))
        raise typer.Exit(1)
    except Exception as e:
        _logger.error(f"Failed to load config: {e}")
        raise typer.Exit(1)

    configure_from_cli(
        verbose=verbose,
        quiet=quiet,
        mode=_config.logging.mode,
        level=_config.logging.level,
    )
    if _config.config_path:
        _logger.debug(f"Loaded config from: {_config.config_path}")


@app.command()
def selftest() -> None:
    """Print a text/html header followed by a rendered sample template."""
    run_selftest()


@app.command("render")
def render_command(
    template: Annotated[
        Path,
        typer.Argument(
            help="Template file to render",
            exists=True,
            dir_okay=False,
        ),
    ],
    var: Annotated[
        list[str] | None,
        typer.Option(
            "--var",
            help="Template variable as NAME=VALUE (repeatable)",
        ),
    ] = None,
    content_type: Annotated[
        str | None,
        typer.Option(
            "--content-type",
            "-t",
            help="Content type for the header (default from config)",
        ),
    ] = None,
    doctype_key: Annotated[
        str | None,
        typer.Option(
            "--doctype",
            "-d",
            help="Doctype identifier passed to the header (default from config)",
        ),
    ] = None,
    no_header: Annotated[
        bool,
        typer.Option(
            "--no-header",
            help="Only print the rendered body",
        ),
    ] = False,
) -> None:
    """Render a template file and print it as a CGI response.

    Exit codes:
        0: Rendered
        1: Template could not be parsed or evaluated
    """
    config = _config or HelperConfig()
    context = parse_vars(var)
    renderer = TemplateRenderer(config.render)

    try:
        body = renderer.render_file(template, context)
    except TemplateSyntaxError as e:
        _logger.error(f"Template syntax error in {template} (line {e.lineno}): {e.message}")
        raise typer.Exit(1)
    except Exception as e:
        _logger.error(f"Template evaluation failed: {e}")
        raise typer.Exit(1)

    if not no_header:
        emit_header(
            content_type or config.header.content_type,
            doctype_key or config.header.doctype,
        )
    _write(body)


@app.command("doctype")
def doctype_command(
    key: Annotated[
        str | None,
        typer.Argument(help="Doctype identifier (default from config)"),
    ] = None,
    list_keys: Annotated[
        bool,
        typer.Option(
            "--list",
            "-l",
            help="List the known identifiers",
        ),
    ] = False,
) -> None:
    """Print a DOCTYPE declaration.

    Exit codes:
        0: Printed
        1: Unknown identifier
    """
    if list_keys:
        for name in available_doctypes():
            typer.echo(name)
        return

    config = _config or HelperConfig()
    try:
        typer.echo(doctype(key or config.header.doctype))
    except UnknownDoctypeError as e:
        _logger.error(f"{e}. Known: {', '.join(available_doctypes())}")
        raise typer.Exit(1)


@app.command()
def init(
    path: Annotated[
        Path,
        typer.Option(
            "--path",
            "-p",
            help="Where to write the configuration file",
            dir_okay=False,
        ),
    ] = Path("cgi_helper.yaml"),
    force: Annotated[
        bool,
        typer.Option(
            "--force",
            "-f",
            help="Overwrite an existing file",
        ),
    ] = False,
) -> None:
    """Write a default configuration file."""
    if path.exists() and not force:
        _logger.error(f"Config file already exists: {path} (use --force to overwrite)")
        raise typer.Exit(1)

    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(create_default_config(), encoding="utf-8")
    typer.echo(f"Wrote {path}")
