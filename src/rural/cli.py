"""
rural command-line interface.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

import logging

import click
from rich.console import Console
from rich.markup import escape

from rural import __version__
from rural.config import get_config
from rural.errors import RuralError
from rural.http.client import SUPPORTED_METHODS, HTTPClient
from rural.logging_config import configure_logging
from rural.render import RenderOptions, render
from rural.request import RequestBuilder

logger = logging.getLogger(__name__)


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.argument("method", type=click.Choice(SUPPORTED_METHODS, case_sensitive=False))
@click.argument("url")
@click.argument("params", nargs=-1)
@click.option("-d", "--headers", "show_headers", is_flag=True,
              help="Print response headers instead of body")
@click.option("-b", "--both", "show_both", is_flag=True,
              help="Print both response headers and body")
@click.option("-s", "--suppress-info", is_flag=True,
              help="Suppress the status line (requires --headers or --both)")
@click.option("-f", "--form", is_flag=True, help="Send body parameters as a form instead of JSON")
@click.option("-o", "--out", type=click.Path(dir_okay=False, writable=True),
              help="Save response body to file")
@click.option("-n", "--no-color", is_flag=True, help="Disable colored output")
@click.option("-t", "--timeout", type=float, help="Request timeout in seconds")
@click.option("-k", "--insecure", is_flag=True, help="Disable SSL verification")
@click.option("-v", "--verbose", is_flag=True, help="Log request details to stderr")
@click.option("--log-file", type=click.Path(dir_okay=False), help="Also write debug logs to a file")
@click.version_option(__version__, prog_name="rural")
def main(method: str, url: str, params: tuple, show_headers: bool, show_both: bool,
         suppress_info: bool, form: bool, out: str | None, no_color: bool,
         timeout: float | None, insecure: bool, verbose: bool, log_file: str | None):
    """Send an HTTP request and print the response.

    PARAMS route to different parts of the request by their separator:

    \b
        key==value   query-string parameter
        key=value    body field (string)
        key:=value   body field (raw JSON)
        key:value    header

    \b
    Examples:
        rural get https://httpbin.org/get page==2
        rural post https://httpbin.org/post name=john tags:='["a", "b"]'
        rural post https://httpbin.org/post name=john --form
        rural get https://httpbin.org/headers X-API-Key:abc123 --both
    """
    err_console = Console(stderr=True, soft_wrap=True)

    if show_headers and show_both:
        raise click.UsageError("--headers and --both cannot be used together")
    if suppress_info and not (show_headers or show_both):
        raise click.UsageError("--suppress-info requires --headers or --both")

    try:
        config = get_config()
    except RuralError as e:
        err_console.print(f"[red]Error:[/red] {escape(e.message)}")
        raise SystemExit(1)

    configure_logging(verbose=verbose, level=config.log_level, log_file=log_file)

    colorize = config.color and not no_color and _supports_color()

    try:
        builder = RequestBuilder(url, form=form)
        builder.add_params(params)
        descriptor = builder.build()

        client = HTTPClient(
            timeout=timeout if timeout is not None else config.timeout,
            verify_ssl=config.verify_ssl and not insecure,
            user_agent=config.user_agent,
        )
        try:
            response = client.send(method, descriptor)
        finally:
            client.close()

        output = render(response, RenderOptions(
            show_headers=show_headers,
            show_both=show_both,
            suppress_status_line=suppress_info,
            colorize=colorize,
            output_file=out,
        ))
    except RuralError as e:
        logger.debug(f"{type(e).__name__}: {e.message}")
        err_console.print(f"[red]Error:[/red] {escape(e.message)}")
        raise SystemExit(1)

    if output:
        click.echo(output)


def _supports_color() -> bool:
    """ANSI output only on a real terminal that understands it."""
    console = Console()
    return console.is_terminal and not console.legacy_windows
