"""
Response rendering for the terminal.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

import io
import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from rich.console import Console, RenderableType
from rich.syntax import Syntax
from rich.text import Text

from rural.errors import ArgumentError, OutputError
from rural.http.client import HTTPResponse

logger = logging.getLogger(__name__)


VERSION_STYLE = "blue"
HEADER_NAME_STYLE = "cyan"
HEADER_VALUE_STYLE = "white"
JSON_THEME = "monokai"


@dataclass
class RenderOptions:
    """What to print and how."""
    show_headers: bool = False
    show_both: bool = False
    suppress_status_line: bool = False
    colorize: bool = True
    output_file: str | Path | None = None

    def __post_init__(self):
        if self.show_headers and self.show_both:
            raise ArgumentError("--headers and --both cannot be used together")


def render(response: HTTPResponse, options: RenderOptions) -> str:
    """Render a response to a string.

    HEAD responses, --headers and --both get a status line and the response
    headers. The body is included unless only headers were asked for; with
    an output file it is written there instead.
    """
    show_head = response.method == "HEAD" or options.show_headers or options.show_both

    lines: list[Text] = []
    if show_head and not options.suppress_status_line:
        lines.append(status_line(response))
    if show_head:
        lines.extend(header_line(name, value) for name, value in response.headers)

    sections = []
    if lines:
        head = Text("\n").join(lines)
        sections.append(_to_ansi(head) if options.colorize else head.plain)

    if not options.show_headers:
        body = render_body(response, options)
        if body:
            sections.append(body)

    return "\n\n".join(sections)


def status_line(response: HTTPResponse) -> Text:
    """Protocol version and status, e.g. "HTTP/1.1 200 OK"."""
    if response.is_success:
        status_color = "green"
    elif response.is_redirect:
        status_color = "yellow"
    elif response.is_client_error:
        status_color = "red"
    else:
        status_color = "red bold"

    status = f"{response.status_code} {response.reason}".rstrip()
    return Text.assemble((response.http_version, VERSION_STYLE), " ", (status, status_color))


def header_line(name: str, value: str) -> Text:
    return Text.assemble((name, HEADER_NAME_STYLE), ": ", (value, HEADER_VALUE_STYLE))


def render_body(response: HTTPResponse, options: RenderOptions) -> str | None:
    """Body text, or None when it went to the output file."""
    if options.output_file:
        write_body(response.body_bytes, options.output_file)
        return None

    if not options.colorize:
        return response.text

    try:
        data = json.loads(response.text)
    except ValueError:
        return response.text

    syntax = Syntax(format_json(data), "json", theme=JSON_THEME, background_color="default")
    return _to_ansi(syntax)


def write_body(body: bytes, path: str | Path) -> None:
    """Write raw body bytes, truncating any existing file."""
    try:
        Path(path).write_bytes(body)
    except OSError as e:
        raise OutputError(f"{path}: {e.strerror or e}") from e
    logger.info(f"Response saved to {path} ({len(body):,} bytes)")


def format_json(data: Any, indent: int = 2) -> str:
    """Format JSON data for display."""
    return json.dumps(data, indent=indent, ensure_ascii=False, default=str)


def _to_ansi(renderable: RenderableType) -> str:
    console = Console(
        file=io.StringIO(),
        force_terminal=True,
        color_system="256",
        highlight=False,
        soft_wrap=True,
    )
    with console.capture() as capture:
        console.print(renderable)
    return capture.get().rstrip("\n")
