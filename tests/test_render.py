"""Tests for response rendering."""

import json
import re
from pathlib import Path

import pytest

from rural.errors import ArgumentError, OutputError
from rural.render import RenderOptions, render

ANSI = re.compile(r"\x1b\[[0-9;]*m")

HEADERS = [("Content-Type", "application/json"), ("X-Request-Id", "42")]


def plain(**kwargs) -> RenderOptions:
    return RenderOptions(colorize=False, **kwargs)


class TestDecisionTable:
    """What goes into the output for each combination of options."""

    def test_body_only_by_default(self, make_response) -> None:
        response = make_response('{"a": 1}', headers=HEADERS)

        assert render(response, plain()) == '{"a": 1}'

    def test_headers_only(self, make_response) -> None:
        response = make_response("body text", headers=HEADERS)

        assert render(response, plain(show_headers=True)) == (
            "HTTP/1.1 200 OK\n"
            "Content-Type: application/json\n"
            "X-Request-Id: 42"
        )

    def test_both(self, make_response) -> None:
        response = make_response("body text", headers=HEADERS)

        assert render(response, plain(show_both=True)) == (
            "HTTP/1.1 200 OK\n"
            "Content-Type: application/json\n"
            "X-Request-Id: 42\n"
            "\n"
            "body text"
        )

    def test_suppress_status_line(self, make_response) -> None:
        response = make_response("body text", headers=HEADERS)

        output = render(response, plain(show_both=True, suppress_status_line=True))

        assert output == "Content-Type: application/json\nX-Request-Id: 42\n\nbody text"

    def test_head_shows_status_and_headers(self, make_response) -> None:
        response = make_response(method="HEAD", headers=HEADERS)

        output = render(response, plain())

        assert output == "HTTP/1.1 200 OK\nContent-Type: application/json\nX-Request-Id: 42"

    def test_head_with_headers_flag(self, make_response) -> None:
        response = make_response(method="HEAD", headers=HEADERS)

        assert render(response, plain(show_headers=True)) == render(response, plain())

    def test_empty_body_has_no_separator(self, make_response) -> None:
        response = make_response("", headers=[("Content-Length", "0")])

        assert render(response, plain(show_both=True)) == "HTTP/1.1 200 OK\nContent-Length: 0"

    def test_duplicate_headers_are_listed(self, make_response) -> None:
        response = make_response(headers=[("Set-Cookie", "a=1"), ("Set-Cookie", "b=2")])

        assert render(response, plain(show_headers=True, suppress_status_line=True)) == (
            "Set-Cookie: a=1\nSet-Cookie: b=2"
        )

    def test_non_json_body_is_verbatim(self, make_response) -> None:
        body = "line one\n\tline two\n"

        assert render(make_response(body), plain()) == body

    def test_headers_and_both_conflict(self) -> None:
        with pytest.raises(ArgumentError):
            RenderOptions(show_headers=True, show_both=True)


class TestColor:
    """ANSI styling."""

    def test_json_body_is_pretty_printed(self, make_response) -> None:
        response = make_response('{"name":"john","tags":["x","y"]}', headers=HEADERS)

        output = render(response, RenderOptions())

        assert ANSI.search(output)
        assert json.loads(ANSI.sub("", output)) == {"name": "john", "tags": ["x", "y"]}
        assert '  "name"' in ANSI.sub("", output)

    def test_invalid_json_falls_back_to_text(self, make_response) -> None:
        response = make_response("{not json", headers=HEADERS)

        assert render(response, RenderOptions()) == "{not json"

    def test_status_and_headers_are_styled(self, make_response) -> None:
        response = make_response("", status_code=500, reason="Internal Server Error", headers=HEADERS)

        output = render(response, RenderOptions(show_headers=True))

        assert ANSI.search(output)
        assert ANSI.sub("", output) == (
            "HTTP/1.1 500 Internal Server Error\n"
            "Content-Type: application/json\n"
            "X-Request-Id: 42"
        )

    def test_markup_in_headers_is_not_interpreted(self, make_response) -> None:
        response = make_response(headers=[("X-Odd", "[bold]x[/bold]")])

        output = render(response, RenderOptions(show_headers=True, suppress_status_line=True))

        assert ANSI.sub("", output) == "X-Odd: [bold]x[/bold]"


class TestOutputFile:
    """Writing the body to a file."""

    def test_body_written_to_file(self, make_response, tmp_path: Path) -> None:
        target = tmp_path / "out.json"
        target.write_text("previous, longer contents")
        response = make_response('{"a": 1}', headers=HEADERS)

        output = render(response, plain(output_file=target))

        assert output == ""
        assert target.read_bytes() == b'{"a": 1}'

    def test_headers_still_printed(self, make_response, tmp_path: Path) -> None:
        target = tmp_path / "out.txt"
        response = make_response("hello", headers=[("X-A", "1")])

        output = render(response, plain(show_both=True, output_file=str(target)))

        assert output == "HTTP/1.1 200 OK\nX-A: 1"
        assert target.read_text() == "hello"

    def test_headers_only_does_not_write(self, make_response, tmp_path: Path) -> None:
        target = tmp_path / "out.txt"

        render(make_response("hello"), plain(show_headers=True, output_file=target))

        assert not target.exists()

    def test_unwritable_path(self, make_response, tmp_path: Path) -> None:
        target = tmp_path / "missing" / "out.txt"

        with pytest.raises(OutputError) as exc_info:
            render(make_response("hello"), plain(output_file=target))

        assert exc_info.value.message.startswith("An I/O error occurred")
