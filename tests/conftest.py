from typing import Callable, Generator

import pytest
from click.testing import CliRunner

from rural.config import set_config
from rural.http.client import HTTPClient, HTTPResponse


@pytest.fixture
def runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Clean environment variables and cached config before each test."""
    for name in (
        "NO_COLOR", "FORCE_COLOR", "TTY_COMPATIBLE",
        "RURAL_NO_COLOR", "RURAL_TIMEOUT", "RURAL_VERIFY_SSL", "RURAL_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
    set_config(None)
    yield
    set_config(None)


@pytest.fixture
def client() -> Generator[HTTPClient, None, None]:
    """Provide an HTTP client that is closed after the test."""
    http_client = HTTPClient()
    yield http_client
    http_client.close()


@pytest.fixture
def make_response() -> Callable[..., HTTPResponse]:
    """Build HTTPResponse objects without touching the network."""

    def _make(
        body: str = "",
        method: str = "GET",
        status_code: int = 200,
        reason: str = "OK",
        headers: list[tuple[str, str]] | None = None,
    ) -> HTTPResponse:
        return HTTPResponse(
            method=method,
            url="http://example.com/",
            http_version="HTTP/1.1",
            status_code=status_code,
            reason=reason,
            headers=headers if headers is not None else [("content-type", "text/plain")],
            body_bytes=body.encode("utf-8"),
            text=body,
        )

    return _make
