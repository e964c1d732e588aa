"""
HTTP client that dispatches a RequestDescriptor.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

import logging
import re
import time
from dataclasses import dataclass, field

import httpx

from rural.errors import InternalError, InvalidHeaderError, TransportError
from rural.request import RequestDescriptor

logger = logging.getLogger(__name__)


SUPPORTED_METHODS = ("GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS")

# Methods that carry no body unless parameters put one there
BODYLESS_METHODS = frozenset({"GET", "HEAD", "OPTIONS", "DELETE"})

JSON_CONTENT_TYPE = "application/json"
FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"

HEADER_NAME = re.compile(r"[!#$%&'*+\-.^_`|~0-9A-Za-z]+")


@dataclass
class HTTPResponse:
    """HTTP response details."""
    method: str
    url: str
    http_version: str
    status_code: int
    reason: str
    headers: list[tuple[str, str]] = field(default_factory=list)
    body_bytes: bytes = b""
    text: str = ""
    elapsed_ms: float = 0.0

    @property
    def content_type(self) -> str | None:
        for name, value in self.headers:
            if name.lower() == "content-type":
                return value
        return None

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code < 300

    @property
    def is_redirect(self) -> bool:
        return 300 <= self.status_code < 400

    @property
    def is_client_error(self) -> bool:
        return 400 <= self.status_code < 500

    @property
    def is_server_error(self) -> bool:
        return 500 <= self.status_code < 600

    @property
    def is_json(self) -> bool:
        ct = self.content_type or ""
        return "json" in ct.lower()

    @classmethod
    def from_httpx(cls, response: httpx.Response, elapsed_ms: float = 0.0) -> "HTTPResponse":
        """Build from a fully read httpx response. Header names keep their wire case."""
        encoding = response.headers.encoding
        return cls(
            method=response.request.method,
            url=str(response.request.url),
            http_version=response.http_version,
            status_code=response.status_code,
            reason=response.reason_phrase,
            headers=[
                (name.decode(encoding), value.decode(encoding))
                for name, value in response.headers.raw
            ],
            body_bytes=response.content,
            text=response.text,
            elapsed_ms=elapsed_ms,
        )


class HTTPClient:
    """Sends one request per descriptor. No retries, no redirects."""

    def __init__(
        self,
        timeout: float | None = None,
        verify_ssl: bool = True,
        user_agent: str | None = None,
    ):
        self.timeout = timeout
        self.verify_ssl = verify_ssl
        self.user_agent = user_agent
        self._client: httpx.Client | None = None

    def _get_client(self) -> httpx.Client:
        """Get or create HTTP client."""
        if self._client is None or self._client.is_closed:
            headers = {"User-Agent": self.user_agent} if self.user_agent else None
            self._client = httpx.Client(
                timeout=httpx.Timeout(self.timeout),
                verify=self.verify_ssl,
                follow_redirects=False,
                headers=headers,
            )
        return self._client

    def close(self) -> None:
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            self._client.close()

    def __enter__(self) -> "HTTPClient":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def send(
        self,
        method: str,
        descriptor: RequestDescriptor,
        form: bool | None = None,
    ) -> HTTPResponse:
        """Send the request described by descriptor and read the response.

        Args:
            method: HTTP method, case-insensitive, one of SUPPORTED_METHODS
            descriptor: Request built by RequestBuilder
            form: Encode the body as a form; defaults to descriptor.form

        Raises:
            InvalidHeaderError: A header cannot be put on the wire
            TransportError: The request failed at the network level
            InternalError: The method is not supported
        """
        method = method.upper()
        if method not in SUPPORTED_METHODS:
            logger.critical(f"Unsupported HTTP method reached the dispatcher: {method!r}")
            raise InternalError(f"Unsupported HTTP method: {method!r}")

        if form is None:
            form = descriptor.form

        headers = dict(descriptor.headers)
        _check_headers(headers)

        content = None
        if descriptor.body or method not in BODYLESS_METHODS:
            if form:
                content = descriptor.form_content()
                content_type = FORM_CONTENT_TYPE
            else:
                content = descriptor.json_content()
                content_type = JSON_CONTENT_TYPE
            if not any(name.lower() == "content-type" for name in headers):
                headers["Content-Type"] = content_type

        logger.debug(f"{method} {descriptor.url}")
        for name, value in headers.items():
            logger.debug(f"  {name}: {value}")

        client = self._get_client()
        start_time = time.time()
        try:
            response = client.request(
                method=method,
                url=descriptor.url,
                headers=headers,
                content=content,
            )
        except httpx.HTTPError as e:
            logger.error(f"{method} {descriptor.url} failed: {e}")
            raise TransportError(str(e) or type(e).__name__) from e

        elapsed_ms = (time.time() - start_time) * 1000
        logger.debug(f"{response.status_code} {response.reason_phrase} ({elapsed_ms:.0f}ms)")

        return HTTPResponse.from_httpx(response, elapsed_ms)


def _check_headers(headers: dict[str, str]) -> None:
    for name, value in headers.items():
        if not HEADER_NAME.fullmatch(name):
            raise InvalidHeaderError(f"{name!r} is not a valid header name")
        if "\r" in value or "\n" in value:
            raise InvalidHeaderError(f"value of {name!r} contains a line break")
        try:
            value.encode("ascii")
        except UnicodeEncodeError:
            raise InvalidHeaderError(f"value of {name!r} is not ASCII") from None
