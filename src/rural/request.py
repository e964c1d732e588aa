"""
Request accumulation.

RequestBuilder folds parameter tokens into a URL, a header mapping and a
body mapping, then snapshots them into an immutable RequestDescriptor.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

import json
import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Iterable, Mapping
from urllib.parse import urlencode, urlsplit, urlunsplit

import httpx

from rural.errors import UrlParseError
from rural.params import ParamKind, TokenClassifier, classify

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RequestDescriptor:
    """Fully resolved request, consumed once by the dispatcher."""
    url: str
    headers: Mapping[str, str] = field(default_factory=dict)
    body: Mapping[str, Any] = field(default_factory=dict)
    json_fields: frozenset[str] = frozenset()
    form: bool = False

    def json_content(self) -> str:
        """Body encoded as a JSON object."""
        return json.dumps(dict(self.body))

    def form_content(self) -> str:
        """Body encoded as application/x-www-form-urlencoded.

        JSON-typed fields are sent as their JSON text, string fields verbatim.
        """
        pairs = []
        for key, value in self.body.items():
            if key in self.json_fields:
                value = json.dumps(value)
            pairs.append((key, value))
        return urlencode(pairs)


class RequestBuilder:
    """Accumulates parameter tokens for a single request.

    Usage:
        builder = RequestBuilder("https://httpbin.org/post")
        builder.add_params(["name=john", "tags:=[1, 2]", "page==2"])
        descriptor = builder.build()
    """

    def __init__(self, url: str, form: bool = False, classifier: TokenClassifier | None = None):
        self._base_url = url
        self._parts = _parse_url(url)
        self.form = form
        self._classify = classifier.classify if classifier else classify
        self._query_pairs: list[tuple[str, str]] = []
        self._headers: dict[str, str] = {}
        self._body: dict[str, Any] = {}
        self._json_fields: set[str] = set()

    @property
    def url(self) -> str:
        """Current URL with query pairs appended in token order."""
        if not self._query_pairs:
            return self._base_url

        added = urlencode(self._query_pairs)
        query = f"{self._parts.query}&{added}" if self._parts.query else added
        return urlunsplit(self._parts._replace(query=query))

    def add_param(self, token: str) -> "RequestBuilder":
        """Classify a token and merge it into the request."""
        param = self._classify(token)
        logger.debug(f"Parameter {token!r} classified as {param.kind.value}")

        if param.kind is ParamKind.QUERY:
            self._query_pairs.append((param.key, param.value))
        elif param.kind is ParamKind.HEADER:
            # Surrounding whitespace is dropped so "Accept: text/html" works
            self._headers[param.key.strip()] = param.value.strip()
        elif param.kind is ParamKind.JSON:
            self._body[param.key] = param.decoded()
            self._json_fields.add(param.key)
        else:
            self._body[param.key] = param.value
            self._json_fields.discard(param.key)

        return self

    def add_params(self, tokens: Iterable[str]) -> "RequestBuilder":
        """Add tokens in order, stopping at the first invalid one."""
        for token in tokens:
            self.add_param(token)
        return self

    def build(self) -> RequestDescriptor:
        """Snapshot the accumulated state. Does not alter the builder."""
        return RequestDescriptor(
            url=self.url,
            headers=MappingProxyType(dict(self._headers)),
            body=MappingProxyType(dict(self._body)),
            json_fields=frozenset(self._json_fields),
            form=self.form,
        )

    finalize = build


def _parse_url(url: str):
    """Split and validate an absolute http(s) URL."""
    try:
        parts = urlsplit(url)
        parts.port  # raises ValueError on a bad port
        httpx.URL(url)
    except (ValueError, httpx.InvalidURL) as e:
        raise UrlParseError(f"{url}: {e}") from e

    if parts.scheme.lower() not in ("http", "https"):
        raise UrlParseError(f"{url}: expected an http or https URL")
    if not parts.hostname:
        raise UrlParseError(f"{url}: missing host")

    return parts
