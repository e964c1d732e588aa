"""
Parameter token classification.

A parameter token is routed by its separator:

    key:=value   JSON-typed body field
    key==value   query-string pair
    key:value    header
    key=value    body field (string)

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

import json
import re
from dataclasses import dataclass
from enum import Enum
from typing import Any

from rural.errors import ArgumentError, BodyEncodingError


class ParamKind(Enum):
    """Destination of a parameter token."""
    JSON = "json"
    QUERY = "query"
    HEADER = "header"
    BODY = "body"


@dataclass(frozen=True)
class Param:
    """A classified parameter token."""
    kind: ParamKind
    key: str
    value: str
    token: str

    def decoded(self) -> Any:
        """Value to store: parsed JSON for JSON fields, else the raw string."""
        if self.kind is not ParamKind.JSON:
            return self.value
        try:
            return json.loads(self.value)
        except json.JSONDecodeError as e:
            raise BodyEncodingError(f"{self.token}: {e}") from e


# Keys never contain a separator character; longer separators are tried first.
GRAMMARS: tuple[tuple[ParamKind, str], ...] = (
    (ParamKind.JSON, r"([^:=]+):=(.+)"),
    (ParamKind.QUERY, r"([^:=]*)==(.+)"),
    (ParamKind.HEADER, r"([^:=]*):(.+)"),
    (ParamKind.BODY, r"([^:=]+)=(.+)"),
)


class TokenClassifier:
    """Classifies tokens against the precompiled separator grammars."""

    def __init__(self, grammars: tuple[tuple[ParamKind, str], ...] = GRAMMARS):
        self._patterns = tuple(
            (kind, re.compile(pattern, re.DOTALL)) for kind, pattern in grammars
        )

    def classify(self, token: str) -> Param:
        """Classify a token. The first matching grammar wins."""
        for kind, pattern in self._patterns:
            match = pattern.fullmatch(token)
            if match:
                return Param(kind=kind, key=match.group(1), value=match.group(2), token=token)
        raise ArgumentError(token)


_default_classifier = TokenClassifier()


def classify(token: str) -> Param:
    """Classify a token with the shared default classifier."""
    return _default_classifier.classify(token)
