"""
Exceptions raised by rural.

Every user-facing failure is a RuralError carrying a single-line message
that the CLI prints verbatim.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""


class RuralError(Exception):
    """Base exception for rural errors."""

    prefix = "An error occurred"

    def __init__(self, detail: str):
        self.detail = detail
        self.message = f"{self.prefix}: {detail}"
        super().__init__(self.message)


class ArgumentError(RuralError):
    """Malformed parameter token or invalid combination of options."""

    prefix = "An invalid argument was provided"


class InvalidHeaderError(ArgumentError):
    """Header name or value that cannot be sent on the wire."""

    prefix = "An invalid header was specified"


class UrlParseError(RuralError):
    """The request URL could not be parsed."""

    prefix = "An error occurred while parsing the URL"


class TransportError(RuralError):
    """Connection, DNS, TLS or timeout failure from the HTTP stack."""

    prefix = "An error occurred while making an HTTP request"


class BodyEncodingError(RuralError):
    """A JSON parameter value is not valid JSON."""

    prefix = "An error occurred while parsing a JSON argument"


class OutputError(RuralError):
    """The response body could not be written to the output file."""

    prefix = "An I/O error occurred"


class InternalError(Exception):
    """Contract violation between the CLI and the core. Never caught."""
