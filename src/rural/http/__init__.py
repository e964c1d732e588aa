"""
HTTP transport for rural.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

from rural.http.client import (
    SUPPORTED_METHODS,
    HTTPClient,
    HTTPResponse,
)

__all__ = [
    "SUPPORTED_METHODS",
    "HTTPClient",
    "HTTPResponse",
]
