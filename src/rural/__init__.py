"""
rural - a command-line HTTP client

Sends one request built from loosely-typed parameter tokens routed to the
query string, the JSON or form body, or the request headers, and renders
the response for the terminal.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

__version__ = "0.1.0"
__author__ = "DNS Science.io"
__copyright__ = "Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company"
