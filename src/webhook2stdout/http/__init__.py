"""webhook2stdout.http — HTTP side of the receiver.

Provides the HttpRequest context and the SourceInput implementations the
assembler reads through.
"""

from webhook2stdout.http._request import HttpRequest
from webhook2stdout.http._sources import (
    SOURCE_INPUTS,
    BodyInput,
    HeadersInput,
    IpInput,
    MethodInput,
    ParamsInput,
    PathInput,
    QueryInput,
    extract,
    parse_body,
)

__all__ = [
    # Context
    "HttpRequest",
    # SourceInputs
    "BodyInput",
    "HeadersInput",
    "QueryInput",
    "ParamsInput",
    "MethodInput",
    "PathInput",
    "IpInput",
    "SOURCE_INPUTS",
    "extract",
    "parse_body",
]
