"""SourceInput implementations for HttpRequest.

Each input extracts one request source from an HttpRequest context and
returns it as a JsonValue for the document assembler.
"""

from __future__ import annotations

import json
import math
from dataclasses import dataclass
from types import MappingProxyType
from typing import TYPE_CHECKING

from webhook2stdout._mapping import Source, UnsupportedSourceError

if TYPE_CHECKING:
    from webhook2stdout._types import JsonObject, JsonValue, SourceInput
    from webhook2stdout.http._request import HttpRequest


def _reject_constant(name: str) -> None:
    msg = f"non-standard JSON constant {name}"
    raise ValueError(msg)


def _parse_float(text: str) -> float:
    value = float(text)
    if math.isinf(value):
        msg = f"number out of range: {text}"
        raise ValueError(msg)
    return value


def parse_body(raw: bytes) -> JsonValue:
    """Decode a request body.

    Total: an empty body is ``{}``, and anything that is not standard JSON
    comes back as the raw text.
    """
    if not raw:
        return {}
    try:
        return json.loads(raw, parse_constant=_reject_constant, parse_float=_parse_float)
    except (ValueError, RecursionError):
        return raw.decode("utf-8", errors="replace")


@dataclass(frozen=True, slots=True)
class BodyInput:
    """Extracts the decoded body (raw text when it is not JSON)."""

    def get(self, ctx: HttpRequest, /) -> JsonValue:
        return parse_body(ctx.body)


@dataclass(frozen=True, slots=True)
class HeadersInput:
    """Extracts every header as name -> list of values."""

    def get(self, ctx: HttpRequest, /) -> JsonValue:
        headers: JsonObject = {}
        for name, value in ctx.headers:
            headers.setdefault(name, []).append(value)  # type: ignore[union-attr]
        return headers


@dataclass(frozen=True, slots=True)
class QueryInput:
    """Extracts query parameters; repeated names collect into a list."""

    def get(self, ctx: HttpRequest, /) -> JsonValue:
        query: JsonObject = {}
        for name, value in ctx.query_pairs:
            match query.get(name):
                case None:
                    query[name] = value
                case list() as values:
                    values.append(value)
                case first:
                    query[name] = [first, value]
        return query


@dataclass(frozen=True, slots=True)
class ParamsInput:
    """Extracts the matched route parameters (empty if the route has none)."""

    def get(self, ctx: HttpRequest, /) -> JsonValue:
        return dict(ctx.route_params)


@dataclass(frozen=True, slots=True)
class MethodInput:
    """Extracts the HTTP method."""

    def get(self, ctx: HttpRequest, /) -> JsonValue:
        return ctx.method


@dataclass(frozen=True, slots=True)
class PathInput:
    """Extracts the request path (without query string)."""

    def get(self, ctx: HttpRequest, /) -> JsonValue:
        return ctx.path


@dataclass(frozen=True, slots=True)
class IpInput:
    """Extracts the client address."""

    def get(self, ctx: HttpRequest, /) -> JsonValue:
        return ctx.client


SOURCE_INPUTS: MappingProxyType[Source, SourceInput] = MappingProxyType({
    Source.BODY: BodyInput(),
    Source.HEADERS: HeadersInput(),
    Source.QUERY: QueryInput(),
    Source.PARAMS: ParamsInput(),
    Source.METHOD: MethodInput(),
    Source.PATH: PathInput(),
    Source.IP: IpInput(),
})


def extract(ctx: HttpRequest, source: Source) -> JsonValue:
    """Extract one source from the request.

    Raises:
        UnsupportedSourceError: If ``source`` is not a known Source.
    """
    try:
        input_ = SOURCE_INPUTS[source]
    except (KeyError, TypeError):
        raise UnsupportedSourceError(source) from None
    return input_.get(ctx)
