"""HttpRequest — Buffered HTTP request context for document mapping.

Holds the raw body, method, path (without query string), headers as
received (repeats kept), query parameters (parsed from the raw path),
the matched route parameters and the client address.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING
from urllib.parse import parse_qsl

if TYPE_CHECKING:
    from starlette.requests import Request


@dataclass(frozen=True, slots=True)
class HttpRequest:
    """HTTP request context for mapping.

    The path should be provided as-is from the wire (may include query string).
    Query parameters are automatically parsed and the path is cleaned.

    Headers are (name, value) pairs in arrival order; a header that was sent
    more than once appears more than once.
    """

    method: str = "GET"
    raw_path: str = "/"
    headers: tuple[tuple[str, str], ...] = ()
    body: bytes = b""
    route_params: dict[str, str] = field(default_factory=dict)
    client: str = ""

    # Computed fields — parsed from raw_path
    _clean_path: str = field(init=False, repr=False)
    _query_pairs: tuple[tuple[str, str], ...] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        if "?" in self.raw_path:
            path, query_string = self.raw_path.split("?", 1)
            pairs = tuple(parse_qsl(query_string, keep_blank_values=True))
            object.__setattr__(self, "_clean_path", path)
            object.__setattr__(self, "_query_pairs", pairs)
        else:
            object.__setattr__(self, "_clean_path", self.raw_path)
            object.__setattr__(self, "_query_pairs", ())

    @property
    def path(self) -> str:
        """Path without query string."""
        return self._clean_path

    @property
    def query_pairs(self) -> tuple[tuple[str, str], ...]:
        """Parsed query parameters, repeats kept, in order."""
        return self._query_pairs

    @classmethod
    async def from_starlette(cls, request: Request) -> HttpRequest:
        """Buffer a Starlette request into an HttpRequest.

        The path is taken undecoded from the ASGI scope so that an escaped
        ``%3F`` is not mistaken for the query separator.
        """
        raw = request.scope.get("raw_path")
        raw_path = raw.split(b"?", 1)[0].decode("latin-1") if raw else request.scope["path"]
        if request.url.query:
            raw_path = f"{raw_path}?{request.url.query}"
        return cls(
            method=request.method,
            raw_path=raw_path,
            headers=tuple(request.headers.items()),
            body=await request.body(),
            route_params={k: str(v) for k, v in request.path_params.items()},
            client=request.client.host if request.client else "",
        )
