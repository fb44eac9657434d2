"""Core protocols and type aliases for webhook2stdout.

- JsonValue is the dynamically-shaped value every source produces
- SourceInput is the extraction port, one implementation per Source
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from webhook2stdout.http._request import HttpRequest

# Python's union stands in for a JSON sum type. A dict is the only shape
# that can be merged into the document root; everything else is a scalar.
type JsonValue = dict[str, JsonValue] | list[JsonValue] | str | int | float | bool | None

type JsonObject = dict[str, JsonValue]


@runtime_checkable
class SourceInput(Protocol):
    """Extract one value from an HttpRequest.

    Implementations must return freshly built containers so that values
    are never shared between requests or between rules of one request.
    """

    def get(self, ctx: HttpRequest, /) -> JsonValue: ...
