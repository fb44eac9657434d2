"""Document assembly — mapping rules + request -> output document.

Rules are evaluated in declared order against one request:
- Keyed rules assign ``document[to]``; a repeated ``to`` is last-write-wins
- Object roots merge their keys into the top level; a key already present
  is a RootCollisionError
- A non-object root is the whole document (scalar root); it cannot share
  the document with keyed fields, object roots or another scalar root

INV: all state is request-local; the rule sequence is only read.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from webhook2stdout._mapping import (
    Keyed,
    MixedRootError,
    Root,
    RootCollisionError,
    UnsupportedSourceError,
)
from webhook2stdout.http._sources import extract

if TYPE_CHECKING:
    from collections.abc import Sequence

    from webhook2stdout._mapping import MappingRule
    from webhook2stdout._types import JsonObject, JsonValue
    from webhook2stdout.http._request import HttpRequest


def assemble(ctx: HttpRequest, rules: Sequence[MappingRule]) -> JsonValue:
    """Build the output document for one request.

    Fails fast on the first rule that cannot be applied.

    Raises:
        UnsupportedSourceError: A rule names a source outside Source.
        RootCollisionError: An object root repeats a key already present.
        MixedRootError: A scalar root meets any other document content.
    """
    output: JsonObject = {}
    # null is a legal scalar root, so "set" is tracked separately.
    scalar_root: JsonValue = None
    has_scalar_root = False

    for index, rule in enumerate(rules):
        try:
            value = extract(ctx, rule.source)
        except UnsupportedSourceError as exc:
            raise UnsupportedSourceError(exc.source, index=index, rule=rule) from None

        match rule:
            case Root():
                if has_scalar_root:
                    msg = "a scalar root is already set; no other root may follow"
                    raise MixedRootError(msg, index=index, rule=rule)
                if isinstance(value, dict):
                    _merge_root(output, value, index, rule)
                    continue
                if output:
                    msg = "a non-object root cannot be combined with other fields"
                    raise MixedRootError(msg, index=index, rule=rule)
                scalar_root = value
                has_scalar_root = True
            case Keyed(to=to):
                if has_scalar_root:
                    msg = f"cannot set {to!r} alongside a scalar root"
                    raise MixedRootError(msg, index=index, rule=rule)
                output[to] = value

    return scalar_root if has_scalar_root else output


def _merge_root(output: JsonObject, value: JsonObject, index: int, rule: MappingRule) -> None:
    for key, item in value.items():
        if key in output:
            raise RootCollisionError(key, index=index, rule=rule)
        output[key] = item
