"""Mapping rules: where each request source lands in the output document.

A rule is either Keyed (nest the value under a name) or Root (splice the
value into the top level). The config shape ``{from, to, root}`` allows the
invalid "both" and "neither" states; the variant types do not.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class Source(StrEnum):
    """Request sources a mapping rule can read from."""

    BODY = "body"
    HEADERS = "headers"
    QUERY = "query"
    PARAMS = "params"
    METHOD = "method"
    PATH = "path"
    IP = "ip"


@dataclass(frozen=True, slots=True)
class Keyed:
    """Assign the source value to ``document[to]``.

    A later Keyed rule with the same ``to`` overwrites the earlier value.
    """

    source: Source
    to: str

    def __str__(self) -> str:
        return f"{self.source} -> {self.to}"


@dataclass(frozen=True, slots=True)
class Root:
    """Merge an object source into the document root.

    A non-object source becomes the whole document (a scalar root).
    """

    source: Source

    def __str__(self) -> str:
        return f"{self.source} as root"


# Keyed XOR Root, never both.
type MappingRule = Keyed | Root


DEFAULT_MAPPINGS: tuple[MappingRule, ...] = tuple(Keyed(s, s.value) for s in Source)


# ═══════════════════════════════════════════════════════════════════════════════
# Error types
# ═══════════════════════════════════════════════════════════════════════════════


class MappingError(Exception):
    """A mapping rule could not be applied to a request.

    ``index`` and ``rule`` locate the offending rule once the assembler
    has attached them; a bare extraction error carries neither.
    """

    def __init__(
        self,
        reason: str,
        *,
        index: int | None = None,
        rule: MappingRule | None = None,
    ) -> None:
        self.reason = reason
        self.index = index
        self.rule = rule
        if index is None:
            super().__init__(reason)
        else:
            super().__init__(f"mappings[{index}] ({rule}): {reason}")


class UnsupportedSourceError(MappingError):
    """A source name outside the Source enumeration was requested."""

    def __init__(
        self,
        source: object,
        *,
        index: int | None = None,
        rule: MappingRule | None = None,
    ) -> None:
        self.source = source
        super().__init__(f"unsupported source {source!r}", index=index, rule=rule)


class RootCollisionError(MappingError):
    """An object root merge would overwrite a key already in the document."""

    def __init__(self, key: str, *, index: int, rule: MappingRule) -> None:
        self.key = key
        super().__init__(f"root key collision on {key!r}", index=index, rule=rule)


class MixedRootError(MappingError):
    """A scalar root was combined with keyed fields or another root."""
