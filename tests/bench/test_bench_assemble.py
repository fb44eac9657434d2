"""Assembly and serialization benchmarks.

Measures the per-request hot path: extracting sources, merging roots and
encoding the document.

Run: uv run pytest tests/bench/test_bench_assemble.py --benchmark-only
"""

from __future__ import annotations

import json

from webhook2stdout import DEFAULT_MAPPINGS, Keyed, Root, Source, assemble, serialize
from webhook2stdout.http import HttpRequest

# ── Test fixtures ────────────────────────────────────────────────────────────

BODY = json.dumps({f"field_{i}": {"value": i, "tags": ["a", "b"]} for i in range(50)}).encode()

REQUEST = HttpRequest(
    method="POST",
    raw_path="/hooks/github?delivery=abc&attempt=1",
    headers=tuple((f"x-header-{i}", str(i)) for i in range(20)),
    body=BODY,
    route_params={"source": "github"},
    client="10.0.0.1",
)

ROOT_RULES = (
    Root(Source.BODY),
    Keyed(Source.HEADERS, "headers_received"),
    Keyed(Source.METHOD, "method"),
)


# ── Core scenarios ───────────────────────────────────────────────────────────


def test_bench_assemble_default_mappings(benchmark):
    benchmark(assemble, REQUEST, DEFAULT_MAPPINGS)


def test_bench_assemble_root_merge(benchmark):
    benchmark(assemble, REQUEST, ROOT_RULES)


def test_bench_serialize_compact(benchmark):
    document = assemble(REQUEST, DEFAULT_MAPPINGS)
    benchmark(serialize, document)


def test_bench_serialize_pretty(benchmark):
    document = assemble(REQUEST, DEFAULT_MAPPINGS)
    benchmark(serialize, document, True)
