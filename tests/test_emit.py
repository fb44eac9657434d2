"""Tests for serialize() and LineEmitter."""

from __future__ import annotations

import io
import json
import threading

import pytest

from webhook2stdout import LineEmitter, serialize


class TestSerialize:
    def test_compact(self) -> None:
        doc = {"method": "POST", "payload": {}, "tags": [1, 2]}
        assert serialize(doc) == b'{"method":"POST","payload":{},"tags":[1,2]}'

    def test_keys_sorted(self) -> None:
        assert serialize({"b": 1, "a": {"d": 2, "c": 3}}) == b'{"a":{"c":3,"d":2},"b":1}'

    def test_pretty_uses_two_space_indent(self) -> None:
        out = serialize({"a": {"b": 1}}, pretty=True)
        assert out == b'{\n  "a": {\n    "b": 1\n  }\n}'

    def test_pretty_and_compact_decode_equal(self) -> None:
        doc = {"event": "x", "headers": {"x-tag": ["a", "b"]}, "n": 1.5, "ok": None}
        assert json.loads(serialize(doc)) == json.loads(serialize(doc, pretty=True)) == doc

    def test_scalar_document(self) -> None:
        assert serialize("POST") == b'"POST"'
        assert serialize(None) == b"null"

    def test_non_ascii_kept_as_utf8(self) -> None:
        assert serialize({"name": "Zoë"}) == '{"name":"Zoë"}'.encode()

    def test_nan_rejected(self) -> None:
        with pytest.raises(ValueError):
            serialize({"x": float("nan")})


class TestLineEmitter:
    def test_appends_newline(self, emitter: LineEmitter, stream: io.BytesIO) -> None:
        emitter.emit(b'{"a":1}')
        emitter.emit(b'"b"')
        assert stream.getvalue() == b'{"a":1}\n"b"\n'

    def test_pretty_document_is_one_record(self, emitter: LineEmitter, stream: io.BytesIO) -> None:
        emitter.emit(serialize({"a": 1}, pretty=True))
        assert stream.getvalue() == b'{\n  "a": 1\n}\n'

    def test_concurrent_emits_do_not_interleave(
        self, emitter: LineEmitter, stream: io.BytesIO
    ) -> None:
        def worker(n: int) -> None:
            for i in range(200):
                emitter.emit(serialize({"worker": n, "i": i, "pad": "x" * 512}))

        threads = [threading.Thread(target=worker, args=(n,)) for n in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        lines = stream.getvalue().splitlines()
        assert len(lines) == 8 * 200
        decoded = [json.loads(line) for line in lines]
        assert {(d["worker"], d["i"]) for d in decoded} == {
            (n, i) for n in range(8) for i in range(200)
        }

    def test_write_failure_propagates(self) -> None:
        class BrokenPipe(io.RawIOBase):
            def writable(self) -> bool:
                return True

            def write(self, b) -> int:  # noqa: ANN001
                raise BrokenPipeError("stdout closed")

        emitter = LineEmitter(BrokenPipe())  # type: ignore[arg-type]
        with pytest.raises(OSError, match="stdout closed"):
            emitter.emit(b"{}")

    def test_defaults_to_stdout(self, capsysbinary: pytest.CaptureFixture[bytes]) -> None:
        LineEmitter().emit(b'{"ok":true}')
        assert capsysbinary.readouterr().out == b'{"ok":true}\n'
