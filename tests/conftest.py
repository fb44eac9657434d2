"""Shared fixtures for webhook2stdout tests."""

from __future__ import annotations

import io
import logging

import pytest
import structlog

from webhook2stdout import LineEmitter


@pytest.fixture
def stream() -> io.BytesIO:
    """Binary buffer standing in for stdout."""
    return io.BytesIO()


@pytest.fixture
def emitter(stream: io.BytesIO) -> LineEmitter:
    return LineEmitter(stream)


@pytest.fixture(autouse=True)
def _restore_logging():  # noqa: ANN202
    """Drop handlers installed by configure_logging() once a test ends.

    Their streams (StringIO buffers, CliRunner's stderr) do not outlive
    the test. pytest's own capture handlers are StreamHandler subclasses
    and are left alone.
    """
    root = logging.getLogger()
    level = root.level
    yield
    for handler in list(root.handlers):
        if type(handler) is logging.StreamHandler:
            root.removeHandler(handler)
    root.setLevel(level)
    structlog.reset_defaults()
