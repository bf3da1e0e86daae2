"""Shared test fixtures for restbase.

Provides fake transports, in-memory stores with a controllable clock, and
isolated config environments.  These fixtures are discovered by pytest and
available to every test module without explicit imports.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable

import httpx
import pytest

from restbase.cache import MemoryStore
from restbase.output import OutputManager, reset_output, set_output


BASE_URL = "https://api.example.com/v1/"


# ---------------------------------------------------------------------------
# Auto-reset global output state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Reset the global OutputManager after every test.

    Typer's CliRunner swaps sys.stdout/sys.stderr during a test; a manager
    created then would keep references to closed streams.
    """
    yield
    reset_output()


@pytest.fixture
def quiet_output() -> OutputManager:
    """Install a quiet, colourless output manager."""
    output = OutputManager(no_color=True, quiet=True)
    set_output(output)
    yield output
    reset_output()


# ---------------------------------------------------------------------------
# Transports and stores
# ---------------------------------------------------------------------------


class RecordingTransport:
    """Transport that answers from a handler and records every request sent."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]) -> None:
        self._handler = handler
        self.sent: list[httpx.Request] = []

    def send(self, request: httpx.Request) -> httpx.Response:
        self.sent.append(request)
        response = self._handler(request)
        response.request = request
        return response


@pytest.fixture
def make_transport() -> Callable[..., RecordingTransport]:
    """Factory for a :class:`RecordingTransport` with a fixed answer.

    Call it with ``json=...`` for a JSON body or ``text=...`` for a raw
    body, plus an optional ``status_code`` (default 200).
    """

    def _make(
        json: Any = None,
        text: str | None = None,
        status_code: int = 200,
    ) -> RecordingTransport:
        def _handler(request: httpx.Request) -> httpx.Response:
            if text is not None:
                return httpx.Response(status_code, text=text)
            return httpx.Response(status_code, json=json)

        return RecordingTransport(_handler)

    return _make


class FakeClock:
    """Manually advanced clock for :class:`~restbase.cache.MemoryStore`."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def memory_store(clock: FakeClock) -> MemoryStore:
    """An in-memory store driven by the :func:`clock` fixture."""
    return MemoryStore(clock=clock)


# ---------------------------------------------------------------------------
# Config isolation fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Isolate configuration and cache directories under tmp_path.

    Forces the XDG layout, points XDG_CONFIG_HOME and XDG_CACHE_HOME at
    tmp_path subdirectories and clears all RESTBASE_* variables.
    """
    monkeypatch.setattr("restbase.config._is_xdg_platform", lambda: True)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("XDG_CACHE_HOME", str(tmp_path / "cache"))

    for var in ["RESTBASE_CACHE_TTL", "RESTBASE_NO_CACHE", "RESTBASE_TIMEOUT"]:
        monkeypatch.delenv(var, raising=False)

    monkeypatch.chdir(tmp_path)
    return tmp_path
