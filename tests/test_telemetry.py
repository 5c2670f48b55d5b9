from __future__ import annotations

import subprocess

import pytest
import requests

from getset.config.types import PlatformXConfig
from getset.telemetry import platformx
from getset.telemetry.platformx import PLATFORMX_API_URL, PlatformXClient, get_globals
from getset.telemetry.types import Globals, TelemetryError


class _Response:
    def __init__(self, status_code: int) -> None:
        self.status_code = status_code

    @property
    def ok(self) -> bool:
        return self.status_code < 400


class _Session:
    def __init__(self, status_code: int = 200, error: Exception | None = None) -> None:
        self.status_code = status_code
        self.error = error
        self.calls: list[dict] = []

    def post(self, url: str, **kwargs) -> _Response:
        self.calls.append({"url": url, **kwargs})
        if self.error is not None:
            raise self.error
        return _Response(self.status_code)


GLOBALS = Globals(user_shell="/bin/zsh", github_username="octo", git_email="o@example.com")


def _client(session: _Session, namespace: str | None = None) -> PlatformXClient:
    return PlatformXClient(
        PlatformXConfig("secret", namespace), GLOBALS, session=session
    )


def test_start_event_payload() -> None:
    session = _Session()

    _client(session).notify_start()

    call = session.calls[0]
    assert call["url"] == PLATFORMX_API_URL
    assert call["headers"]["Authorization"] == "Bearer secret"
    payload = call["json"]
    assert payload["name"] == "getset.start"
    assert payload["metadata"] == {"user_shell": "/bin/zsh"}
    assert payload["email"] == "o@example.com"
    assert payload["github_username"] == "octo"
    assert payload["timestamp"].isdigit()


def test_custom_namespace_and_durations() -> None:
    session = _Session()
    client = _client(session, "my_namespace")

    client.notify_error(12.7, "'Build' exited with status 2")
    client.notify_complete(3.2)

    error, complete = (c["json"] for c in session.calls)
    assert error["name"] == "my_namespace.error"
    assert error["metadata"]["duration"] == 12
    assert error["metadata"]["error_message"] == "'Build' exited with status 2"
    assert complete["name"] == "my_namespace.complete"
    assert complete["metadata"]["duration"] == 3


def test_http_error_status_raises() -> None:
    with pytest.raises(TelemetryError, match="status: 401"):
        _client(_Session(status_code=401)).notify_start()


def test_transport_error_raises() -> None:
    session = _Session(error=requests.ConnectionError("no route"))

    with pytest.raises(TelemetryError, match="Failed to send PlatformX event"):
        _client(session).notify_complete(1.0)


def test_get_globals_defaults_to_unknown(monkeypatch: pytest.MonkeyPatch) -> None:
    def _fail(*args, **kwargs):
        return subprocess.CompletedProcess(args, 1, stdout="", stderr="")

    monkeypatch.delenv("SHELL", raising=False)
    monkeypatch.setattr(platformx.subprocess, "run", _fail)

    assert get_globals() == Globals("unknown", "unknown", "unknown")


def test_get_globals_reads_git_config(monkeypatch: pytest.MonkeyPatch) -> None:
    values = {"github.user": "octo\n", "user.email": "o@example.com\n"}

    def _git(cmd, **kwargs):
        return subprocess.CompletedProcess(cmd, 0, stdout=values[cmd[-1]], stderr="")

    monkeypatch.setenv("SHELL", "/bin/bash")
    monkeypatch.setattr(platformx.subprocess, "run", _git)

    assert get_globals() == Globals("/bin/bash", "octo", "o@example.com")


def test_get_globals_without_git(monkeypatch: pytest.MonkeyPatch) -> None:
    def _missing(*args, **kwargs):
        raise FileNotFoundError("git")

    monkeypatch.setattr(platformx.subprocess, "run", _missing)

    globals_ = get_globals()
    assert globals_.github_username == "unknown"
    assert globals_.git_email == "unknown"
