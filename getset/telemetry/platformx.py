from __future__ import annotations

import json
import logging
import os
import subprocess
import time
from typing import Any

import requests

from getset.config import PlatformXConfig

from .types import Globals, TelemetryError

logger = logging.getLogger(__name__)

PLATFORMX_API_URL = "https://api.getdx.com/events.track"
DEFAULT_NAMESPACE = "getset"
UNKNOWN = "unknown"


class PlatformXClient:
    def __init__(
        self,
        config: PlatformXConfig,
        globals_: Globals,
        *,
        session: requests.Session | None = None,
        timeout: float = 10,
    ):
        self.config = config
        self.globals = globals_
        self.namespace = config.event_namespace or DEFAULT_NAMESPACE
        self.session = session or requests.Session()
        self.timeout = timeout

    def send_event(self, event_name: str, metadata: dict[str, Any]) -> None:
        metadata["user_shell"] = self.globals.user_shell

        payload = {
            "name": event_name,
            "metadata": metadata,
            "timestamp": str(int(time.time())),
            "email": self.globals.git_email,
            "github_username": self.globals.github_username,
        }

        logger.info("Sending event to PlatformX: %s", json.dumps(payload))

        try:
            response = self.session.post(
                PLATFORMX_API_URL,
                headers={"Authorization": f"Bearer {self.config.secret_key}"},
                json=payload,
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            raise TelemetryError(f"Failed to send PlatformX event: {exc}") from exc

        logger.debug("PlatformX HTTP Result: %s", response.status_code)

        if not response.ok:
            raise TelemetryError(
                f"PlatformX API call failed with status: {response.status_code}"
            )

    def notify_start(self) -> None:
        self.send_event(f"{self.namespace}.start", {})

    def notify_error(self, elapsed: float, message: str) -> None:
        self.send_event(
            f"{self.namespace}.error",
            {"duration": int(elapsed), "error_message": message},
        )

    def notify_complete(self, elapsed: float) -> None:
        self.send_event(f"{self.namespace}.complete", {"duration": int(elapsed)})


def _git_config(key: str) -> str:
    try:
        result = subprocess.run(
            ["git", "config", "--get", key],
            capture_output=True,
            text=True,
        )
    except OSError:
        return UNKNOWN

    value = result.stdout.strip()
    if result.returncode != 0 or not value:
        return UNKNOWN
    return value


def get_globals() -> Globals:
    return Globals(
        user_shell=os.environ.get("SHELL", UNKNOWN),
        github_username=_git_config("github.user"),
        git_email=_git_config("user.email"),
    )
