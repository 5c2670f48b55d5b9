from .platformx import PLATFORMX_API_URL, PlatformXClient, get_globals
from .types import Globals, Telemetry, TelemetryError

__all__ = [
    "PLATFORMX_API_URL",
    "PlatformXClient",
    "get_globals",
    "Globals",
    "Telemetry",
    "TelemetryError",
]
