from .loader import load_config, loads_config
from .types import (
    CommandEntry,
    Config,
    ConfigError,
    PlatformXConfig,
    UnsupportedConfigFormatError,
)

__all__ = [
    "load_config",
    "loads_config",
    "CommandEntry",
    "Config",
    "ConfigError",
    "PlatformXConfig",
    "UnsupportedConfigFormatError",
]
