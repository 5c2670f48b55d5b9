from dataclasses import dataclass, field


@dataclass(frozen=True)
class CommandEntry:
    title: str
    command: str


@dataclass(frozen=True)
class PlatformXConfig:
    secret_key: str
    event_namespace: str | None = None


@dataclass
class Config:
    commands: list[CommandEntry] = field(default_factory=list)
    platformx: PlatformXConfig | None = None


class ConfigError(Exception):
    def __init__(self, *args: object) -> None:
        super().__init__(*args)


class UnsupportedConfigFormatError(ConfigError):
    def __init__(self, *args: object) -> None:
        super().__init__(*args)
