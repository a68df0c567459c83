"""Configuration loader for specan-remote."""

from __future__ import annotations

import shlex
from configparser import ConfigParser
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from . import constants

SINK_TYPES = ("process", "tcp", "log")


class ConfigurationError(RuntimeError):
    """Raised when the configuration cannot be turned into a working service."""


@dataclass(slots=True)
class ServerConfig:
    host: str = constants.DEFAULT_SERVER_HOST
    port: int = constants.DEFAULT_SERVER_PORT
    title: str = constants.DEFAULT_PAGE_TITLE


@dataclass(slots=True)
class FormConfig:
    gain: str = constants.DEFAULT_GAIN
    brightness: str = constants.DEFAULT_BRIGHTNESS


@dataclass(slots=True)
class SinkConfig:
    type: str = constants.DEFAULT_SINK_TYPE
    command: List[str] = field(
        default_factory=lambda: shlex.split(constants.DEFAULT_SINK_COMMAND)
    )
    host: str = constants.DEFAULT_DISPLAY_HOST
    port: int = constants.DEFAULT_DISPLAY_PORT
    timeout_seconds: float = 0.0  # 0 waits indefinitely


@dataclass(slots=True)
class LoggingConfig:
    level: str = "INFO"
    path: Optional[Path] = None
    log_access: bool = False


@dataclass(slots=True)
class RemoteConfig:
    server: ServerConfig
    form: FormConfig
    sink: SinkConfig
    logging: LoggingConfig
    raw: ConfigParser
    path: Path


def _clamp_port(value: int) -> int:
    return max(0, min(65535, value))


def load_config(path: Optional[Path] = None) -> RemoteConfig:
    """Load configuration from disk, applying defaults where necessary."""

    config_path = path or constants.DEFAULT_CONFIG_PATH
    parser = ConfigParser()
    parser.read_dict(
        {
            "server": {
                "host": constants.DEFAULT_SERVER_HOST,
                "port": str(constants.DEFAULT_SERVER_PORT),
                "title": constants.DEFAULT_PAGE_TITLE,
            },
            "form": {
                "gain": constants.DEFAULT_GAIN,
                "brightness": constants.DEFAULT_BRIGHTNESS,
            },
            "sink": {
                "type": constants.DEFAULT_SINK_TYPE,
                "command": constants.DEFAULT_SINK_COMMAND,
                "host": constants.DEFAULT_DISPLAY_HOST,
                "port": str(constants.DEFAULT_DISPLAY_PORT),
                "timeout_seconds": "0",
            },
            "logging": {
                "level": "INFO",
                "path": "",
                "log_access": "false",
            },
        }
    )

    if config_path.exists():
        parser.read(config_path)

    server = ServerConfig(
        host=parser.get("server", "host", fallback=constants.DEFAULT_SERVER_HOST),
        port=_clamp_port(
            parser.getint("server", "port", fallback=constants.DEFAULT_SERVER_PORT)
        ),
        title=parser.get("server", "title", fallback=constants.DEFAULT_PAGE_TITLE),
    )

    form = FormConfig(
        gain=parser.get("form", "gain", fallback=constants.DEFAULT_GAIN).strip(),
        brightness=parser.get(
            "form", "brightness", fallback=constants.DEFAULT_BRIGHTNESS
        ).strip(),
    )

    sink_type = parser.get("sink", "type", fallback=constants.DEFAULT_SINK_TYPE)
    sink_type = sink_type.strip().lower()
    if sink_type not in SINK_TYPES:
        raise ConfigurationError(
            f"Unsupported sink type {sink_type!r}; expected one of {', '.join(SINK_TYPES)}"
        )

    sink = SinkConfig(
        type=sink_type,
        command=shlex.split(
            parser.get("sink", "command", fallback=constants.DEFAULT_SINK_COMMAND)
        ),
        host=parser.get("sink", "host", fallback=constants.DEFAULT_DISPLAY_HOST),
        port=_clamp_port(
            parser.getint("sink", "port", fallback=constants.DEFAULT_DISPLAY_PORT)
        ),
        timeout_seconds=max(
            0.0, parser.getfloat("sink", "timeout_seconds", fallback=0.0)
        ),
    )

    log_path_value = parser.get("logging", "path", fallback="").strip()
    logging_config = LoggingConfig(
        level=parser.get("logging", "level", fallback="INFO"),
        path=Path(log_path_value).expanduser() if log_path_value else None,
        log_access=parser.getboolean("logging", "log_access", fallback=False),
    )

    return RemoteConfig(
        server=server,
        form=form,
        sink=sink,
        logging=logging_config,
        raw=parser,
        path=config_path,
    )
