"""Configuration loader for wifi-direct."""

from __future__ import annotations

from configparser import ConfigParser
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from . import constants
from .errors import InvalidInputError


@dataclass(slots=True)
class ManagerConfig:
    interface_name: str = constants.DEFAULT_INTERFACE_NAME
    command_queue_capacity: int = constants.DEFAULT_COMMAND_QUEUE_CAPACITY
    event_capacity: int = constants.DEFAULT_EVENT_CAPACITY


@dataclass(slots=True)
class LoggingConfig:
    level: str = "INFO"
    path: Optional[Path] = None
    log_backend: bool = False


@dataclass(slots=True)
class HealthConfig:
    enabled: bool = False
    host: str = constants.DEFAULT_HEALTH_HOST
    port: int = 0


@dataclass(slots=True)
class P2PConfig:
    manager: ManagerConfig
    logging: LoggingConfig
    health: HealthConfig
    raw: ConfigParser
    path: Path


def load_config(path: Optional[Path] = None) -> P2PConfig:
    """Load configuration from disk, applying defaults where necessary."""

    config_path = path or constants.DEFAULT_CONFIG_PATH
    parser = ConfigParser()
    parser.read_dict(_defaults())

    if config_path.exists():
        parser.read(config_path)

    return _from_parser(parser, config_path)


def save_config(config: P2PConfig) -> None:
    """Persist the current configuration to disk."""

    config_path = config.path
    config_path.parent.mkdir(parents=True, exist_ok=True)
    with config_path.open("w", encoding="utf-8") as stream:
        config.raw.write(stream)


def _defaults() -> dict[str, dict[str, str]]:
    return {
        "manager": {
            "interface_name": constants.DEFAULT_INTERFACE_NAME,
            "command_queue_capacity": str(constants.DEFAULT_COMMAND_QUEUE_CAPACITY),
            "event_capacity": str(constants.DEFAULT_EVENT_CAPACITY),
        },
        "logging": {
            "level": "INFO",
            "path": "",
            "log_backend": "false",
        },
        "health": {
            "enabled": "false",
            "host": constants.DEFAULT_HEALTH_HOST,
            "port": "0",
        },
    }


def _from_parser(parser: ConfigParser, config_path: Path) -> P2PConfig:
    interface_name = parser.get("manager", "interface_name").strip()
    if not interface_name:
        raise InvalidInputError("manager.interface_name must not be empty")

    manager = ManagerConfig(
        interface_name=interface_name,
        command_queue_capacity=max(
            1,
            parser.getint(
                "manager",
                "command_queue_capacity",
                fallback=constants.DEFAULT_COMMAND_QUEUE_CAPACITY,
            ),
        ),
        event_capacity=max(
            1,
            parser.getint(
                "manager",
                "event_capacity",
                fallback=constants.DEFAULT_EVENT_CAPACITY,
            ),
        ),
    )

    log_path_value = parser.get("logging", "path", fallback="").strip()
    logging_config = LoggingConfig(
        level=parser.get("logging", "level", fallback="INFO"),
        path=Path(log_path_value).expanduser() if log_path_value else None,
        log_backend=parser.getboolean("logging", "log_backend", fallback=False),
    )

    health = HealthConfig(
        enabled=parser.getboolean("health", "enabled", fallback=False),
        host=parser.get("health", "host", fallback=constants.DEFAULT_HEALTH_HOST),
        port=max(0, parser.getint("health", "port", fallback=0)),
    )

    return P2PConfig(
        manager=manager,
        logging=logging_config,
        health=health,
        raw=parser,
        path=config_path,
    )
