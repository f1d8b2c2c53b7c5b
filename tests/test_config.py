from pathlib import Path

import pytest

from wifi_direct import constants
from wifi_direct.config import load_config, save_config
from wifi_direct.errors import InvalidInputError


def test_load_config_defaults(tmp_path: Path) -> None:
    config_path = tmp_path / "wifi-direct.cfg"
    config = load_config(config_path)

    assert config.path == config_path
    assert config.manager.interface_name == constants.DEFAULT_INTERFACE_NAME
    assert config.manager.command_queue_capacity == 32
    assert config.manager.event_capacity == 64
    assert config.logging.level == "INFO"
    assert config.logging.path is None
    assert config.logging.log_backend is False
    assert config.health.enabled is False
    assert config.health.host == "127.0.0.1"
    assert config.health.port == 0


def test_load_config_overrides_defaults(tmp_path: Path) -> None:
    config_path = tmp_path / "wifi-direct.cfg"
    config_path.write_text(
        """
[manager]
interface_name = p2p-dev-wlan0
command_queue_capacity = 8
event_capacity = 16

[logging]
level = DEBUG
path = ~/logs/wifi-direct.log
log_backend = true

[health]
enabled = true
port = 8099
""",
        encoding="utf-8",
    )

    config = load_config(config_path)

    assert config.manager.interface_name == "p2p-dev-wlan0"
    assert config.manager.command_queue_capacity == 8
    assert config.manager.event_capacity == 16
    assert config.logging.level == "DEBUG"
    assert config.logging.path == Path("~/logs/wifi-direct.log").expanduser()
    assert config.logging.log_backend is True
    assert config.health.enabled is True
    assert config.health.port == 8099


def test_load_config_clamps_capacities(tmp_path: Path) -> None:
    config_path = tmp_path / "wifi-direct.cfg"
    config_path.write_text(
        "[manager]\ncommand_queue_capacity = 0\nevent_capacity = -4\n",
        encoding="utf-8",
    )

    config = load_config(config_path)

    assert config.manager.command_queue_capacity == 1
    assert config.manager.event_capacity == 1


def test_load_config_rejects_empty_interface(tmp_path: Path) -> None:
    config_path = tmp_path / "wifi-direct.cfg"
    config_path.write_text("[manager]\ninterface_name =\n", encoding="utf-8")

    with pytest.raises(InvalidInputError):
        load_config(config_path)


def test_save_config_persists_changes(tmp_path: Path) -> None:
    config_path = tmp_path / "nested" / "wifi-direct.cfg"
    config = load_config(config_path)
    config.raw.set("manager", "interface_name", "wlan1")

    save_config(config)

    assert load_config(config_path).manager.interface_name == "wlan1"
