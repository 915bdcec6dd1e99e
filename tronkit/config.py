"""Persistent command-line defaults stored as YAML."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

import yaml

DEFAULT_NODE_ADDR = "grpc.trongrid.io:50051"
DEFAULT_TIMEOUT = 20
DEFAULT_PORT = "50051"
CONFIG_FILE_NAME = "config.default"

_UINT32_MAX = (1 << 32) - 1
_TRUE_WORDS = frozenset({"1", "t", "T", "TRUE", "true", "True"})
_FALSE_WORDS = frozenset({"0", "f", "F", "FALSE", "false", "False"})


@dataclass
class Config:
    """Default settings used by every command."""

    node: str = ""
    ledger: bool = False
    verbose: bool = False
    timeout: int = 0
    no_pretty: bool = False
    api_key: str = str()
    with_tls: bool = False


# (attribute, YAML key, JSON key, type)
_FIELDS = (
    ("node", "node", "Node", str),
    ("ledger", "ledger", "Ledger", bool),
    ("verbose", "verbose", "Verbose", bool),
    ("timeout", "timeout", "Timeout", int),
    ("no_pretty", "noPretty", "NoPretty", bool),
    ("api_key", "apiKey", "APIKey", str),
    ("with_tls", "withTLS", "WithTLS", bool),
)

_SETTABLE_BOOLS = {
    "ledger": "ledger",
    "verbose": "verbose",
    "nopretty": "no_pretty",
    "withTLS": "with_tls",
}
_GETTABLE = {
    "node": lambda config: config.node,
    "ledger": lambda config: config.ledger,
    "verbose": lambda config: config.verbose,
    "nopretty": lambda config: config.no_pretty,
    "apiKey": lambda config: config.api_key,
    "withTLS": lambda config: config.with_tls,
}


def _default_config_dir() -> Path:
    return Path(os.environ.get("HOME", "")) / ".config" / "tronctl"


def _config_file(config_dir) -> Path:
    return Path(config_dir) / CONFIG_FILE_NAME


def _parse_bool(text: str) -> bool:
    if text in _TRUE_WORDS:
        return True
    if text in _FALSE_WORDS:
        return False
    raise ValueError(f"invalid boolean: {text!r}")


def _check_value(key: str, kind: type, value):
    if kind is bool:
        if not isinstance(value, bool):
            raise ValueError(f"config field {key} must be a boolean")
    elif kind is int:
        if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= _UINT32_MAX:
            raise ValueError(f"config field {key} must be an unsigned 32-bit integer")
    elif not isinstance(value, str):
        raise ValueError(f"config field {key} must be a string")
    return value


def load_config(path) -> Config:
    """Read a config file; raises FileNotFoundError if it does not exist."""
    text = Path(path).read_text()
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ValueError(f"cannot parse config: {exc}") from exc
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ValueError("config must be a mapping")
    config = Config()
    for attribute, key, _, kind in _FIELDS:
        if key in data and data[key] is not None:
            setattr(config, attribute, _check_value(key, kind, data[key]))
    return config


def save_config(config: Config, path) -> None:
    """Write a config file readable only by its owner."""
    data = {key: getattr(config, attribute) for attribute, key, _, _ in _FIELDS}
    text = yaml.safe_dump(data, sort_keys=False)
    descriptor = os.open(os.fspath(path), os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
    with os.fdopen(descriptor, "w") as handle:
        handle.write(text)


def init_config(config_dir=None) -> Config:
    """Load the default config, writing fresh defaults if it is missing or unusable."""
    directory = Path(config_dir) if config_dir is not None else _default_config_dir()
    directory.mkdir(mode=0o700, parents=True, exist_ok=True)
    path = _config_file(directory)
    try:
        config = load_config(path)
    except (OSError, ValueError):
        config = None
    if config is None or not config.node:
        config = Config(node=DEFAULT_NODE_ADDR, timeout=DEFAULT_TIMEOUT)
        save_config(config, path)
    return config


def set_config_value(config: Config, param: str, value: str) -> Config:
    """Change one setting from its command-line text; the caller saves it."""
    if param == "node":
        if len(value.split(":")) == 1:
            value = f"{value}:{DEFAULT_PORT}"
        config.node = value
    elif param in _SETTABLE_BOOLS:
        setattr(config, _SETTABLE_BOOLS[param], _parse_bool(value))
    elif param == "apiKey":
        config.api_key = value
    else:
        raise LookupError("parameter not found")
    return config


def get_config_value(config: Config, param: str):
    """Return one setting, or every setting by its JSON name for "all"."""
    if param == "all":
        return {json_key: getattr(config, attribute) for attribute, _, json_key, _ in _FIELDS}
    if param in _GETTABLE:
        return _GETTABLE[param](config)
    raise LookupError("parameter not found")