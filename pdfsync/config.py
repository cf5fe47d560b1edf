"""Environment configuration for the presentation server."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from .core.passphrase import MIN_PASSPHRASE_BYTES

LOG_LEVELS = {"critical", "error", "warning", "info", "debug", "trace"}


def _get_env(name: str, default: Optional[str] = None) -> Optional[str]:
    value = os.getenv(name, None)
    if value is None:
        return default
    stripped = value.strip()
    if stripped == "":
        return default
    return stripped


def _get_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return default
    try:
        return int(float(value))
    except ValueError as exc:
        raise ValueError(f"Environment value for {name!r} must be an integer") from exc


def _get_list(name: str, default: List[str]) -> List[str]:
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return default
    return [item.strip() for item in value.split(",") if item.strip()]


@dataclass(frozen=True)
class Config:
    host: str
    port: int
    log_level: str
    upload_dir: Path
    max_upload_mb: int
    cors_origins: List[str]
    passphrase_bytes: int
    initial_passphrase: Optional[str] = None

    @property
    def max_upload_bytes(self) -> int:
        return self.max_upload_mb * 1024 * 1024

    def validate(self) -> None:
        if not 0 < self.port < 65536:
            raise ValueError("PDFSYNC_PORT must be between 1 and 65535.")
        if self.log_level not in LOG_LEVELS:
            raise ValueError(f"PDFSYNC_LOG_LEVEL must be one of {sorted(LOG_LEVELS)}.")
        if self.max_upload_mb <= 0:
            raise ValueError("PDFSYNC_MAX_UPLOAD_MB must be positive.")
        if self.passphrase_bytes < MIN_PASSPHRASE_BYTES:
            raise ValueError(f"PDFSYNC_PASSPHRASE_BYTES must be at least {MIN_PASSPHRASE_BYTES}.")
        if not self.cors_origins:
            raise ValueError("PDFSYNC_CORS_ORIGINS must list at least one origin.")

    @staticmethod
    def load() -> "Config":
        file_path = _get_env("PDFSYNC_CONFIG_FILE")
        overrides = _load_yaml(Path(file_path).expanduser()) if file_path else {}

        passphrase_default = overrides.get("passphrase")
        if passphrase_default is not None:
            passphrase_default = str(passphrase_default)

        cors_default = overrides.get("cors_origins", ["*"])
        if isinstance(cors_default, str):
            cors_default = [cors_default]
        if not isinstance(cors_default, list):
            raise ValueError("Config value for 'cors_origins' must be a string or a list")

        config = Config(
            host=_get_env("PDFSYNC_BIND", str(overrides.get("host", "0.0.0.0"))) or "0.0.0.0",
            port=_get_int("PDFSYNC_PORT", _file_int(overrides, "port", 3000)),
            log_level=(_get_env("PDFSYNC_LOG_LEVEL", str(overrides.get("log_level", "info"))) or "info").lower(),
            upload_dir=Path(
                _get_env("PDFSYNC_UPLOAD_DIR", str(overrides.get("upload_dir", "uploads"))) or "uploads"
            ).expanduser(),
            max_upload_mb=_get_int("PDFSYNC_MAX_UPLOAD_MB", _file_int(overrides, "max_upload_mb", 50)),
            cors_origins=_get_list("PDFSYNC_CORS_ORIGINS", [str(o) for o in cors_default]),
            passphrase_bytes=_get_int(
                "PDFSYNC_PASSPHRASE_BYTES", _file_int(overrides, "passphrase_bytes", MIN_PASSPHRASE_BYTES)
            ),
            initial_passphrase=_get_env("PDFSYNC_PASSPHRASE", passphrase_default),
        )
        config.validate()
        return config


def _file_int(overrides: Dict[str, Any], key: str, default: int) -> int:
    value = overrides.get(key, default)
    if isinstance(value, bool):
        raise ValueError(f"Config value for {key!r} must be an integer")
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Config value for {key!r} must be an integer") from exc

def _load_yaml(path: Path) -> Dict[str, Any]:
    if not path.exists():
        raise FileNotFoundError(f"PDFSYNC_CONFIG_FILE does not exist: {path}")
    with path.open("r", encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as exc:
            raise ValueError(f"Config file {path} is not valid YAML") from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Config file {path} must contain a mapping")
    return data
