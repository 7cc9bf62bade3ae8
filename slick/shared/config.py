from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field

DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 3000
DEFAULT_PATH = "/slack/events"

ENV_MAPPINGS: dict[tuple[str, ...], str] = {
    ("slack", "signing_key"): "SLACK_SIGNING_KEY",
    ("server", "host"): "SLICK_HOST",
    ("server", "port"): "SLICK_PORT",
    ("server", "path"): "SLICK_PATH",
}


class SlickConfig(BaseModel):
    slack: dict[str, Any] = Field(default_factory=dict)
    server: dict[str, Any] = Field(default_factory=dict)

    @property
    def signing_key(self) -> str | None:
        return self.slack.get("signing_key") or None

    @property
    def host(self) -> str:
        return self.server.get("host", DEFAULT_HOST)

    @property
    def port(self) -> int:
        return int(self.server.get("port", DEFAULT_PORT))

    @property
    def path(self) -> str:
        return self.server.get("path", DEFAULT_PATH)


def _set_nested(d: dict, keys: tuple[str, ...], value: Any) -> None:
    for key in keys[:-1]:
        d = d.setdefault(key, {})
    if keys[-1] == "port":
        d[keys[-1]] = int(value)
    else:
        d[keys[-1]] = value


def load_config(path: str) -> SlickConfig:
    config_path = Path(path)
    if config_path.exists():
        with open(config_path) as f:
            data = yaml.safe_load(f) or {}
    else:
        data = {}

    for keys, env_var in ENV_MAPPINGS.items():
        env_value = os.environ.get(env_var)
        if env_value:
            _set_nested(data, keys, env_value)

    return SlickConfig(**data)
