"""Configuration models and loading."""

import json
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, ValidationError

CONFIG_DIR = Path.home() / ".config" / "runpod-chat-proxy"
CONFIG_FILE = CONFIG_DIR / "config.json"

POD_ID_ENV = "RUNPOD_POD_ID"
API_KEY_ENV = "RUNPOD_API_KEY"


class ProxySettings(BaseModel):
    host: str = "127.0.0.1"
    port: int = 8787
    debug: bool = True


class UpstreamSettings(BaseModel):
    host_template: str = "https://{pod_id}-11434.proxy.runpod.net"
    chat_endpoint: str = "/api/chat"
    pod_id: str = ""
    api_key: str = ""
    timeout: float = 120.0

    @property
    def is_configured(self) -> bool:
        return bool(self.pod_id and self.api_key)

    def chat_url(self) -> str:
        """Resolve the upstream chat URL for the configured pod."""
        return self.host_template.replace("{pod_id}", self.pod_id) + self.chat_endpoint


class CorsSettings(BaseModel):
    mode: Literal["wildcard", "allow-list", "pattern"] = "pattern"
    allowed_origins: list[str] = Field(default_factory=list)
    production_origin: str = "https://runllm.pages.dev"
    preview_suffix: str = ".runllm.pages.dev"
    allow_methods: str = "POST, OPTIONS"
    allow_headers: str = "Content-Type"
    max_age: int = 86400


class LimitSettings(BaseModel):
    keep_alive_timeout: int = 5
    max_connections: int = 100
    max_keepalive_connections: int = 20


class Config(BaseModel):
    proxy: ProxySettings = Field(default_factory=ProxySettings)
    upstream: UpstreamSettings = Field(default_factory=UpstreamSettings)
    cors: CorsSettings = Field(default_factory=CorsSettings)
    limits: LimitSettings = Field(default_factory=LimitSettings)


def load_config(path: Path = CONFIG_FILE) -> Config:
    """Load configuration from JSON file, creating default if needed.

    RUNPOD_POD_ID and RUNPOD_API_KEY override the secrets stored in the file.
    """
    if not path.exists():
        path.parent.mkdir(parents=True, exist_ok=True)
        config = Config()
        path.write_text(config.model_dump_json(indent=2))
    else:
        try:
            data = json.loads(path.read_text())
            config = Config.model_validate(data)
        except (json.JSONDecodeError, ValidationError):
            # Backup corrupted config and recreate default
            backup = path.with_suffix(".json.bak")
            path.rename(backup)
            config = Config()
            path.write_text(config.model_dump_json(indent=2))

    return apply_env_overrides(config)


def apply_env_overrides(config: Config, environ: Mapping[str, str] | None = None) -> Config:
    """Return a copy of config with secrets taken from the environment when set."""
    environ = os.environ if environ is None else environ
    overrides = {}
    if environ.get(POD_ID_ENV):
        overrides["pod_id"] = environ[POD_ID_ENV]
    if environ.get(API_KEY_ENV):
        overrides["api_key"] = environ[API_KEY_ENV]
    if not overrides:
        return config
    upstream = config.upstream.model_copy(update=overrides)
    return config.model_copy(update={"upstream": upstream})
