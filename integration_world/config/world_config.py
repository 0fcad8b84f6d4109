#!filepath: integration_world/config/world_config.py
from __future__ import annotations

import os
from typing import Any, Mapping

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field

from .log_config import LogConfig


def project_root() -> str:
    """
    integration_world/config/world_config.py -> integration_world/config
    -> integration_world -> project_root
    """
    return os.path.abspath(os.path.join(os.path.dirname(__file__), "../../"))


class LogFilesConfig(BaseModel):
    """log4rs config files passed to the spawned processes."""

    base_node: str = "./log4rs/base_node.yml"
    proxy: str = "./log4rs/proxy.yml"
    wallet: str = "./log4rs/wallet.yml"


class CompileConfig(BaseModel):
    # 20 minutes: a cold build of every binary
    timeout_sec: float = 1200
    base_node_address: str = "127.0.0.1:9999"
    wallet_address: str = "127.0.0.1:9998"


# runner parameter key -> LogFilesConfig field
_PARAMETER_KEYS = {
    "logFilePathBaseNode": "base_node",
    "logFilePathProxy": "proxy",
    "logFilePathWallet": "wallet",
}

# env var -> LogFilesConfig field
_ENV_KEYS = {
    "WORLD_LOG_FILE_BASE_NODE": "base_node",
    "WORLD_LOG_FILE_PROXY": "proxy",
    "WORLD_LOG_FILE_WALLET": "wallet",
}


class WorldConfig(BaseModel):
    log: LogConfig = Field(default_factory=LogConfig)
    log_files: LogFilesConfig = Field(default_factory=LogFilesConfig)
    compile: CompileConfig = Field(default_factory=CompileConfig)

    @classmethod
    def from_parameters(cls, parameters: Mapping[str, Any] | None = None) -> "WorldConfig":
        """
        Build from the world parameters a test runner passes in, e.g.
        {"logFilePathBaseNode": "./custom.yml"}. Absent or empty keys fall
        back to the defaults.
        """
        parameters = parameters or {}
        log_files = {
            field: parameters[key]
            for key, field in _PARAMETER_KEYS.items()
            if parameters.get(key)
        }
        return cls(log_files=LogFilesConfig(**log_files))

    @classmethod
    def load(cls, path: str | None = None) -> "WorldConfig":
        """
        Load YAML config + .env
        - default: <project_root>/integration_world/config/base.yml
        - WORLD_LOG_FILE_* env vars override the log4rs paths
        """
        root = project_root()

        # 1) .env at the project root
        load_dotenv(os.path.join(root, ".env"))

        # 2) config file
        if path is None:
            path = os.path.join(root, "integration_world/config/base.yml")

        if not os.path.exists(path):
            raise FileNotFoundError(f"Config file not found: {path}")

        # 3) YAML
        with open(path, "r", encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}

        # 4) env overrides
        log_files = dict(raw.get("log_files") or {})
        for env_key, field in _ENV_KEYS.items():
            value = os.getenv(env_key)
            if value:
                log_files[field] = value
        raw["log_files"] = log_files

        return cls(**raw)
