"""
Configuration loading utilities for txwatch.

Defaults live in config/server.yaml; environment variables (optionally
from a .env file) override them.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from dotenv import load_dotenv

from core.constants import (
    DEFAULT_HOST,
    DEFAULT_LOG_LEVEL,
    DEFAULT_PORT,
    DEFAULT_RPC_TIMEOUT_SECONDS,
    DEFAULT_RPC_URL,
)


CONFIG_DIR = Path(__file__).parent
SERVER_CONFIG = "server.yaml"

_env_loaded = False


def load_yaml(filename: str) -> Dict[str, Any]:
    """
    Load a YAML configuration file.

    Args:
        filename: Name of file in config directory

    Returns:
        Parsed YAML as dict
    """
    filepath = CONFIG_DIR / filename
    if not filepath.exists():
        raise FileNotFoundError(f"Config file not found: {filepath}")

    with open(filepath, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def _load_env() -> None:
    """Load the .env file once for the process."""
    global _env_loaded
    if _env_loaded:
        return
    load_dotenv()
    _env_loaded = True


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class Settings:
    """Process configuration."""

    rpc_url: str = DEFAULT_RPC_URL
    rpc_timeout_seconds: float = DEFAULT_RPC_TIMEOUT_SECONDS
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    log_level: str = DEFAULT_LOG_LEVEL
    json_logs: bool = True


def load_settings(filename: Optional[str] = SERVER_CONFIG) -> Settings:
    """
    Build settings from YAML defaults and environment overrides.

    Args:
        filename: YAML file in the config directory, or None to skip it

    Returns:
        Frozen Settings
    """
    _load_env()

    raw: Dict[str, Any] = load_yaml(filename) if filename else {}
    rpc = raw.get("rpc") or {}
    server = raw.get("server") or {}
    logging_cfg = raw.get("logging") or {}

    defaults = Settings()
    return Settings(
        rpc_url=os.getenv("TXWATCH_RPC_URL", rpc.get("url", defaults.rpc_url)),
        rpc_timeout_seconds=float(
            os.getenv("TXWATCH_RPC_TIMEOUT", rpc.get("timeout_seconds", defaults.rpc_timeout_seconds))
        ),
        host=os.getenv("TXWATCH_HOST", server.get("host", defaults.host)),
        port=int(os.getenv("TXWATCH_PORT", server.get("port", defaults.port))),
        log_level=os.getenv("TXWATCH_LOG_LEVEL", logging_cfg.get("level", defaults.log_level)),
        json_logs=_env_bool("TXWATCH_LOG_JSON", bool(logging_cfg.get("json", defaults.json_logs))),
    )
