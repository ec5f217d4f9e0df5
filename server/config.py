"""
Configuration Loader
====================
Loads settings.yaml and applies environment overrides.

Usage:
    from config import get_config
    config = get_config()
    port = config.get('server.port', 8000)
"""

import os
import copy
import logging
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

logger = logging.getLogger(__name__)

PROJECT_ROOT = Path(__file__).resolve().parent.parent
DEFAULT_CONFIG_PATH = PROJECT_ROOT / "config" / "settings.yaml"

DEFAULTS: Dict[str, Any] = {
    'mcp': {
        'name': 'mcp-python-template',
        'instructions': 'Template MCP server with example tool, resource and prompt.',
    },
    'server': {
        'version': '1.0.0',
        'transport': 'stdio',
        'host': '0.0.0.0',
        'port': 8000,
        'authentication': {
            'enabled': False,
            'api_keys': {},
        },
    },
    'logging': {
        'level': 'INFO',
    },
    'harness': {
        'warmup_seconds': 0.1,
        'poll_interval_seconds': 0.1,
        'read_chunk_size': 1024,
        'response_timeout_seconds': None,
    },
}

# env var -> (dotted key, converter)
ENV_OVERRIDES = {
    'MCP_TRANSPORT': ('server.transport', str),
    'MCP_HOST': ('server.host', str),
    'MCP_PORT': ('server.port', int),
    'MCP_LOG_LEVEL': ('logging.level', str),
    'MCP_AUTH_ENABLED': ('server.authentication.enabled',
                         lambda v: v.lower() in ("1", "true", "yes", "on")),
}


class ConfigError(Exception):
    """Raised when configuration cannot be loaded or is invalid."""
    pass


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


class Config:
    """Settings with dotted-key access."""

    def __init__(self, data: Optional[Dict[str, Any]] = None, path: Optional[Path] = None):
        self.path = path
        self._data = _deep_merge(copy.deepcopy(DEFAULTS), data or {})

    @classmethod
    def load(cls, path: Optional[os.PathLike] = None, environ=None) -> "Config":
        """
        Load configuration from YAML and apply environment overrides.

        Args:
            path: Settings file. Defaults to $MCP_CONFIG_PATH or config/settings.yaml
            environ: Mapping used for overrides (defaults to os.environ)

        Raises:
            ConfigError: If the file exists but is not a valid YAML mapping
        """
        environ = os.environ if environ is None else environ
        path = Path(path or environ.get('MCP_CONFIG_PATH') or DEFAULT_CONFIG_PATH)

        data: Dict[str, Any] = {}
        if path.exists():
            try:
                with open(path, "r", encoding="utf-8") as f:
                    data = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ConfigError(f"Invalid YAML in {path}: {e}") from e
            if not isinstance(data, dict):
                raise ConfigError(f"Top level of {path} must be a mapping, got {type(data).__name__}")
            logger.debug(f"Loaded configuration from {path}")
        else:
            logger.debug(f"No configuration file at {path} - using defaults")

        config = cls(data, path=path)
        config._apply_env_overrides(environ)
        return config

    def _apply_env_overrides(self, environ) -> None:
        for env_var, (key, convert) in ENV_OVERRIDES.items():
            raw = environ.get(env_var)
            if raw is None or raw == "":
                continue
            try:
                self.set(key, convert(raw))
            except ValueError as e:
                raise ConfigError(f"Invalid value for {env_var}: {raw!r}") from e

    def get(self, key: str, default: Any = None) -> Any:
        """Get a value by dotted key, e.g. 'server.port'."""
        value: Any = self._data
        for part in key.split('.'):
            if not isinstance(value, dict) or part not in value:
                return default
            value = value[part]
        return default if value is None else value

    def set(self, key: str, value: Any) -> None:
        parts = key.split('.')
        node = self._data
        for part in parts[:-1]:
            node = node.setdefault(part, {})
        node[parts[-1]] = value

    # Convenience accessors

    @property
    def auth_enabled(self) -> bool:
        return bool(self.get('server.authentication.enabled', False))

    @property
    def api_keys(self) -> Dict[str, Dict[str, str]]:
        return self.get('server.authentication.api_keys', {}) or {}

    def is_authentication_enabled(self) -> bool:
        return self.auth_enabled

    def get_harness_config(self) -> Dict[str, Any]:
        """Timing and buffer settings for the stdio test wrapper."""
        return {
            'warmup_seconds': float(self.get('harness.warmup_seconds', 0.1)),
            'poll_interval_seconds': float(self.get('harness.poll_interval_seconds', 0.1)),
            'read_chunk_size': int(self.get('harness.read_chunk_size', 1024)),
            'response_timeout_seconds': self.get('harness.response_timeout_seconds'),
        }


_config: Optional[Config] = None


def get_config() -> Config:
    """Get or create the singleton configuration."""
    global _config
    if _config is None:
        _config = Config.load()
    return _config


def reset_config() -> None:
    """Drop the cached singleton (used by tests)."""
    global _config
    _config = None
