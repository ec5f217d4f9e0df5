"""
Configuration Validator
=======================
Fail fast on startup when settings.yaml or the environment is misconfigured.
"""

import logging

from config import ConfigError

logger = logging.getLogger(__name__)

VALID_TRANSPORTS = ("stdio", "http")
VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def validate_config(config) -> None:
    """
    Validate configuration values.

    Args:
        config: Config instance

    Raises:
        ConfigError: Listing every problem found
    """
    errors = []

    transport = str(config.get('server.transport', 'stdio')).lower()
    if transport not in VALID_TRANSPORTS:
        errors.append(f"server.transport must be one of {VALID_TRANSPORTS}, got {transport!r}")

    port = config.get('server.port', 8000)
    if not isinstance(port, int) or isinstance(port, bool) or not 0 < port < 65536:
        errors.append(f"server.port must be an integer between 1 and 65535, got {port!r}")

    level = str(config.get('logging.level', 'INFO')).upper()
    if level not in VALID_LOG_LEVELS:
        errors.append(f"logging.level must be one of {VALID_LOG_LEVELS}, got {level!r}")

    for key in ('harness.warmup_seconds', 'harness.poll_interval_seconds'):
        value = config.get(key)
        if not isinstance(value, (int, float)) or isinstance(value, bool) or value <= 0:
            errors.append(f"{key} must be a positive number, got {value!r}")

    chunk = config.get('harness.read_chunk_size')
    if not isinstance(chunk, int) or isinstance(chunk, bool) or chunk <= 0:
        errors.append(f"harness.read_chunk_size must be a positive integer, got {chunk!r}")

    timeout = config.get('harness.response_timeout_seconds')
    if timeout is not None and (not isinstance(timeout, (int, float)) or isinstance(timeout, bool) or timeout <= 0):
        errors.append(f"harness.response_timeout_seconds must be null or a positive number, got {timeout!r}")

    if config.auth_enabled:
        api_keys = config.api_keys
        if not isinstance(api_keys, dict) or not api_keys:
            errors.append("server.authentication.api_keys must define at least one key when authentication is enabled")
        else:
            for key, info in api_keys.items():
                if not isinstance(info, dict) or 'name' not in info:
                    errors.append(f"API key entry {str(key)[:6]}... must be a mapping with a 'name'")

    if errors:
        for error in errors:
            logger.error(f"❌ Config: {error}")
        raise ConfigError("Invalid configuration: " + "; ".join(errors))

    logger.debug("Configuration validated")
