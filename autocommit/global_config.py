"""User-level configuration files for autocommit.

Handles configuration stored in ~/.autocommit/:
- config.yaml: model, endpoint and generation settings
- credentials: API keys (KEY=value lines)
"""

from pathlib import Path
from typing import Any, Dict, Optional

import yaml


class GlobalConfigError(Exception):
    """Raised when there's an error with global configuration."""
    pass


_CONFIG_DIR = Path.home() / ".autocommit"


def get_global_config_dir() -> Path:
    """Get the global configuration directory.

    Returns:
        Path to ~/.autocommit/
    """
    return _CONFIG_DIR


def get_config_file_path() -> Path:
    """Get path to config.yaml file."""
    return get_global_config_dir() / "config.yaml"


def get_credentials_file_path() -> Path:
    """Get path to credentials file."""
    return get_global_config_dir() / "credentials"


def load_global_config() -> Dict[str, Any]:
    """Load global configuration from ~/.autocommit/config.yaml.

    Returns:
        Dictionary with configuration values. Empty dict if file doesn't exist.

    Raises:
        GlobalConfigError: If the file exists but cannot be read or parsed.
    """
    config_file = get_config_file_path()

    if not config_file.exists():
        return {}

    try:
        with open(config_file, "r") as f:
            config = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise GlobalConfigError(f"Failed to load config from {config_file}: {e}")

    if not isinstance(config, dict):
        raise GlobalConfigError(f"Expected a mapping in {config_file}, got {type(config).__name__}")
    return config


def load_credentials() -> Dict[str, str]:
    """Load API keys from ~/.autocommit/credentials.

    Returns:
        Dictionary mapping environment variable names to API keys.
    """
    credentials_file = get_credentials_file_path()

    if not credentials_file.exists():
        return {}

    credentials = {}

    try:
        with open(credentials_file, "r") as f:
            for line in f:
                line = line.strip()
                # Skip empty lines and comments
                if not line or line.startswith("#"):
                    continue

                # Parse KEY=value format
                if "=" in line:
                    key, value = line.split("=", 1)
                    credentials[key.strip()] = value.strip()
    except OSError as e:
        raise GlobalConfigError(f"Failed to load credentials from {credentials_file}: {e}")

    return credentials


def get_credential(key: str) -> Optional[str]:
    """Get a single credential, or None when it is not stored."""
    return load_credentials().get(key) or None
