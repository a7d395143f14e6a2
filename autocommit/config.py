"""Runtime configuration for autocommit.

Settings are resolved once per run by load_settings() and passed explicitly
to the LLM provider.

Precedence (highest first):
1. Environment variables (a repo-level .env file is loaded first)
2. ~/.autocommit/config.yaml and ~/.autocommit/credentials
3. Defaults below
"""

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

from autocommit import global_config


# ============================================================
# DEFAULT FALLBACK VALUES
# ============================================================

DEFAULT_MODEL = "gpt-4o"
DEFAULT_MAX_TOKENS = 4096
DEFAULT_TEMPERATURE = 0.2


# ============================================================
# ENVIRONMENT VARIABLES
# ============================================================

API_KEY_ENV_VAR = "OPENAI_API_KEY"
BASE_URL_ENV_VARS = ("OPENAI_URI", "OPENAI_BASE_URL")
MODEL_ENV_VAR = "OPENAI_MODEL"


@dataclass
class Settings:
    """Resolved configuration for one run."""

    api_key: Optional[str] = None
    base_url: Optional[str] = None
    model: str = DEFAULT_MODEL
    max_tokens: int = DEFAULT_MAX_TOKENS
    temperature: float = DEFAULT_TEMPERATURE


def _first_env(*names: str) -> Optional[str]:
    for name in names:
        value = os.getenv(name)
        if value and value.strip():
            return value.strip()
    return None


def load_settings(load_env_file: bool = True) -> Settings:
    """Resolve settings from the environment, config files and defaults.

    Args:
        load_env_file: Load a .env file from the working directory first.

    Returns:
        The resolved Settings.
    """
    if load_env_file:
        load_dotenv()

    file_config = global_config.load_global_config()

    api_key = _first_env(API_KEY_ENV_VAR) or global_config.get_credential(API_KEY_ENV_VAR)
    base_url = _first_env(*BASE_URL_ENV_VARS) or file_config.get("base_url")
    model = _first_env(MODEL_ENV_VAR) or file_config.get("model") or DEFAULT_MODEL

    max_tokens = file_config.get("max_tokens")
    temperature = file_config.get("temperature")

    return Settings(
        api_key=api_key,
        base_url=base_url,
        model=model,
        max_tokens=int(max_tokens) if max_tokens is not None else DEFAULT_MAX_TOKENS,
        temperature=float(temperature) if temperature is not None else DEFAULT_TEMPERATURE,
    )
