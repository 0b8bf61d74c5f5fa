"""Configuration loading from YAML files with environment variable support."""

import logging
import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping, Optional

import yaml
from dotenv import dotenv_values

from .core.exceptions import MissingCredentialError
from .messages.constants import GROQ_BASE_URL, GROQ_MAX_OUTPUT_TOKENS, GROQ_MODEL

logger = logging.getLogger("groq-proxy")

# Default path to the config file (relative to project root)
DEFAULT_CONFIG_PATH = "configs/config_default.yaml"

# Environment variable to override the config path
CONFIG_PATH_ENV = "GROQ_PROXY_CONFIG"

_ENV_PATTERN = re.compile(r"\$\{([^}]+)\}|\$([A-Za-z_][A-Za-z0-9_]*)")


def resolve_config_path(path: str) -> Path:
    """Resolve config path relative to project root if needed."""
    if Path(path).is_absolute():
        return Path(path)
    project_root = Path(__file__).parent.parent
    return project_root / path


def resolve_env_path(config_path: Path, env_path: str | None = None) -> Path:
    """Resolve the env file path for a config file.

    ``configs/config_default.yaml`` pairs with ``configs/.env_default``; any
    other name pairs with a plain ``.env`` next to it.
    """
    if env_path:
        return resolve_config_path(env_path)
    stem = config_path.stem
    if stem.startswith("config_"):
        suffix = stem[len("config_"):]
        return config_path.with_name(f".env_{suffix}")
    return config_path.with_name(".env")


def load_env_values(env_path: Path) -> dict[str, str]:
    """Load environment values from a .env file without mutating os.environ."""
    if not env_path.exists():
        return {}
    raw_values = dotenv_values(env_path)
    return {key: value for key, value in raw_values.items() if value is not None}


def load_config(
    path: str | None = None,
    env_path: str | None = None,
    substitute_env: bool = True,
) -> dict:
    """Load configuration from a YAML file.

    Args:
        path: Path to the config file. Defaults to GROQ_PROXY_CONFIG,
              or configs/config_default.yaml in the project root.
        env_path: Optional .env path override for env substitution.
        substitute_env: Whether to substitute environment variables in the config.

    Returns:
        Parsed configuration dictionary. The values read from the .env file
        are kept under the ``_env`` key for credential lookup.
    """
    if path is None:
        path = os.getenv(CONFIG_PATH_ENV) or DEFAULT_CONFIG_PATH

    config_path = resolve_config_path(path)

    logger.info(f"Loading configuration from {config_path}")

    if not config_path.exists():
        logger.error(f"Config file not found: {config_path}")
        raise RuntimeError(f"Config file not found: {config_path}")

    env_values: dict[str, str] = {}
    env_file = resolve_env_path(config_path, env_path)
    if env_file.exists():
        logger.info(f"Loading environment variables from {env_file}")
        env_values = load_env_values(env_file)

    with config_path.open("r", encoding="utf-8") as fh:
        data = yaml.safe_load(fh) or {}

    if not isinstance(data, dict):
        raise RuntimeError(f"Config file must contain a mapping: {config_path}")

    if substitute_env:
        data = _substitute_env_vars(data, env_values)

    data["_env"] = env_values
    logger.info(f"Configuration loaded successfully from {config_path}")
    return data


def _substitute_env_vars(
    obj: Any, env_values: Mapping[str, str] | None = None
) -> Any:
    """Recursively substitute environment variables in configuration values.

    Supports two formats:
    - ${VAR_NAME}: Braced format
    - $VAR_NAME: Simple format

    Values from the .env file win over the process environment. Unset
    variables are left as the literal placeholder.
    """
    env_values = env_values or {}

    if isinstance(obj, dict):
        return {k: _substitute_env_vars(v, env_values) for k, v in obj.items()}
    if isinstance(obj, list):
        return [_substitute_env_vars(item, env_values) for item in obj]
    if isinstance(obj, str):
        def replace_var(match):
            var_name = match.group(1) or match.group(2)
            value = env_values.get(var_name)
            if value is None:
                value = os.getenv(var_name)
            if value is None:
                logger.warning(
                    f"CONFIG ERROR: Environment variable '${var_name}' is not set! "
                    f"Check your .env file or export it in your shell. "
                    f"The literal placeholder will be used."
                )
                return match.group(0)
            return value

        return _ENV_PATTERN.sub(replace_var, obj)
    return obj


def _section(config: Mapping[str, Any], name: str) -> Mapping[str, Any]:
    value = config.get(name)
    return value if isinstance(value, Mapping) else {}


def _coerce_int(value: Any, default: int) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


@dataclass
class ProxySettings:
    """Process-wide settings for one proxy deployment."""

    host: str = "127.0.0.1"
    port: int = 8000
    base_url: str = GROQ_BASE_URL
    model: str = GROQ_MODEL
    max_output_tokens: int = GROQ_MAX_OUTPUT_TOKENS
    api_key_env: str = "GROQ_API_KEY"
    request_timeout: Optional[float] = 60.0
    log_level: str = "INFO"
    env_values: dict[str, str] = field(default_factory=dict, repr=False)

    @property
    def model_label(self) -> str:
        """Model name reported back to callers."""
        return f"groq/{self.model}"

    @classmethod
    def from_config(cls, config: Mapping[str, Any]) -> "ProxySettings":
        """Build settings from a loaded config, applying defaults.

        GROQ_PROXY_HOST / GROQ_PROXY_PORT take priority over the config file,
        and GROQ_PROXY_LOG_LEVEL over ``logging.level``.
        """
        server_cfg = _section(config, "server")
        upstream_cfg = _section(config, "upstream")
        logging_cfg = _section(config, "logging")
        defaults = cls()

        host = os.getenv("GROQ_PROXY_HOST") or str(server_cfg.get("host", defaults.host))
        port = _coerce_int(
            os.getenv("GROQ_PROXY_PORT") or server_cfg.get("port"), defaults.port
        )

        timeout = upstream_cfg.get("request_timeout", defaults.request_timeout)
        try:
            timeout_val = float(timeout) if timeout is not None else None
        except (TypeError, ValueError):
            logger.warning(f"Invalid request_timeout {timeout!r}, using default")
            timeout_val = defaults.request_timeout

        max_output_tokens = _coerce_int(
            upstream_cfg.get("max_output_tokens"), defaults.max_output_tokens
        )
        if max_output_tokens <= 0:
            logger.warning(
                f"Invalid max_output_tokens {max_output_tokens}, using default"
            )
            max_output_tokens = defaults.max_output_tokens

        env_values = config.get("_env")
        return cls(
            host=host,
            port=port,
            base_url=str(upstream_cfg.get("base_url") or defaults.base_url),
            model=str(upstream_cfg.get("model") or defaults.model),
            max_output_tokens=max_output_tokens,
            api_key_env=str(upstream_cfg.get("api_key_env") or defaults.api_key_env),
            request_timeout=timeout_val,
            log_level=str(
                os.getenv("GROQ_PROXY_LOG_LEVEL")
                or logging_cfg.get("level")
                or defaults.log_level
            ),
            env_values=dict(env_values) if isinstance(env_values, Mapping) else {},
        )

    def resolve_api_key(self) -> str:
        """Look up the upstream credential at request time.

        Raises:
            MissingCredentialError: if neither the environment nor the .env
                file provides a non-empty key.
        """
        api_key = os.getenv(self.api_key_env) or self.env_values.get(self.api_key_env)
        if not api_key:
            raise MissingCredentialError(
                f"{self.api_key_env} environment variable is required"
            )
        return api_key
