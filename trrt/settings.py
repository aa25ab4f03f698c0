"""
Settings - Resolver configuration

Values come from (highest first) explicit arguments, a YAML/JSON config
file, TRRT_* environment variables or a .env file, and the defaults below.
"""

from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml
from pydantic import ValidationError, field_validator
from pydantic_settings import BaseSettings

from .exceptions import ConfigurationError
from .glossary import load_yaml


class ResolverSettings(BaseSettings):
    """Term resolver settings"""

    # ========== Locations ==========
    scopedir: Optional[Path] = None  # directory holding saf.yaml
    output: Optional[Path] = None  # root directory for rewritten files
    glob: str = "*"  # input files

    # ========== Resolution ==========
    vsntag: str = "latest"  # used when a term ref has no version
    interpreter: str = "default"  # default | alt | custom pattern
    converter: str = "default"  # default | markdown | http | essif | custom template

    # ========== Logging ==========
    log_level: str = "INFO"

    class Config:
        env_prefix = "TRRT_"
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"

    @field_validator("glob", "vsntag", "interpreter", "converter", mode="before")
    @classmethod
    def coerce_text(cls, v):
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v

    def require_paths(self):
        """Fail unless both the scope directory and output root are set."""
        missing = [
            f"--{name} <path>"
            for name in ("output", "scopedir")
            if getattr(self, name) is None
        ]
        if missing:
            raise ConfigurationError(
                "Required options are missing. Please provide: " + ", ".join(missing)
            )


def load_config_file(path: Union[str, Path]) -> Dict[str, Any]:
    """Read a YAML (or JSON) config file into a dict."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = load_yaml(f)
    except OSError as e:
        raise ConfigurationError(f"Failed to read config file {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Failed to parse config file {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"Config file {path} must contain a mapping")
    return data


def load_settings(
    config_path: Optional[Union[str, Path]] = None,
    **overrides: Any,
) -> ResolverSettings:
    """
    Build settings from a config file plus explicit overrides.

    Overrides that are None are ignored, so unset command line options
    do not hide config file values.
    """
    values: Dict[str, Any] = {}
    if config_path:
        values.update(load_config_file(config_path))
    values.update({k: v for k, v in overrides.items() if v is not None})

    try:
        return ResolverSettings(**values)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e
