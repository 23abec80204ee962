import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from pydantic import BaseModel, Field, field_validator

from .errors import MoodMetricsError

# Default configuration values
DEFAULT_CONFIG_PATH = "moodmetrics.config.yaml"
DEFAULT_PROJECT_ROOT = None
DEFAULT_LANGUAGE = "typescript"
DEFAULT_IGNORED_PATTERNS = ["venv", "**/__pycache__", ".git", ".idea", ".vscode", "node_modules", "dist", "build"]
DEFAULT_MEMBER_KEY = "name"
DEFAULT_UNRESOLVED_BASES = "ignore"
DEFAULT_MEMOIZE = True
DEFAULT_OUTPUT_FORMAT = "text"
DEFAULT_PRECISION = None

SUPPORTED_LANGUAGES = ("typescript", "python", "schema")
SUPPORTED_MEMBER_KEYS = ("name", "signature")
SUPPORTED_UNRESOLVED_BASES = ("ignore", "error")
SUPPORTED_OUTPUT_FORMATS = ("text", "json", "markdown")


class MoodConfig(BaseModel):
    """
    Central configuration model for mood-metrics.
    """
    project_root: Optional[str] = Field(default=DEFAULT_PROJECT_ROOT)
    language: str = Field(default=DEFAULT_LANGUAGE)
    ignored_patterns: List[str] = Field(default_factory=lambda: list(DEFAULT_IGNORED_PATTERNS))

    # Engine
    member_key: str = Field(default=DEFAULT_MEMBER_KEY)
    unresolved_bases: str = Field(default=DEFAULT_UNRESOLVED_BASES)
    memoize: bool = DEFAULT_MEMOIZE

    # Output
    output_format: str = Field(default=DEFAULT_OUTPUT_FORMAT)
    precision: Optional[int] = Field(default=DEFAULT_PRECISION, ge=0)

    # Allow extra fields for flexibility
    class Config:
        extra = "allow"

    @field_validator("language")
    @classmethod
    def _check_language(cls, value: str) -> str:
        value = value.lower()
        if value not in SUPPORTED_LANGUAGES:
            raise ValueError(f"language must be one of {', '.join(SUPPORTED_LANGUAGES)}")
        return value

    @field_validator("member_key")
    @classmethod
    def _check_member_key(cls, value: str) -> str:
        if value not in SUPPORTED_MEMBER_KEYS:
            raise ValueError(f"member_key must be one of {', '.join(SUPPORTED_MEMBER_KEYS)}")
        return value

    @field_validator("unresolved_bases")
    @classmethod
    def _check_unresolved_bases(cls, value: str) -> str:
        if value not in SUPPORTED_UNRESOLVED_BASES:
            raise ValueError(f"unresolved_bases must be one of {', '.join(SUPPORTED_UNRESOLVED_BASES)}")
        return value

    @field_validator("output_format")
    @classmethod
    def _check_output_format(cls, value: str) -> str:
        if value not in SUPPORTED_OUTPUT_FORMATS:
            raise ValueError(f"output_format must be one of {', '.join(SUPPORTED_OUTPUT_FORMATS)}")
        return value

    def require_project_root(self) -> Path:
        if not self.project_root:
            raise MoodMetricsError(
                "project_root is not set",
                hint=f"Pass a path on the command line or set project_root in {DEFAULT_CONFIG_PATH}.",
            )
        return Path(self.project_root).resolve()


def load_config(
    config_path: Optional[str] = None,
    cli_args: Optional[Dict[str, Any]] = None
) -> MoodConfig:
    """
    Resolve the analysis settings.

    Command-line values that are not None win over the YAML file, which wins
    over the DEFAULT_* values above. An unreadable file is logged and skipped.

    Args:
        config_path: YAML file to read. Falls back to 'moodmetrics.config.yaml'
            in the working directory.
        cli_args: Overrides keyed by MoodConfig field name.

    Returns:
        MoodConfig: The validated configuration.
    """
    config_data: Dict[str, Any] = {}

    target_path = config_path if config_path else DEFAULT_CONFIG_PATH
    path_obj = Path(target_path)

    if path_obj.exists() and path_obj.is_file():
        try:
            with open(path_obj, 'r', encoding='utf-8') as f:
                file_data = yaml.safe_load(f)
            if isinstance(file_data, dict):
                config_data.update(file_data)
            elif file_data is not None:
                logging.warning(f"Ignoring config file {target_path}: top level is not a mapping")
            logging.info(f"Loaded configuration from {target_path}")
        except (OSError, yaml.YAMLError) as e:
            logging.warning(f"Failed to load config file {target_path}: {e}")
    elif config_path:
        logging.warning(f"Config file not found at explicit path: {config_path}")
    else:
        logging.info(f"No config file found at {DEFAULT_CONFIG_PATH}, using defaults.")

    if cli_args:
        for key, value in cli_args.items():
            if value is not None:
                config_data[key] = value

    return MoodConfig(**config_data)
