"""
Configuration for the script planner.

Service settings come from the environment (a ``.env`` file at the project
root is loaded first); numeric thresholds of the planning pipeline live in
``config/pipeline.yaml``.
"""

import json
import os
from collections.abc import Callable
from typing import Any

import yaml

from dotenv import load_dotenv

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))


def _flag(raw: str) -> bool:
    return raw.lower() == "true"


# key -> (environment variable, parser, default)
ENV_SETTINGS: dict[str, tuple[str, Callable[[str], Any], Any]] = {
    "database_url": ("DATABASE_URL", str, None),
    "project_store": ("PROJECT_STORE", str.lower, "memory"),
    "debug": ("DEBUG", _flag, False),
    "log_level": ("LOG_LEVEL", str.upper, "INFO"),
    "allowed_origins": ("ALLOWED_ORIGINS", json.loads, ["*"]),
    "deck_fetch_timeout": ("DECK_FETCH_TIMEOUT", int, 30),
    "default_total_seconds": ("DEFAULT_TOTAL_SECONDS", int, 420),
    "default_qa_buffer_seconds": ("DEFAULT_QA_BUFFER_SECONDS", int, 30),
    "chars_per_30_seconds": ("CHARS_PER_30_SECONDS", int, 150),
    "patterns_path": ("SCRIPT_PATTERNS_PATH", str, None),
}


class ServiceConfig:
    """Environment settings plus the YAML pipeline thresholds."""

    def __init__(self) -> None:
        load_dotenv(dotenv_path=os.path.join(PROJECT_ROOT, ".env"), override=False)
        self.config: dict[str, Any] = {}
        self.pipeline_config: dict[str, Any] = {}
        self.pipeline_config_path = os.getenv(
            "PIPELINE_CONFIG_PATH", os.path.join(PROJECT_ROOT, "config", "pipeline.yaml")
        )
        self.reload()

    def load_from_env(self) -> None:
        """Read every known setting, keeping the default for unset variables."""
        values: dict[str, Any] = {}
        for key, (env_name, parse, default) in ENV_SETTINGS.items():
            raw = os.getenv(env_name)
            values[key] = default if raw in (None, "") else parse(raw)
        self.config = values

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value by key.

        Args:
            key: Configuration key
            default: Returned when the key is unknown or its value is None

        Returns:
            Configuration value
        """
        value = self.config.get(key)
        return default if value is None else value

    def set(self, key: str, value: Any) -> None:
        """Override a setting at runtime."""
        self.config[key] = value

    def reload(self) -> None:
        """Re-read the environment and the pipeline file."""
        self.load_from_env()
        self.load_pipeline_config()

    def load_pipeline_config(self) -> None:
        """Load pipeline thresholds; a missing file leaves every default in place."""
        try:
            with open(self.pipeline_config_path, encoding="utf-8") as stream:
                self.pipeline_config = yaml.safe_load(stream) or {}
        except FileNotFoundError:
            self.pipeline_config = {}

    def get_pipeline_value(self, path: str, default: Any = None) -> Any:
        """Look up a dotted path such as ``flags.dense_chars``.

        ``PIPELINE_FLAG_FLAGS_DENSE_CHARS`` in the environment takes precedence.
        """
        override = os.getenv("PIPELINE_FLAG_" + path.replace(".", "_").upper())
        if override is not None:
            return self._coerce_env_value(override, default)

        node: Any = self.pipeline_config
        for part in path.split("."):
            if not isinstance(node, dict) or part not in node:
                return default
            node = node[part]
        return default if node is None else node

    def set_pipeline_config(self, pipeline_config: dict[str, Any]) -> None:
        """Replace the loaded thresholds (used by tests)."""
        self.pipeline_config = pipeline_config

    @staticmethod
    def _coerce_env_value(raw: str, default: Any) -> Any:
        if not raw:
            return default
        if raw.lower() in {"true", "false"}:
            return raw.lower() == "true"
        for number in (int, float):
            try:
                return number(raw)
            except ValueError:
                continue
        return raw


# Global configuration instance
config = ServiceConfig()
