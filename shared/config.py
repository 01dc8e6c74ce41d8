"""
Configuration management for services.
"""

import json
import os
from typing import Any

import yaml

from dotenv import load_dotenv

# Credential key each narration provider needs before it can be used.
PROVIDER_CREDENTIAL_KEYS = {
    "gemini": "gemini_api_key",
    "openai": "openai_api_key",
    "azure": "azure_openai_key",
}


class ServiceConfig:
    """Configuration management for services using environment variables."""

    def __init__(self, env_path: str | None = None) -> None:
        """Initialize configuration by loading environment variables."""
        # .env sits next to app.py at the project root
        env_path = env_path or os.path.abspath(os.path.join(os.path.dirname(__file__), "../.env"))
        load_dotenv(dotenv_path=env_path, override=True)
        self.config: dict[str, Any] = {}
        self.narration_config: dict[str, Any] = {}
        self.narration_config_path = os.getenv(
            "NARRATION_CONFIG_PATH",
            os.path.join(os.path.dirname(__file__), "../config/narration.yaml"),
        )
        self.load_from_env()
        self.load_narration_config()

    def load_from_env(self) -> None:
        """Load configuration from environment variables."""
        self.config = {
            "gemini_api_key": os.getenv("GEMINI_API_KEY"),
            "openai_api_key": os.getenv("OPENAI_API_KEY"),
            "azure_openai_key": os.getenv("AZURE_OPENAI_KEY"),
            "azure_openai_endpoint": os.getenv("AZURE_OPENAI_ENDPOINT"),
            "azure_openai_deployment": os.getenv("AZURE_OPENAI_DEPLOYMENT"),
            "narration_provider": os.getenv("NARRATION_PROVIDER", "gemini").lower(),
            "narration_model": os.getenv("NARRATION_MODEL"),
            "host": os.getenv("HOST", "0.0.0.0"),
            "port": int(os.getenv("PORT", "3000")),
            "static_dir": os.getenv("STATIC_DIR", "."),
            "debug": os.getenv("DEBUG", "false").lower() == "true",
            "log_level": os.getenv("LOG_LEVEL", "INFO"),
            "allowed_origins": json.loads(os.getenv("ALLOWED_ORIGINS", '["*"]')),
            "navigation_timeout_seconds": float(os.getenv("NAVIGATION_TIMEOUT_SECONDS", "30")),
            "narration_timeout_seconds": float(os.getenv("NARRATION_TIMEOUT_SECONDS", "60")),
            "pacing_interval_seconds": float(os.getenv("PACING_INTERVAL_SECONDS", "0.5")),
            "max_batch_slides": int(os.getenv("MAX_BATCH_SLIDES", "50")),
        }

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value by key.

        Args:
            key: Configuration key
            default: Default value if key not found

        Returns:
            Configuration value
        """
        value = self.config.get(key)
        return default if value is None else value

    def set(self, key: str, value: Any) -> None:
        """
        Set configuration value.

        Args:
            key: Configuration key
            value: Configuration value
        """
        self.config[key] = value

    def reload(self) -> None:
        """Reload configuration from environment variables."""
        self.load_from_env()
        self.load_narration_config()

    def credential_configured(self, provider: str | None = None) -> bool:
        """Whether the credential for ``provider`` (default: active provider) is set."""
        provider = (provider or self.get("narration_provider", "gemini")).lower()
        key = PROVIDER_CREDENTIAL_KEYS.get(provider)
        return bool(key and self.get(key))

    def load_narration_config(self) -> None:
        """Load narration prompt and generation settings from YAML file."""
        path = os.path.abspath(self.narration_config_path)
        try:
            with open(path, "r", encoding="utf-8") as stream:
                data = yaml.safe_load(stream) or {}
        except FileNotFoundError:
            data = {}
        self.narration_config = data

    def get_narration_value(self, path: str, default: Any = None) -> Any:
        """Retrieve a narration configuration value via dotted path."""
        env_override_key = f"NARRATION_FLAG_{path.replace('.', '_').upper()}"
        env_value = os.getenv(env_override_key)
        if env_value is not None:
            return self._coerce_env_value(env_value, default)

        node: Any = self.narration_config
        for part in path.split("."):
            if isinstance(node, dict) and part in node:
                node = node[part]
            else:
                return default
        return node if node is not None else default

    def set_narration_config(self, narration_config: dict[str, Any]) -> None:
        """Override narration configuration (useful for tests)."""
        self.narration_config = narration_config

    @staticmethod
    def _coerce_env_value(raw: str, default: Any) -> Any:
        lowered = raw.lower()
        if lowered in {"true", "false"}:
            return lowered == "true"
        if lowered.lstrip("-").replace(".", "", 1).isdigit():
            try:
                return float(lowered) if "." in lowered else int(lowered)
            except ValueError:
                return raw
        return raw or default
