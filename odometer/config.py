"""Configuration management for the odometer CLI and demo."""

import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .options import DEFAULT_DURATION_MS

_log = logging.getLogger(__name__)

_DEFAULT_CONFIG: Dict[str, Any] = {
    "odometer": {
        "radix_mark": ",",
        "decimal_mark": ".",
        "currency_symbol": "",
        "currency_position": "start",
        "commafy_leading_zeros": False,
        "min_integers_length": 1,
        "min_decimals_length": 0,
        "animation_duration_ms": DEFAULT_DURATION_MS,
        "easing": "ease-out-quad",
    },
    "display": {
        "fps": 60,
        "theme": "deep-stream",
    },
}


class ConfigManager:
    """Manage odometer configuration from YAML."""

    def __init__(self, config_path: Optional[str] = None):
        self.config_path = Path(config_path or "~/.config/odometer/config.yaml").expanduser()
        self.data = self._load_config()

    def _load_config(self) -> Dict[str, Any]:
        """Load configuration from YAML file."""
        if not self.config_path.exists():
            self._create_default_config()

        return self._read_yaml()

    def _read_yaml(self) -> Dict[str, Any]:
        """Read and parse YAML file."""
        try:
            with open(self.config_path, "r") as f:
                content = yaml.safe_load(f)
                return content if isinstance(content, dict) else {}
        except (OSError, yaml.YAMLError) as e:
            _log.warning("Error reading config %s: %s", self.config_path, e)
            return {}

    def _create_default_config(self) -> None:
        """Create default configuration file."""
        try:
            self.config_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.config_path, "w") as f:
                yaml.dump(_DEFAULT_CONFIG, f, default_flow_style=False, allow_unicode=True)
        except OSError as e:
            _log.warning("Could not write default config %s: %s", self.config_path, e)

    def _resolve_env_var(self, value: Any) -> Any:
        """Resolve environment variable references like ${VAR_NAME}."""
        if not isinstance(value, str) or not value.startswith("${") or not value.endswith("}"):
            return value

        var_name = value[2:-1]
        return os.getenv(var_name, "")

    def get_options(self) -> Dict[str, Any]:
        """Odometer options: file values over defaults, env references resolved."""
        defaults = dict(_DEFAULT_CONFIG["odometer"])
        config = self.data.get("odometer") or {}
        merged = {**defaults, **config}
        return {key: self._resolve_env_var(value) for key, value in merged.items()}

    def get_display_config(self) -> Dict[str, Any]:
        """Display settings (frame rate and theme name)."""
        defaults = dict(_DEFAULT_CONFIG["display"])
        config = self.data.get("display") or {}
        return {**defaults, **config}

    def get_fps(self) -> float:
        try:
            fps = float(self.get_display_config().get("fps", 60))
        except (TypeError, ValueError):
            return 60.0
        return fps if fps > 0 else 60.0

    def get_theme_name(self) -> str:
        return str(self.get_display_config().get("theme", "deep-stream"))
