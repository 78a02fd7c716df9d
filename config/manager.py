"""Configuration manager: load, save and validate the YAML config, resolve credentials.

Uses ruamel.yaml for YAML serialization with comments.
"""

import json
import os
from datetime import date
from pathlib import Path
from typing import Mapping, Optional

from rich.console import Console
from ruamel.yaml import YAML
from ruamel.yaml.comments import CommentedMap

from config.schema import AppConfig
from config.defaults import default_app_config

console = Console()
yaml = YAML()
yaml.default_flow_style = False
yaml.width = 120


class ConfigurationError(ValueError):
    """Invalid config file or missing credentials; raised before any generation."""


# ─── YAML comment layout ───

_YAML_HEADER = f"""\
# ============================================
# NEP Timetable Engine: configuration
# Version: 1.0
# Created: {date.today().isoformat()}
# ============================================
"""

_SECTION_COMMENTS = {
    "remote": (
        "Remote generation",
        "OpenAI-compatible chat-completions service. The API key is read from\n"
        "the environment variable named in api_key_env, never from this file.",
    ),
    "scheduling": (
        "Scheduling",
        "Defaults for generation runs and the heuristic fallback.",
    ),
    "logging": (
        "Logging",
        None,
    ),
}


class ConfigManager:
    CONFIG_DIR = Path("config")
    DEFAULT_CONFIG = CONFIG_DIR / "nep_config.yaml"

    def first_run_check(self) -> bool:
        """True when no config file exists yet."""
        return not self.DEFAULT_CONFIG.exists()

    # ─── Load ───

    def load(self, path: Optional[Path] = None) -> AppConfig:
        """Loads the config from YAML. Validated via Pydantic."""
        target = path or self.DEFAULT_CONFIG
        if not target.exists():
            raise FileNotFoundError(
                f"Config file not found: {target}\n"
                f"Run 'python main.py config init' to create it."
            )
        with open(target, "r", encoding="utf-8") as f:
            raw = yaml.load(f)
        if raw is not None and not isinstance(raw, dict):
            raise ConfigurationError(
                f"Invalid config file: {target}\n"
                f"Top level must be a mapping, got {type(raw).__name__}"
            )
        try:
            return AppConfig.model_validate(dict(raw or {}))
        except Exception as e:
            raise ConfigurationError(
                f"Invalid config file: {target}\n"
                f"Pydantic error: {e}"
            ) from e

    def load_or_default(self, path: Optional[Path] = None) -> AppConfig:
        """Like load(), but falls back to the defaults when no file exists."""
        target = path or self.DEFAULT_CONFIG
        if not target.exists():
            return default_app_config()
        return self.load(target)

    # ─── Save ───

    def save(self, config: AppConfig, path: Optional[Path] = None) -> None:
        """Saves the config as commented YAML."""
        target = path or self.DEFAULT_CONFIG
        target.parent.mkdir(parents=True, exist_ok=True)

        data = self._build_commented_yaml(config)

        with open(target, "w", encoding="utf-8") as f:
            f.write(_YAML_HEADER + "\n")
            yaml.dump(data, f)

        console.print(f"[green]✓[/green] Config saved: {target}")

    def _build_commented_yaml(self, config: AppConfig) -> CommentedMap:
        """Builds the YAML structure with section comments."""
        raw = json.loads(config.model_dump_json())
        cm = CommentedMap(raw)

        for field, (label, comment) in _SECTION_COMMENTS.items():
            cm.yaml_set_comment_before_after_key(
                field,
                before=f"\n─── {label} ───" + (f"\n{comment}" if comment else ""),
            )

        remote_map = CommentedMap(cm["remote"])
        remote_map.yaml_add_eol_comment("low = deterministic", "temperature")
        cm["remote"] = remote_map

        return cm

    # ─── Credentials ───

    def resolve_api_key(
        self, config: AppConfig, environ: Optional[Mapping[str, str]] = None
    ) -> str:
        """Returns the bearer token for the remote service.

        Raises ConfigurationError when the variable is unset or empty.
        """
        env = os.environ if environ is None else environ
        key = (env.get(config.remote.api_key_env) or "").strip()
        if not key:
            raise ConfigurationError(
                f"Remote generation is enabled but ${config.remote.api_key_env} is not set. "
                f"Export the API key or disable remote generation (--offline)."
            )
        return key
