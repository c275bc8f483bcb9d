"""Project Configuration for quickgen

Manages .quickgen/config.yaml settings for languages, flags and the
generator executable.
"""

import copy
import logging
from pathlib import Path

import yaml

from quickgen.command.arguments import SOURCE_LANGUAGES, TARGET_LANGUAGES
from quickgen.core.errors import ConfigError

logger = logging.getLogger(__name__)


class ProjectConfig:
    """Manages project configuration for quickgen"""

    DEFAULT_CONFIG = {
        "executable": "quicktype",
        "source_language": "json",
        "target_language": "typescript",
        "top_level": "Root",
        "flags": [],
        "renderer_options": {},
    }

    # Renderer options that make sense per target language
    LANGUAGE_DEFAULTS = {
        "typescript": {"just-types": True},
        "javascript": {},
        "python": {"python-version": "3.7"},
        "go": {"package": "main"},
        "java": {"package": "io.quicktype"},
        "csharp": {"namespace": "QuickType"},
    }

    def __init__(self, base_dir: Path | None = None):
        self.base_dir = base_dir or Path.cwd()
        self.config_dir = self.base_dir / ".quickgen"
        self.config_file = self.config_dir / "config.yaml"

    def exists(self) -> bool:
        """Check if config file exists"""
        return self.config_file.exists()

    def load(self) -> dict:
        """Load config, returning defaults if not exists"""
        if not self.config_file.exists():
            return copy.deepcopy(self.DEFAULT_CONFIG)

        try:
            with open(self.config_file) as f:
                config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"Cannot parse {self.config_file}: {e}") from e

        if config is None:
            config = {}
        if not isinstance(config, dict):
            raise ConfigError(f"{self.config_file} must contain a mapping")

        # Merge with defaults for missing keys
        merged = copy.deepcopy(self.DEFAULT_CONFIG)
        merged.update(config)
        # Empty YAML entries (`flags:`) load as None
        if merged["flags"] is None:
            merged["flags"] = []
        if merged["renderer_options"] is None:
            merged["renderer_options"] = {}
        self.validate(merged)

        merged["renderer_options"] = dict(merged["renderer_options"])
        logger.info("Loaded config from %s", self.config_file)
        return merged

    def validate(self, config: dict) -> None:
        """Check value types, raising ConfigError on the first bad one"""
        for key in ("executable", "source_language", "target_language", "top_level"):
            if not isinstance(config[key], str):
                raise ConfigError(
                    f"'{key}' must be a string, got {type(config[key]).__name__}",
                    detail=key,
                )

        flags = config["flags"]
        if not isinstance(flags, list) or not all(isinstance(f, str) for f in flags):
            raise ConfigError("'flags' must be a list of strings", detail="flags")

        options = config["renderer_options"]
        if not isinstance(options, dict) or not all(isinstance(k, str) for k in options):
            raise ConfigError("'renderer_options' must be a mapping of option names", detail="renderer_options")

    def save(self, config: dict) -> None:
        """Save config to file"""
        self.config_dir.mkdir(parents=True, exist_ok=True)
        with open(self.config_file, 'w') as f:
            yaml.dump(config, f, allow_unicode=True, default_flow_style=False, sort_keys=False)
        logger.info("Saved config to %s", self.config_file)

    def init(self, target_language: str = "typescript", source_language: str = "json",
             top_level: str | None = None, flags: list[str] | None = None) -> dict:
        """Initialize project config"""
        if source_language not in SOURCE_LANGUAGES:
            raise ConfigError(f"Unknown source language '{source_language}'", detail=SOURCE_LANGUAGES)
        if target_language not in TARGET_LANGUAGES:
            raise ConfigError(f"Unknown target language '{target_language}'", detail=TARGET_LANGUAGES)

        config = copy.deepcopy(self.DEFAULT_CONFIG)
        config["source_language"] = source_language
        config["target_language"] = target_language
        config["top_level"] = top_level or config["top_level"]
        config["flags"] = list(flags or [])
        config["renderer_options"] = dict(self.LANGUAGE_DEFAULTS.get(target_language, {}))

        self.save(config)
        return config
