"""
Configuration management for declaration generation.

Handles loading and merging configuration from defaults, JSON files,
environment variables and explicit overrides.
"""

import json
import os
import re
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, Set, Union

from .schema import as_list


class ConfigError(Exception):
    """Exception raised for configuration-related errors."""

    pass


# Primitive and helper types the hand-written prelude supplies
PRELUDE_CLASS_NAMES = ("int", "float", "bool", "Signal")

# Descriptions of ambient namespaces rather than classes
AMBIENT_CLASS_NAMES = ("@GlobalScope",)

# Engine callbacks that scripts override; public despite the leading underscore
LIFECYCLE_CALLBACK_NAMES = (
    "_ready",
    "_process",
    "_physics_process",
    "_input",
    "_init",
    "_enter_tree",
    "_exit_tree",
    "_get_configuration_warnings",
    "_shortcut_input",
    "_unhandled_input",
    "_unhandled_key_input",
)

DEFAULT_REMOTE_BASE_URL = (
    "https://raw.githubusercontent.com/godotengine/godot/{tag}/doc/classes"
)

ENV_TAG = "GODOT_TAG"
ENV_SUBSET = "SUBSET"
ENV_CLASSES_DIR = "GODOT_DOCS_DIR"

_SUBSET_SEPARATORS = re.compile(r"[,\s]+")


def parse_subset(raw: Union[str, Iterable[str], None]) -> Optional[Set[str]]:
    """
    Parse a subset allow-list.

    Accepts a comma/whitespace separated string or a list of names.
    Returns None when no names remain, meaning "no filtering".
    """
    if raw is None:
        return None

    if isinstance(raw, str):
        items = _SUBSET_SEPARATORS.split(raw)
    else:
        items = []
        for item in as_list(raw):
            items.extend(_SUBSET_SEPARATORS.split(str(item)))

    names = {item.strip() for item in items if item and item.strip()}
    return names or None


@dataclass
class GeneratorConfig:
    """Configuration of one generation run."""

    # Input corpus
    godot_tag: str = "4.4.3-stable"
    classes_dir: str = "build/godot/doc/classes"
    subset: Optional[List[str]] = None
    remote_base_url: Optional[str] = None

    # Output
    output_root: str = "gen"
    core_module: str = "../../src-template/core"
    signal_module: str = "../../src-template/signal"

    # Exclusion lists
    excluded_classes: List[str] = field(default_factory=lambda: list(PRELUDE_CLASS_NAMES))
    skipped_class_names: List[str] = field(default_factory=lambda: list(AMBIENT_CLASS_NAMES))
    public_underscore_names: List[str] = field(
        default_factory=lambda: list(LIFECYCLE_CALLBACK_NAMES)
    )

    # Documentation
    docs_url: str = "https://docs.godotengine.org/en/stable"

    # Type handling
    type_overrides: Dict[str, str] = field(default_factory=dict)

    # Custom settings
    custom: Dict[str, Any] = field(default_factory=dict)

    @property
    def output_dir(self) -> Path:
        """Every run writes below a directory named after the corpus tag."""
        return Path(self.output_root) / self.godot_tag

    @property
    def subset_names(self) -> Optional[Set[str]]:
        return set(self.subset) if self.subset else None

    @property
    def description_base_url(self) -> str:
        base = self.remote_base_url or DEFAULT_REMOTE_BASE_URL
        return base.format(tag=self.godot_tag).rstrip("/")


class ConfigManager:
    """Manages configuration loading and merging."""

    def __init__(self, environ: Optional[Mapping[str, str]] = None):
        """
        Initialize configuration manager.

        Args:
            environ: Environment to read overrides from (defaults to os.environ)
        """
        self._environ = environ

    def get_config(
        self,
        custom_config: Optional[Dict[str, Any]] = None,
        config_file: Optional[Union[str, Path]] = None,
    ) -> GeneratorConfig:
        """
        Get the merged configuration.

        Precedence, lowest first: defaults, config file, environment,
        custom overrides. Overrides whose value is None are ignored.

        Args:
            custom_config: Explicit overrides (e.g. CLI flags)
            config_file: Path to JSON configuration file

        Returns:
            Merged configuration
        """
        merged: Dict[str, Any] = {}

        if config_file:
            merged.update(self._load_config_file(config_file))

        merged.update(self._environment_overrides())

        if custom_config:
            merged.update({k: v for k, v in custom_config.items() if v is not None})

        return self._dict_to_config(merged)

    def _environment_overrides(self) -> Dict[str, Any]:
        environ = os.environ if self._environ is None else self._environ
        overrides: Dict[str, Any] = {}

        if environ.get(ENV_TAG):
            overrides["godot_tag"] = environ[ENV_TAG]
        if environ.get(ENV_CLASSES_DIR):
            overrides["classes_dir"] = environ[ENV_CLASSES_DIR]
        if environ.get(ENV_SUBSET):
            overrides["subset"] = environ[ENV_SUBSET]

        return overrides

    def _load_config_file(self, config_path: Union[str, Path]) -> Dict[str, Any]:
        """Load configuration from JSON file."""
        path = Path(config_path)

        if not path.exists():
            raise ConfigError(f"Configuration file not found: {path}")

        if not path.suffix.lower() == ".json":
            raise ConfigError(f"Configuration file must be JSON: {path}")

        try:
            with open(path, "r", encoding="utf-8") as f:
                config = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in configuration file {path}: {str(e)}") from e
        except OSError as e:
            raise ConfigError(f"Failed to load configuration file {path}: {str(e)}") from e

        if not isinstance(config, dict):
            raise ConfigError(f"Configuration file must contain a JSON object: {path}")

        return config

    def _dict_to_config(self, config_dict: Dict[str, Any]) -> GeneratorConfig:
        """Convert dictionary to GeneratorConfig instance."""
        known_fields = {f.name for f in fields(GeneratorConfig)}

        config_args = {}
        custom_args = {}

        for key, value in config_dict.items():
            if key in known_fields:
                config_args[key] = value
            else:
                custom_args[key] = value

        if "subset" in config_args:
            names = parse_subset(config_args["subset"])
            config_args["subset"] = sorted(names) if names else None

        for key in ("excluded_classes", "skipped_class_names", "public_underscore_names"):
            if key in config_args:
                config_args[key] = [str(v) for v in as_list(config_args[key])]

        # Add custom fields to the custom dict
        if custom_args:
            existing_custom = dict(config_args.get("custom", {}))
            existing_custom.update(custom_args)
            config_args["custom"] = existing_custom

        return GeneratorConfig(**config_args)

    def validate_config(self, config: GeneratorConfig) -> List[str]:
        """
        Validate a configuration.

        Returns:
            List of validation warnings
        """
        warnings = []

        if not config.godot_tag.strip():
            warnings.append("Empty godot_tag")

        for name in config.subset or []:
            if not name.isidentifier():
                warnings.append(f"Subset entry is not a class name: {name}")

        if config.subset:
            excluded = set(config.excluded_classes) | set(config.skipped_class_names)
            for name in config.subset:
                if name in excluded:
                    warnings.append(f"Subset entry {name} is excluded from generation")

        return warnings


# Global configuration manager instance
_config_manager = None


def get_config_manager() -> ConfigManager:
    """Get the global configuration manager instance."""
    global _config_manager
    if _config_manager is None:
        _config_manager = ConfigManager()
    return _config_manager


def load_config(
    custom_config: Optional[Dict[str, Any]] = None,
    config_file: Optional[Union[str, Path]] = None,
) -> GeneratorConfig:
    """
    Convenience function to load configuration.

    Args:
        custom_config: Custom configuration overrides
        config_file: Path to JSON configuration file

    Returns:
        Merged configuration
    """
    manager = get_config_manager()
    return manager.get_config(custom_config, config_file)
