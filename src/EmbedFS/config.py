"""Define typed configuration for the embedded filesystem.

Use `EmbedFSConfig` to load, validate, and persist runtime settings.
"""

import codecs
import dataclasses
import logging
import os
import threading
from dataclasses import dataclass, field
from typing import List

import yaml

logger = logging.getLogger("embedfs.config")

_SUPPORTED_CONFIG_VERSION = 1
_TRUE_STRINGS = {"1", "true", "yes", "y", "on"}
_FALSE_STRINGS = {"0", "false", "no", "n", "off", ""}


@dataclass
class ScanConfig:
    """Settings for building an asset table from a source directory."""

    source_dir: str = "./static"
    prefix: str = "/static"
    compression_level: int = 9
    include_directories: bool = True
    ignore_patterns: List[str] = field(default_factory=lambda: [
        ".git", ".svn", ".hg", "__pycache__", ".DS_Store", "Thumbs.db", "*.pyc",
    ])
    show_progress: bool = False


@dataclass
class EmbedFSConfig:
    """Master configuration."""

    config_version: int = 1
    use_local: bool = False
    local_root: str = "."
    restrict_local_to_table: bool = False
    manifest_path: str = "./assets/manifest.csv"
    encoding: str = "utf-8"
    log_level: str = "INFO"
    log_file: str = ""

    scan: ScanConfig = field(default_factory=ScanConfig)

    @classmethod
    def from_yaml(cls, path: str) -> "EmbedFSConfig":
        """Load configuration from YAML or return defaults."""
        if not os.path.exists(path):
            logger.info("Config file '%s' not found. Using defaults.", path)
            config = cls()
            config.validate()
            return config
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise ValueError(
                f"Failed to parse YAML config '{path}': {exc}"
            ) from exc
        if not isinstance(data, dict):
            raise ValueError(
                f"Config file '{path}' must contain a YAML mapping, "
                f"got {type(data).__name__}"
            )
        yaml_version = data.get("config_version", 1)
        if isinstance(yaml_version, int) and yaml_version > _SUPPORTED_CONFIG_VERSION:
            logger.warning(
                "Config file '%s' has config_version=%d, but this build only "
                "supports up to version %d. Some settings may be ignored.",
                path, yaml_version, _SUPPORTED_CONFIG_VERSION,
            )
        config = cls()
        _merge_dict_to_dataclass(config, data)
        try:
            config.validate()
        except ValueError as exc:
            raise ValueError(f"{path}: {exc}") from exc
        return config

    def to_yaml(self, path: str):
        """Write configuration to a YAML file."""
        data = dataclasses.asdict(self)
        os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
        ext = os.path.splitext(path)[1]
        tmp_path = f"{path}.tmp.{os.getpid()}.{threading.get_ident()}{ext}"
        try:
            with open(tmp_path, "w", encoding="utf-8") as f:
                yaml.dump(data, f, default_flow_style=False, sort_keys=False)
            os.replace(tmp_path, path)
        finally:
            if os.path.exists(tmp_path):
                try:
                    os.remove(tmp_path)
                except OSError:
                    pass

    def apply_env_overrides(self, environ=None):
        """Apply ``EMBEDFS_USE_LOCAL`` / ``EMBEDFS_LOCAL_ROOT`` overrides."""
        env = os.environ if environ is None else environ
        raw_flag = env.get("EMBEDFS_USE_LOCAL")
        if raw_flag is not None:
            text = raw_flag.strip().lower()
            if text in _TRUE_STRINGS:
                self.use_local = True
            elif text in _FALSE_STRINGS:
                self.use_local = False
            else:
                logger.warning(
                    "Ignoring EMBEDFS_USE_LOCAL=%r (expected a boolean).", raw_flag
                )
        root = env.get("EMBEDFS_LOCAL_ROOT")
        if root:
            self.local_root = os.path.expanduser(root)
        return self

    def validate(self):
        """Validate all settings; raise ValueError listing every problem."""
        errors = []

        if not isinstance(self.config_version, int) or self.config_version < 1:
            errors.append("config_version must be an integer >= 1")
        if not self.local_root:
            errors.append("local_root must be non-empty")
        try:
            codecs.lookup(self.encoding)
        except LookupError:
            errors.append(f"encoding '{self.encoding}' is not a known codec")
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if str(self.log_level).upper() not in valid_levels:
            errors.append(f"log_level must be one of {sorted(valid_levels)}")

        # Scan
        if not (0 <= self.scan.compression_level <= 9):
            errors.append("scan.compression_level must be in [0, 9]")
        if self.scan.prefix and not self.scan.prefix.startswith("/"):
            errors.append("scan.prefix must be empty or start with '/'")
        if self.scan.prefix.endswith("/"):
            errors.append("scan.prefix must not end with '/'")

        if self.restrict_local_to_table and not self.use_local:
            logger.debug(
                "restrict_local_to_table is set but use_local is disabled; "
                "it only applies to the local backend."
            )

        if errors:
            raise ValueError(
                "Configuration validation failed:\n" +
                "\n".join(f"  - {e}" for e in errors)
            )


def _merge_dict_to_dataclass(obj, data: dict, _path: str = ""):
    for key, value in data.items():
        full_key = f"{_path}{key}"
        if not hasattr(obj, key):
            logger.warning("Unknown config key ignored: '%s'", full_key)
            continue
        field_val = getattr(obj, key)
        if dataclasses.is_dataclass(field_val) and isinstance(value, dict):
            _merge_dict_to_dataclass(field_val, value, f"{full_key}.")
            continue
        if value is None and field_val is not None:
            logger.warning(
                "Config key '%s' is null; keeping default %r.", full_key, field_val
            )
            continue
        expected_type = type(field_val)
        # bool is an int subclass; never accept it for int fields
        if expected_type is int and isinstance(value, bool):
            logger.warning(
                "Config key '%s' expects int, got bool (%r); keeping default.",
                full_key, value,
            )
            continue
        if expected_type is int and isinstance(value, float) and value == int(value):
            value = int(value)
        if field_val is not None and not isinstance(value, expected_type):
            logger.warning(
                "Config key '%s' expects %s, got %s (%r); keeping default.",
                full_key, expected_type.__name__, type(value).__name__, value,
            )
            continue
        setattr(obj, key, value)
