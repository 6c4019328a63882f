"""Configuration loading for annogen (.annogen.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

CONFIG_FILENAME = ".annogen.yml"
DEFAULT_FLAVOR = "xlua"
DEFAULT_CHUNK_SIZE = 500 * 1024


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class AnnogenConfig:
    """Represents the settings defined in .annogen.yml."""

    root: Path
    flavor: str = DEFAULT_FLAVOR
    output_dir: Optional[Path] = None
    chunk_size: int = DEFAULT_CHUNK_SIZE
    merge_generics: bool = True
    extra_primitives: List[str] = field(default_factory=list)
    exported: Optional[List[str]] = None

    def resolve_output(self, override: Path | str | None = None) -> Path:
        """Return the output directory, preferring an explicit override."""
        if override is not None:
            return Path(override).expanduser()
        if self.output_dir is not None:
            return self.output_dir
        return self.root / "lua_annotations"


def load_config(config_path: Path) -> AnnogenConfig:
    """Load configuration from disk, falling back to defaults when absent."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return AnnogenConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    config = AnnogenConfig(root=root)

    flavor = _as_str(data.get("flavor"))
    if flavor:
        config.flavor = flavor.strip().lower()

    output = _as_str(data.get("output"))
    if output:
        output_path = Path(output).expanduser()
        config.output_dir = output_path if output_path.is_absolute() else root / output_path

    chunk_size = _as_int(data.get("chunk_size"))
    if chunk_size is not None:
        if chunk_size <= 0:
            raise ConfigError("chunk_size must be a positive number of bytes")
        config.chunk_size = chunk_size

    generics = _as_dict(data.get("generics"))
    merge = _as_bool(generics.get("merge")) if generics else None
    if merge is not None:
        config.merge_generics = merge

    references = _as_dict(data.get("references"))
    if references:
        config.extra_primitives = _as_str_list(references.get("primitives"))

    if "exported" in data and data.get("exported") is not None:
        config.exported = _as_str_list(data.get("exported"))

    return config


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    if config_path.suffix not in {".yml", ".yaml"}:
        return (config_path.parent / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded or {}


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float)) and not isinstance(value, bool) else None


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1", "on"}:
            return True
        if lowered in {"false", "no", "0", "off"}:
            return False
    return None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float))]
    return []


__all__ = ["AnnogenConfig", "ConfigError", "load_config", "CONFIG_FILENAME", "DEFAULT_CHUNK_SIZE"]
