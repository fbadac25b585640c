"""Configuration loading for l10n-extract (.l10n-extract.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

CONFIG_FILENAME = ".l10n-extract.yml"


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class ExtractorConfig:
    """Settings for one extraction run, rooted at the Flutter project."""

    root: Path
    input_dir: str = "lib"
    output_dir: str = "lib/l10n"
    template_arb: str = "app_en.arb"
    class_name: str = "AppLocalizations"
    locale: str = "en"
    import_uri: Optional[str] = None
    replace: bool = False
    dry_run: bool = False
    check_dependencies: bool = True
    run_generator: bool = True
    generator_timeout: float = 300.0
    exclude_paths: List[str] = field(default_factory=list)
    ignore_patterns: List[str] = field(default_factory=list)

    @property
    def input_path(self) -> Path:
        return self.root / self.input_dir

    @property
    def output_path(self) -> Path:
        return self.root / self.output_dir

    @property
    def arb_path(self) -> Path:
        return self.output_path / self.template_arb

    def with_overrides(self, **overrides: Any) -> ExtractorConfig:
        """Return a copy with every non-None override applied."""
        known = {item.name for item in fields(self)}
        unknown = set(overrides) - known
        if unknown:
            raise ConfigError(f"Unknown configuration fields: {', '.join(sorted(unknown))}")
        applied = {name: value for name, value in overrides.items() if value is not None}
        return replace(self, **applied)


def load_config(config_path: Path) -> ExtractorConfig:
    """Load configuration from disk, falling back to defaults when absent."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return ExtractorConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    config = ExtractorConfig(root=root)
    return config.with_overrides(
        input_dir=_as_str(data.get("input")),
        output_dir=_as_str(data.get("output")),
        template_arb=_as_str(data.get("template_arb")),
        class_name=_as_str(data.get("class_name")),
        locale=_as_str(data.get("locale")),
        import_uri=_as_str(data.get("import_uri")),
        replace=_as_bool(data.get("replace")),
        check_dependencies=_as_bool(data.get("check_dependencies")),
        run_generator=_as_bool(data.get("run_generator")),
        generator_timeout=_as_float(data.get("generator_timeout")),
        exclude_paths=_as_str_list(data.get("exclude_paths")) or None,
        ignore_patterns=_as_str_list(data.get("ignore_patterns")) or None,
    )


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    if config_path.name != CONFIG_FILENAME:
        return (config_path.parent / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Any:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return {} if loaded is None else loaded


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float)) and not isinstance(value, bool) else None


def _as_float(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return None
    return None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
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


def as_mapping(config: ExtractorConfig) -> Dict[str, Any]:
    """Return the configuration as plain values for logging."""
    return {item.name: getattr(config, item.name) for item in fields(config)}


__all__ = ["CONFIG_FILENAME", "ConfigError", "ExtractorConfig", "as_mapping", "load_config"]
