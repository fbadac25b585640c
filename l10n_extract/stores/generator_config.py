"""Writer for the ``flutter gen-l10n`` configuration file (l10n.yaml)."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict

import yaml

L10N_CONFIG_FILENAME = "l10n.yaml"
DEFAULT_OUTPUT_FILE = "app_localizations.dart"


@dataclass(frozen=True)
class GeneratorConfig:
    """Fields understood by ``flutter gen-l10n``."""

    arb_dir: str
    template_arb_file: str
    output_class: str
    output_localization_file: str = DEFAULT_OUTPUT_FILE
    nullable_getter: bool = False
    synthetic_package: bool = False

    @property
    def output_dir(self) -> str:
        return f"{self.arb_dir}/generated"

    def to_mapping(self) -> Dict[str, Any]:
        return {
            "arb-dir": self.arb_dir,
            "template-arb-file": self.template_arb_file,
            "output-class": self.output_class,
            "output-localization-file": self.output_localization_file,
            "output-dir": self.output_dir,
            "nullable-getter": self.nullable_getter,
            "synthetic-package": self.synthetic_package,
        }


def write_generator_config(config: GeneratorConfig, path: Path) -> Path:
    """Write ``config`` to ``path``, replacing any existing file.

    Overwriting keeps ``output-class`` in sync with the class the rewritten
    sources reference.
    """
    text = yaml.safe_dump(config.to_mapping(), sort_keys=False, default_flow_style=False)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


__all__ = [
    "DEFAULT_OUTPUT_FILE",
    "GeneratorConfig",
    "L10N_CONFIG_FILENAME",
    "write_generator_config",
]
