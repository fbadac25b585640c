"""Resource accumulation and output emitters."""

from .arb import build_arb_document, write_arb
from .generator_config import GeneratorConfig, write_generator_config
from .resource_table import ResourceTable

__all__ = [
    "GeneratorConfig",
    "ResourceTable",
    "build_arb_document",
    "write_arb",
    "write_generator_config",
]
