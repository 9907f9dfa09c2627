"""
TypeScript declaration generation.

Emits ``.d.ts`` class declarations from engine class descriptions.
"""

from typing import Any, Dict, Optional

from ...core.config import ConfigManager
from .extractor import SIGNAL_SUFFIX, ClassModelExtractor
from .generator import TypeScriptGenerator
from .jsdoc import convert_markup, render_doc
from .naming import TYPESCRIPT_RESERVED_WORDS, create_typescript_sanitizer
from .types import BUILTIN_TYPES, ImportCollector, TypeMapper


def create_typescript_generator(
    config: Optional[Dict[str, Any]] = None,
) -> TypeScriptGenerator:
    """Create a TypeScript generator from a dict of configuration overrides."""
    generator_config = ConfigManager(environ={}).get_config(config)
    return TypeScriptGenerator(generator_config)


__all__ = [
    "BUILTIN_TYPES",
    "ClassModelExtractor",
    "ImportCollector",
    "SIGNAL_SUFFIX",
    "TYPESCRIPT_RESERVED_WORDS",
    "TypeMapper",
    "TypeScriptGenerator",
    "convert_markup",
    "create_typescript_generator",
    "create_typescript_sanitizer",
    "render_doc",
]
