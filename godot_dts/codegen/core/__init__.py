"""
Core code generation components.

Provides base classes and utilities used by the language generators.
"""

from .generator import CodeGenerator, GeneratorError, GenerationResult, generate_code
from .schema import (
    ClassDescription,
    ConstantEntry,
    DescriptionError,
    MemberEntry,
    MethodEntry,
    Param,
    SignalEntry,
    as_list,
    parse_description,
)
from .naming import NameSanitizer, Visibility, to_camel_case
from .config import (
    ConfigError,
    ConfigManager,
    GeneratorConfig,
    load_config,
    parse_subset,
)
from .templates import TemplateEngine, TemplateError, create_template_engine

__all__ = [
    # Base generator interface
    "CodeGenerator",
    "GeneratorError",
    "GenerationResult",
    "generate_code",
    # Class model
    "ClassDescription",
    "ConstantEntry",
    "DescriptionError",
    "MemberEntry",
    "MethodEntry",
    "Param",
    "SignalEntry",
    "as_list",
    "parse_description",
    # Naming utilities - language-agnostic
    "NameSanitizer",
    "Visibility",
    "to_camel_case",
    # Configuration system
    "GeneratorConfig",
    "ConfigManager",
    "ConfigError",
    "load_config",
    "parse_subset",
    # Template system
    "TemplateEngine",
    "TemplateError",
    "create_template_engine",
]
