"""
Godot declaration generation module.

Generates TypeScript declarations and an API map from engine class
descriptions.
"""

from .api_map import ApiMap, ApiMapEntry, ApiMapItem, build_class_entry
from .core.config import ConfigError, GeneratorConfig, load_config
from .core.generator import CodeGenerator, GenerationResult, GeneratorError, generate_code
from .core.schema import ClassDescription, DescriptionError
from .languages.typescript import TypeScriptGenerator, create_typescript_generator
from .pipeline import GenerationPipeline, RunSummary, run_generation


def generate_declaration(raw_text, config=None):
    """
    Generate the declaration of a single class description.

    Args:
        raw_text: XML text of one class description
        config: Generator configuration dict or GeneratorConfig

    Returns:
        GenerationResult with generated code
    """
    if isinstance(config, GeneratorConfig):
        generator = TypeScriptGenerator(config)
    else:
        generator = create_typescript_generator(config)
    return generate_code(generator, raw_text)


__all__ = [
    "ApiMap",
    "ApiMapEntry",
    "ApiMapItem",
    "ClassDescription",
    "CodeGenerator",
    "ConfigError",
    "DescriptionError",
    "GenerationPipeline",
    "GenerationResult",
    "GeneratorConfig",
    "GeneratorError",
    "RunSummary",
    "TypeScriptGenerator",
    "build_class_entry",
    "create_typescript_generator",
    "generate_code",
    "generate_declaration",
    "load_config",
    "run_generation",
]
