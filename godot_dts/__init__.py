"""
godot-dts: TypeScript declarations for the Godot engine API.

Converts the engine's XML class reference into one ``.d.ts`` file per
class, an index file and a machine-readable API map.
"""

from .codegen import (
    ApiMap,
    GenerationPipeline,
    GeneratorConfig,
    RunSummary,
    TypeScriptGenerator,
    generate_declaration,
    load_config,
    run_generation,
)

__version__ = "0.1.0"

__all__ = [
    "ApiMap",
    "GenerationPipeline",
    "GeneratorConfig",
    "RunSummary",
    "TypeScriptGenerator",
    "generate_declaration",
    "load_config",
    "run_generation",
]
