"""
str-enum code generation.

Renders validated schemas into Python modules of ``str``-valued enum classes.
"""

from .adapters import AdapterRegistry, EnumAdapter
from .config import GenerationConfig, load_generation_config
from .generator import CompositeGenerator, Generator, GeneratorResult
from .materialize import load_module, materialize
from .module import EnumGenerator, ModuleBuilder, render_module, render_schema
from .runner import GenerationResult, GenerationRunner, VerificationResult, verify_source

__all__ = [
    # Pipeline
    "Generator",
    "GeneratorResult",
    "CompositeGenerator",
    "EnumAdapter",
    "AdapterRegistry",
    "EnumGenerator",
    # Modules
    "ModuleBuilder",
    "render_module",
    "render_schema",
    "load_module",
    "materialize",
    # Runner
    "GenerationConfig",
    "load_generation_config",
    "GenerationRunner",
    "GenerationResult",
    "VerificationResult",
    "verify_source",
]
