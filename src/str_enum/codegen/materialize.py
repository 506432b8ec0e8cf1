"""
In-process materialization of generated modules.

Executes rendered source into a fresh module object registered in
``sys.modules`` so the classes pickle and copy like classes from any
imported module.
"""

from __future__ import annotations

import enum
import itertools
import logging
import sys
from types import ModuleType

from str_enum.core import ir

from .config import GenerationConfig
from .module import render_module

logger = logging.getLogger(__name__)

_module_ids = itertools.count()


def load_module(
    schema_file: ir.SchemaFile,
    module_name: str | None = None,
    config: GenerationConfig | None = None,
) -> ModuleType:
    """
    Render and execute a module for a SchemaFile.

    Args:
        schema_file: Validated schemas to render
        module_name: Name to register under; a unique name is chosen if None
        config: Optional generation configuration

    Returns:
        The executed module
    """
    source = render_module(schema_file, config)
    name = module_name or f"str_enum_generated_{next(_module_ids)}"

    module = ModuleType(name)
    module.__file__ = f"<str-enum:{name}>"
    code = compile(source, module.__file__, "exec")

    sys.modules[name] = module
    try:
        exec(code, module.__dict__)
    except BaseException:
        del sys.modules[name]
        raise

    logger.debug("Loaded generated module %s", name)
    return module


def materialize(schema: ir.SchemaSpec, module_name: str | None = None) -> type[enum.Enum]:
    """Generate, execute and return the class for a single schema."""
    module = load_module(ir.SchemaFile(enums=(schema,)), module_name)
    return getattr(module, schema.name)
