"""
Generation configuration models.

Parses the [generate] section from a schema file and provides typed
configuration for module generation.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pydantic
from pydantic import BaseModel, ConfigDict

from str_enum.core.errors import make_load_error
from str_enum.core.loader import read_toml

DEFAULT_OUTPUT = "generated/enums.py"


class GenerationConfig(BaseModel):
    """Module generation configuration."""

    model_config = ConfigDict(extra="forbid")

    output: str = DEFAULT_OUTPUT
    module_docstring: str | None = None
    verify: bool = True

    def get_output_path(self, project_root: Path) -> Path:
        """Get absolute output file path."""
        output_path = Path(self.output)
        if output_path.is_absolute():
            return output_path
        return project_root / output_path


def generation_config_from_data(data: dict[str, Any], path: Path) -> GenerationConfig:
    """
    Build a GenerationConfig from already-parsed TOML data.

    Args:
        data: Parsed schema file
        path: Schema file, for error context

    Returns:
        GenerationConfig with parsed values or defaults
    """
    generate_data = data.get("generate", {})

    if not generate_data:
        return GenerationConfig()

    if not isinstance(generate_data, dict):
        raise make_load_error("[generate] must be a table", path)

    try:
        return GenerationConfig(**generate_data)
    except pydantic.ValidationError as e:
        raise make_load_error(f"Invalid [generate] section: {e}", path) from e


def load_generation_config(path: Path) -> GenerationConfig:
    """
    Load generation configuration from a schema file.

    Args:
        path: Path to the TOML schema file

    Returns:
        GenerationConfig with parsed values or defaults
    """
    if not path.exists():
        return GenerationConfig()

    return generation_config_from_data(read_toml(path), path)
