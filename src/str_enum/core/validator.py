"""
Lint checks for str-enum schemas.

Schemas that reach this module already satisfy every build-time invariant.
The checks here report constructs that generate fine but are likely mistakes.
"""

from . import ir
from .tables import VALUE_SEPARATOR


def lint_aliases(schema: ir.SchemaSpec) -> tuple[list[str], list[str]]:
    """
    Check alias declarations.

    Checks:
    - Literals accepted by more than one variant (first declaration wins)
    - Aliases shadowing a later variant's canonical string
    - Aliases repeated within a variant or equal to its own canonical string
    - Empty aliases

    Returns:
        Tuple of (errors, warnings)
    """
    errors: list[str] = []
    warnings: list[str] = []

    canonical_owner = {v.canonical: v.name for v in schema.variants}

    for literal, winner, loser in schema.ambiguous_literals():
        if canonical_owner.get(literal) == loser:
            errors.append(
                f"Enum '{schema.name}': alias {literal!r} of '{winner}' shadows the "
                f"canonical string of '{loser}'; '{loser}' can never be looked up by its own value"
            )
        else:
            warnings.append(
                f"Enum '{schema.name}': literal {literal!r} is accepted by both "
                f"'{winner}' and '{loser}'; lookups resolve to '{winner}'"
            )

    for variant in schema.variants:
        seen: set[str] = set()
        for alias in variant.aliases:
            if alias == "":
                warnings.append(
                    f"Enum '{schema.name}' variant '{variant.name}' accepts the empty string"
                )
            if alias == variant.canonical:
                warnings.append(
                    f"Enum '{schema.name}' variant '{variant.name}' lists its canonical "
                    f"string {alias!r} as an alias"
                )
            elif alias in seen:
                warnings.append(
                    f"Enum '{schema.name}' variant '{variant.name}' repeats alias {alias!r}"
                )
            seen.add(alias)

    return errors, warnings


def lint_values(schema: ir.SchemaSpec) -> tuple[list[str], list[str]]:
    """
    Check canonical strings.

    Checks:
    - Canonical strings containing the value-table separator
    - Ordering requested while canonical strings are not declared in
      lexicographic order

    Returns:
        Tuple of (errors, warnings)
    """
    errors: list[str] = []
    warnings: list[str] = []

    for variant in schema.variants:
        if VALUE_SEPARATOR in variant.canonical:
            warnings.append(
                f"Enum '{schema.name}' variant '{variant.name}': canonical string "
                f"{variant.canonical!r} contains {VALUE_SEPARATOR!r}, so the value "
                f"table cannot be split back into values"
            )

    if schema.has(ir.Capability.ORD):
        canonicals = list(schema.canonicals)
        if canonicals != sorted(canonicals):
            warnings.append(
                f"Enum '{schema.name}': canonical strings are not in lexicographic order, "
                f"so sorting members differs from declaration order"
            )

    return errors, warnings


def lint_schema(schema: ir.SchemaSpec) -> tuple[list[str], list[str]]:
    """
    Run every lint check on a schema.

    Returns:
        Tuple of (errors, warnings)
    """
    all_errors: list[str] = []
    all_warnings: list[str] = []

    for check in (lint_aliases, lint_values):
        errors, warnings = check(schema)
        all_errors.extend(errors)
        all_warnings.extend(warnings)

    return all_errors, all_warnings


def lint_schema_file(schema_file: ir.SchemaFile) -> tuple[list[str], list[str]]:
    """Run every lint check on every schema in a file."""
    all_errors: list[str] = []
    all_warnings: list[str] = []

    for schema in schema_file.enums:
        errors, warnings = lint_schema(schema)
        all_errors.extend(errors)
        all_warnings.extend(warnings)

    return all_errors, all_warnings
