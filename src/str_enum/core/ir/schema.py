"""
Schema types for str-enum IR.

A schema describes one closed enumeration: its variants, the canonical string
each variant projects to, the alternate spellings accepted on lookup, and the
optional features (error type, integer representation, reflection and
serialization adapters) that the generated class carries.

Schema syntax (TOML):

    [[enums]]
    name = "Color"
    error_type = "ColorError"

    [[enums.variants]]
    name = "Red"
    value = "red"
    aliases = ["RED"]
"""

from __future__ import annotations

import builtins
import keyword
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator

from ..errors import SchemaValidationError

# Names the generated class defines itself; a variant of the same name would
# shadow them.
GENERATED_MEMBER_NAMES = frozenset(
    {
        "as_str",
        "try_from_str",
        "all_variants",
        "num_variants",
        "all_values",
        "len",
        "parse",
        "from_bytes",
        "from_os_str",
        "into_repr",
        "discriminant",
        "variant_name",
        "iter_variants",
        "get_str",
        "get_int",
        "get_bool",
        "name",
        "value",
        "mro",
        "ALL_VARIANTS",
        "NUM_VARIANTS",
        "ALL_VALUES",
        "ALL_VALUE_STR",
        "SERDE_EXPECTED_STR",
        "VARIANT_COUNT",
        "VARIANT_NAMES",
        "COUNT",
    }
)

RESERVED_MEMBER_NAMES = GENERATED_MEMBER_NAMES | frozenset(dir(str))

# Module-level names every generated module binds, plus the builtins its
# methods call.
RESERVED_TYPE_NAMES = frozenset(
    {
        "enum",
        "os",
        "runtime",
        "annotations",
        "Any",
        "Final",
        "Iterator",
        "PydanticCustomError",
        "core_schema",
    }
) | frozenset(dir(builtins))


class Capability(str, Enum):
    """Structural capabilities attached to the generated class."""

    EQ = "eq"
    ORD = "ord"
    COPY = "copy"
    DEBUG = "debug"


class ReprType(str, Enum):
    """Integer representation types for discriminants."""

    U8 = "u8"
    U16 = "u16"
    U32 = "u32"
    U64 = "u64"
    USIZE = "usize"
    I8 = "i8"
    I16 = "i16"
    I32 = "i32"
    I64 = "i64"
    ISIZE = "isize"

    @property
    def bits(self) -> int:
        if self in (ReprType.USIZE, ReprType.ISIZE):
            return 64
        return int(self.value[1:])

    @property
    def signed(self) -> bool:
        return self.value.startswith("i")

    @property
    def bounds(self) -> tuple[int, int]:
        """Inclusive (min, max) range of the type."""
        if self.signed:
            return -(1 << (self.bits - 1)), (1 << (self.bits - 1)) - 1
        return 0, (1 << self.bits) - 1


class Visibility(str, Enum):
    """Whether generated names are exported from the module."""

    PUBLIC = "public"
    PRIVATE = "private"


class AliasPolicy(str, Enum):
    """How literals accepted by more than one variant are treated."""

    FIRST_WINS = "first_wins"  # Earliest declaration wins
    REJECT = "reject"  # Schema is invalid


class VariantSpec(BaseModel):
    """
    One enumerated value.

    Attributes:
        name: Member identifier, unique within the schema
        canonical: Text returned by ``as_str``; non-empty, unique
        aliases: Extra spellings accepted on lookup only
        discriminant: Optional explicit integer value
    """

    name: str
    canonical: str
    aliases: tuple[str, ...] = ()
    discriminant: int | None = None

    model_config = ConfigDict(frozen=True)

    @property
    def accepted_forms(self) -> tuple[str, ...]:
        """Canonical string followed by aliases, in match order."""
        return (self.canonical, *self.aliases)


class SchemaSpec(BaseModel):
    """
    A complete enumeration definition.

    Construction validates every build-time invariant; an invalid schema
    raises SchemaValidationError listing all problems found.

    Attributes:
        name: Generated class name
        variants: Variants in declaration order
        repr_type: Integer type for discriminants
        error_type_name: Name of the lookup-failure error class, if any
        capabilities: Requested structural capabilities
        visibility: Whether generated names are exported
        reflection: Emit the reflection adapter
        serialization: Emit the serialization adapter
        alias_policy: Treatment of ambiguous lookup literals
    """

    name: str
    variants: tuple[VariantSpec, ...]
    repr_type: ReprType | None = None
    error_type_name: str | None = None
    capabilities: frozenset[Capability] = Field(default_factory=frozenset)
    visibility: Visibility = Visibility.PUBLIC
    reflection: bool = False
    serialization: bool = False
    alias_policy: AliasPolicy = AliasPolicy.FIRST_WINS

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def check_invariants(self) -> SchemaSpec:
        problems = collect_schema_problems(self)
        if problems:
            raise SchemaValidationError(
                f"Invalid schema '{self.name}': " + "; ".join(problems),
                problems=problems,
            )
        return self

    def has(self, capability: Capability) -> bool:
        return capability in self.capabilities

    @property
    def canonicals(self) -> tuple[str, ...]:
        return tuple(v.canonical for v in self.variants)

    @property
    def variant_names(self) -> tuple[str, ...]:
        return tuple(v.name for v in self.variants)

    def discriminants(self) -> tuple[int, ...] | None:
        """
        Resolve every variant's discriminant.

        Variants without an explicit value take the previous value plus one,
        starting from zero.

        Returns:
            Discriminants in declaration order, or None without a repr type
        """
        if self.repr_type is None:
            return None
        return _resolve_discriminants(self.variants)

    def lookup_table(self) -> dict[str, str]:
        """
        Map every accepted literal to the variant name it resolves to.

        Variants are scanned in declaration order, each canonical string
        before its aliases, and the first variant to claim a literal keeps it.
        """
        table: dict[str, str] = {}
        for variant in self.variants:
            for form in variant.accepted_forms:
                table.setdefault(form, variant.name)
        return table

    def ambiguous_literals(self) -> list[tuple[str, str, str]]:
        """
        Find literals claimed by more than one variant.

        Returns:
            (literal, winning variant, shadowed variant) triples
        """
        owner: dict[str, str] = {}
        found = []
        for variant in self.variants:
            for form in dict.fromkeys(variant.accepted_forms):
                winner = owner.setdefault(form, variant.name)
                if winner != variant.name:
                    found.append((form, winner, variant.name))
        return found

    def shadowed_canonicals(self) -> dict[str, str]:
        """Canonical strings that an earlier variant's alias claims, mapped to that variant."""
        table = self.lookup_table()
        return {
            v.canonical: table[v.canonical]
            for v in self.variants
            if table[v.canonical] != v.name
        }


class SchemaFile(BaseModel):
    """
    Several schemas rendered into a single module.

    Attributes:
        enums: Schemas in file order
    """

    enums: tuple[SchemaSpec, ...]

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def check_names(self) -> SchemaFile:
        if not self.enums:
            raise SchemaValidationError("Schema file defines no enums")

        seen: set[str] = set()
        problems = []
        for schema in self.enums:
            for type_name in (schema.name, schema.error_type_name):
                if type_name is None:
                    continue
                if type_name in seen:
                    problems.append(f"type name '{type_name}' is defined more than once")
                seen.add(type_name)

        prefixes: dict[str, str] = {}
        for schema in self.enums:
            prefix = schema.name.upper()
            if prefix in prefixes and prefixes[prefix] != schema.name:
                problems.append(
                    f"enum names '{prefixes[prefix]}' and '{schema.name}' differ only in case"
                )
            prefixes.setdefault(prefix, schema.name)
        if problems:
            raise SchemaValidationError("; ".join(problems), problems=problems)
        return self

    def get(self, name: str) -> SchemaSpec | None:
        for schema in self.enums:
            if schema.name == name:
                return schema
        return None


def _is_identifier(name: str) -> bool:
    return name.isidentifier() and not keyword.iskeyword(name)


def _is_text(value: str) -> bool:
    try:
        value.encode("utf-8")
    except UnicodeEncodeError:
        return False
    return True


def _resolve_discriminants(variants: tuple[VariantSpec, ...]) -> tuple[int, ...]:
    resolved = []
    next_value = 0
    for variant in variants:
        value = variant.discriminant if variant.discriminant is not None else next_value
        resolved.append(value)
        next_value = value + 1
    return tuple(resolved)


def collect_schema_problems(schema: SchemaSpec) -> list[str]:
    """
    Check every build-time invariant of a schema.

    Returns:
        Human-readable problems; empty when the schema is valid
    """
    problems: list[str] = []

    if not _is_identifier(schema.name):
        problems.append(f"enum name '{schema.name}' is not a valid identifier")
    elif schema.name in RESERVED_TYPE_NAMES:
        problems.append(f"enum name '{schema.name}' is reserved in generated modules")

    if schema.error_type_name is not None:
        if not _is_identifier(schema.error_type_name):
            problems.append(
                f"error type name '{schema.error_type_name}' is not a valid identifier"
            )
        elif schema.error_type_name in RESERVED_TYPE_NAMES:
            problems.append(
                f"error type name '{schema.error_type_name}' is reserved in generated modules"
            )
        elif schema.error_type_name == schema.name:
            problems.append("error type name must differ from the enum name")

    if not schema.variants:
        problems.append("an enumeration needs at least one variant")
        return problems

    names: set[str] = set()
    canonicals: dict[str, str] = {}
    for variant in schema.variants:
        if not _is_identifier(variant.name) or variant.name.startswith("_"):
            problems.append(f"variant name '{variant.name}' is not a valid member name")
        elif variant.name in RESERVED_MEMBER_NAMES:
            problems.append(f"variant name '{variant.name}' is reserved")
        if variant.name in names:
            problems.append(f"variant name '{variant.name}' is declared more than once")
        names.add(variant.name)

        if not variant.canonical:
            problems.append(f"variant '{variant.name}' has an empty canonical string")
        elif variant.canonical in canonicals:
            problems.append(
                f"canonical string {variant.canonical!r} is used by both "
                f"'{canonicals[variant.canonical]}' and '{variant.name}'"
            )
        else:
            canonicals[variant.canonical] = variant.name

        for form in variant.accepted_forms:
            if not _is_text(form):
                problems.append(f"variant '{variant.name}' has non-UTF-8 text {form!r}")

    has_discriminant = any(v.discriminant is not None for v in schema.variants)
    if has_discriminant and schema.repr_type is None:
        problems.append("discriminants require a representation type")

    if schema.repr_type is not None:
        low, high = schema.repr_type.bounds
        values = _resolve_discriminants(schema.variants)
        used: dict[int, str] = {}
        for variant, value in zip(schema.variants, values, strict=True):
            if not low <= value <= high:
                problems.append(
                    f"discriminant {value} of '{variant.name}' does not fit "
                    f"{schema.repr_type.value}"
                )
            if value in used:
                problems.append(
                    f"discriminant {value} is shared by '{used[value]}' and '{variant.name}'"
                )
            used.setdefault(value, variant.name)

    if schema.alias_policy == AliasPolicy.REJECT:
        for literal, winner, loser in schema.ambiguous_literals():
            problems.append(f"literal {literal!r} is accepted by both '{winner}' and '{loser}'")

    return problems
