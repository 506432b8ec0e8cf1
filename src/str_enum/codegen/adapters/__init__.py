"""
Enum adapters for generating string enumeration modules.

Each adapter generates one slice of the enum:
- Core type: class, members, lookup, listings
- Protocols: display, hashing, comparison, views, capabilities
- Error type: lookup-failure error and parsing entry points
- Reflection: VariantMetadata bindings
- Serialization: pydantic hooks

Import order is registration order, which is the order adapters run in.
"""

from .base import AdapterRegistry, EnumAdapter
from .core_type import CoreTypeGenerator
from .protocols import ProtocolAdapterGenerator
from .error_type import ErrorTypeGenerator
from .reflection import ReflectionAdapterGenerator
from .serialization import SerializationAdapterGenerator

__all__ = [
    # Base classes
    "EnumAdapter",
    "AdapterRegistry",
    # Implementations
    "CoreTypeGenerator",
    "ProtocolAdapterGenerator",
    "ErrorTypeGenerator",
    "ReflectionAdapterGenerator",
    "SerializationAdapterGenerator",
]
