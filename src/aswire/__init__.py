"""aswire - ActivityStreams 2.0 domain model and JSON-LD wire conversion."""

from aswire.converters import (
    converter_for,
    converter_of,
)
from aswire.errors import (
    ConversionError,
    InvalidValueError,
    ShapeError,
)
from aswire.formats.json import (
    from_json,
    from_value,
    read_json,
    to_json,
    to_json_bytes,
    to_value,
    write_json,
)
from aswire.lax import (
    decode_many,
    encode_many,
)
from aswire.model import (
    ActorProperties,
    Context,
    DirectIri,
    Entity,
    Iri,
    Key,
    Link,
    MixContext,
    Object,
    ObjectOrLink,
    SingleContext,
    TermDefsContext,
    TypeCoercion,
)

__all__ = [
    # Domain model
    "ActorProperties",
    # Errors
    "ConversionError",
    "Context",
    "DirectIri",
    "Entity",
    "InvalidValueError",
    "Iri",
    "Key",
    "Link",
    "MixContext",
    "Object",
    "ObjectOrLink",
    "ShapeError",
    "SingleContext",
    "TermDefsContext",
    "TypeCoercion",
    # Conversion
    "converter_for",
    "converter_of",
    "decode_many",
    "encode_many",
    "from_json",
    "from_value",
    "read_json",
    "to_json",
    "to_json_bytes",
    "to_value",
    "write_json",
]
