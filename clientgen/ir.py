"""
Intermediate Representation (IR) for client generation.

Language-agnostic representation of the types and actions declared by an API
specification. Builders produce it, emitters consume it, and nothing else
owns it: every generation run creates a fresh set.

The IR design guarantees:
    1. One discriminated record per type, so consumers branch on ``kind``
    2. Ordered properties (declaration order drives emitted member order)
    3. Name-based references, resolved and checked by the emitters
    4. Deterministic serialization

Example:
    Describe a filter type with one query property:
    ```python
    definition = TypeDefinition(
        name="TransfersFilter",
        kind=TypeKind.FILTER,
        properties=[
            PropertyDefinition(
                name="status",
                raw_type="string",
                reference=TypeReference.scalar("string"),
                nullable=True,
            ),
        ],
    )
    ```
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterator, List, Optional
import hashlib
import json
import re


class TypeKind(str, Enum):
    """Discriminant of a :class:`TypeDefinition`."""

    OBJECT = "object"
    RESULT = "result"  # array/collection wrapper
    ENUM = "enum"
    FILTER = "filter"


class ReferenceKind(str, Enum):
    SCALAR = "scalar"
    TYPE = "type"
    ARRAY = "array"


class ScalarType(str, Enum):
    """Primitive scalars every target language knows how to express."""

    STRING = "string"
    INTEGER = "integer"
    NUMBER = "number"
    BOOLEAN = "boolean"
    DATETIME = "datetime"
    DATE = "date"
    ANY = "any"


class HttpMethod(str, Enum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"
    HEAD = "HEAD"
    OPTIONS = "OPTIONS"


@dataclass(frozen=True)
class TypeReference:
    """
    Resolved type of a property or action payload.

    ``name`` is the scalar token for scalar references and the Type Definition
    name for type references; array references carry their element in
    ``items``.
    """

    kind: ReferenceKind
    name: str
    items: Optional["TypeReference"] = None

    @classmethod
    def scalar(cls, scalar: ScalarType) -> "TypeReference":
        return cls(kind=ReferenceKind.SCALAR, name=ScalarType(scalar).value)

    @classmethod
    def to_type(cls, type_name: str) -> "TypeReference":
        return cls(kind=ReferenceKind.TYPE, name=type_name)

    @classmethod
    def array_of(cls, items: "TypeReference") -> "TypeReference":
        return cls(kind=ReferenceKind.ARRAY, name=f"{items.name}[]", items=items)

    @property
    def is_scalar(self) -> bool:
        return self.kind == ReferenceKind.SCALAR

    @property
    def is_array(self) -> bool:
        return self.kind == ReferenceKind.ARRAY

    @property
    def element(self) -> "TypeReference":
        """Innermost non-array reference."""
        reference = self
        while reference.items is not None:
            reference = reference.items
        return reference

    def referenced_type_names(self) -> Iterator[str]:
        """Yield every Type Definition name this reference depends on."""
        element = self.element
        if element.kind == ReferenceKind.TYPE:
            yield element.name

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"kind": self.kind.value, "name": self.name}
        if self.items is not None:
            data["items"] = self.items.to_dict()
        return data


@dataclass
class PropertyDefinition:
    """A member of a type, in declaration order."""

    name: str
    raw_type: str
    reference: TypeReference
    nullable: bool = False
    description: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "raw_type": self.raw_type,
            "reference": self.reference.to_dict(),
            "nullable": self.nullable,
            "description": self.description,
        }


@dataclass
class TypeDefinition:
    """
    Canonical description of one named type.

    Variant-specific fields are only meaningful for their ``kind``:
    ``enum_values`` for enums, ``item_type``/``items_key`` for results,
    ``is_base_filter``/``extends_base_filter`` for filters.
    ``extends_base_filter`` is owned by the orchestrator's correction pass.
    """

    name: str
    kind: TypeKind = TypeKind.OBJECT
    properties: List[PropertyDefinition] = field(default_factory=list)
    parent: Optional[str] = None
    description: Optional[str] = None

    enum_values: List[str] = field(default_factory=list)

    item_type: Optional[TypeReference] = None
    items_key: Optional[str] = None

    is_base_filter: bool = False
    extends_base_filter: bool = False

    @property
    def is_filter(self) -> bool:
        return self.kind == TypeKind.FILTER

    def get_property(self, name: str) -> Optional[PropertyDefinition]:
        """Get property by name."""
        for prop in self.properties:
            if prop.name == name:
                return prop
        return None

    def referenced_type_names(self) -> Iterator[str]:
        """Yield names this definition depends on, in a stable order."""
        if self.parent:
            yield self.parent
        for prop in self.properties:
            yield from prop.reference.referenced_type_names()
        if self.item_type is not None:
            yield from self.item_type.referenced_type_names()

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "name": self.name,
            "kind": self.kind.value,
            "parent": self.parent,
            "description": self.description,
            "properties": [p.to_dict() for p in self.properties],
        }
        if self.kind == TypeKind.ENUM:
            data["enum_values"] = list(self.enum_values)
        elif self.kind == TypeKind.RESULT:
            data["item_type"] = self.item_type.to_dict() if self.item_type else None
            data["items_key"] = self.items_key
        elif self.kind == TypeKind.FILTER:
            data["is_base_filter"] = self.is_base_filter
            data["extends_base_filter"] = self.extends_base_filter
        return data

    def compute_hash(self) -> str:
        """Compute deterministic hash of the definition."""
        normalized = json.dumps(self.to_dict(), sort_keys=True)
        return hashlib.sha256(normalized.encode()).hexdigest()[:16]


_PATH_PARAMETER = re.compile(r"\{([^}]+)\}")


@dataclass
class ResourceAction:
    """One HTTP operation a generated client exposes as a method."""

    client: str
    method: HttpMethod
    path: str
    description: Optional[str] = None
    display_name: Optional[str] = None
    request_type: Optional[TypeReference] = None
    response_type: Optional[TypeReference] = None

    @property
    def path_parameters(self) -> List[str]:
        return _PATH_PARAMETER.findall(self.path)

    def describe(self) -> str:
        return f"action {self.method.value} {self.path}"

    def referenced_type_names(self) -> Iterator[str]:
        if self.request_type is not None:
            yield from self.request_type.referenced_type_names()
        if self.response_type is not None:
            yield from self.response_type.referenced_type_names()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "client": self.client,
            "method": self.method.value,
            "path": self.path,
            "display_name": self.display_name,
            "description": self.description,
            "request_type": self.request_type.to_dict() if self.request_type else None,
            "response_type": self.response_type.to_dict() if self.response_type else None,
        }


def compute_build_hash(
    definitions: List[TypeDefinition], actions: List[ResourceAction]
) -> str:
    """Compute deterministic hash of a whole generation input."""
    normalized = json.dumps(
        {
            "types": [d.to_dict() for d in definitions],
            "actions": [a.to_dict() for a in actions],
        },
        sort_keys=True,
    )
    return hashlib.sha256(normalized.encode()).hexdigest()
