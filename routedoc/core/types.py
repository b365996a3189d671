"""
Routedoc — Type Descriptors
=============================

What:  Documentation-friendly descriptions of data shapes (string, integer,
       boolean, array, object, map) rendered as OpenAPI schema fragments.
How:   TypeDescriptor is a frozen dataclass. Factory functions build the base
       shapes; `.description()`, `.example()` and `.named()` return modified
       copies and never touch the original.

Example:
    category = obj({"id": integer(), "name": string()}).named("Category")
    tags = array(category).description("Tags attached to the pet")
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Tuple

from routedoc.exceptions import AggregationInconsistencyError


class Kind(str, Enum):
    STRING = "string"
    INTEGER = "integer"
    NUMBER = "number"
    BOOLEAN = "boolean"
    ARRAY = "array"
    OBJECT = "object"
    MAP = "map"


_UNSET = object()


@dataclass(frozen=True)
class TypeDescriptor:
    """
    An immutable schema node.

    Attributes:
        kind:          Which shape this node describes.
        items:         Element type for ARRAY, value type for MAP.
        properties:    Ordered (name, descriptor) pairs for OBJECT.
        doc:           Human description, rendered as "description".
        sample:        Example value, rendered as "example" when set.
        name:          Component name; named nodes are emitted once under
                       components.schemas and referenced with $ref.
    """

    kind: Kind
    items: Optional["TypeDescriptor"] = None
    properties: Tuple[Tuple[str, "TypeDescriptor"], ...] = ()
    doc: Optional[str] = None
    sample: Any = field(default=_UNSET, hash=False, repr=False)
    name: Optional[str] = None

    # ── Builders ──────────────────────────────────────────────────────────

    def description(self, text: str) -> "TypeDescriptor":
        return replace(self, doc=text)

    def example(self, value: Any) -> "TypeDescriptor":
        return replace(self, sample=value)

    def named(self, name: str) -> "TypeDescriptor":
        return replace(self, name=name)

    @property
    def has_example(self) -> bool:
        return self.sample is not _UNSET

    # ── Rendering ─────────────────────────────────────────────────────────

    def to_schema(self, components: Optional[Dict[str, Dict[str, Any]]] = None) -> Dict[str, Any]:
        """
        Render this node as an OpenAPI schema fragment.

        When `components` is given, named nodes are registered there and a
        `$ref` is returned in their place. Registering the same name twice with
        a different definition raises AggregationInconsistencyError.
        """
        if self.name is not None and components is not None:
            definition = self._render(components)
            existing = components.get(self.name)
            if existing is not None and existing != definition:
                raise AggregationInconsistencyError(
                    ("components", "schemas", self.name),
                    "schema registered twice with different definitions",
                )
            components[self.name] = definition
            return {"$ref": f"#/components/schemas/{self.name}"}
        return self._render(components)

    def _render(self, components: Optional[Dict[str, Dict[str, Any]]]) -> Dict[str, Any]:
        if self.kind is Kind.ARRAY:
            schema: Dict[str, Any] = {"type": "array", "items": self.items.to_schema(components)}
        elif self.kind is Kind.OBJECT:
            schema = {
                "type": "object",
                "properties": {key: value.to_schema(components) for key, value in self.properties},
            }
        elif self.kind is Kind.MAP:
            schema = {"type": "object", "additionalProperties": self.items.to_schema(components)}
        else:
            schema = {"type": self.kind.value}

        if self.doc is not None:
            schema["description"] = self.doc
        if self.has_example:
            schema["example"] = self.sample
        return schema


# ══════════════════════════════════════════════════════════════════════════
# Factories
# ══════════════════════════════════════════════════════════════════════════

def string() -> TypeDescriptor:
    return TypeDescriptor(Kind.STRING)


def integer() -> TypeDescriptor:
    return TypeDescriptor(Kind.INTEGER)


def number() -> TypeDescriptor:
    return TypeDescriptor(Kind.NUMBER)


def boolean() -> TypeDescriptor:
    return TypeDescriptor(Kind.BOOLEAN)


def array(items: TypeDescriptor) -> TypeDescriptor:
    return TypeDescriptor(Kind.ARRAY, items=items)


def obj(properties: Mapping[str, TypeDescriptor]) -> TypeDescriptor:
    """Object with a fixed, ordered set of properties."""
    return TypeDescriptor(Kind.OBJECT, properties=tuple(properties.items()))


def map_of(values: TypeDescriptor) -> TypeDescriptor:
    """Object with arbitrary string keys, all mapping to `values`."""
    return TypeDescriptor(Kind.MAP, items=values)
