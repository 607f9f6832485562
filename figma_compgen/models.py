"""
IR data shapes shared by the visitor, the variable resolver and the generator.

All records are plain dataclasses; `to_dict()` gives the camelCase JSON
form used for dumps.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Union


class PropertyType(str, Enum):
    BOOLEAN = "BOOLEAN"
    TEXT = "TEXT"
    INSTANCE_SWAP = "INSTANCE_SWAP"
    VARIANT = "VARIANT"


@dataclass
class PropertyDefinition:
    type: PropertyType
    default_value: Any = None
    variant_options: Optional[List[str]] = None

    def to_dict(self) -> dict:
        out: Dict[str, Any] = {"type": self.type.value}
        if self.default_value is not None:
            out["defaultValue"] = self.default_value
        if self.variant_options is not None:
            out["variantOptions"] = list(self.variant_options)
        return out


PropertySchema = Dict[str, PropertyDefinition]


def schema_to_dict(schema: PropertySchema) -> dict:
    return {name: definition.to_dict() for name, definition in schema.items()}


@dataclass
class ComponentRef:
    name: str
    id: str
    key: str

    def to_dict(self) -> dict:
        return {"name": self.name, "id": self.id, "key": self.key}


@dataclass
class VisitResult:
    """One IR node. `children` is always present; the rest depends on the kind."""
    name: str
    id: str
    children: List["VisitResult"] = field(default_factory=list)
    css: Optional[Dict[str, str]] = None
    instance_of: Optional[ComponentRef] = None
    property_values: Optional[Dict[str, str]] = None
    property_schema: Optional[PropertySchema] = None
    modes: Optional[Dict[str, str]] = None

    def to_dict(self) -> dict:
        out: Dict[str, Any] = {
            "name": self.name,
            "id": self.id,
            "children": [child.to_dict() for child in self.children],
        }
        if self.css is not None:
            out["css"] = dict(self.css)
        if self.instance_of is not None:
            out["instanceOf"] = self.instance_of.to_dict()
        if self.property_values is not None:
            out["propertyValues"] = dict(self.property_values)
        if self.property_schema is not None:
            out["propertySchema"] = schema_to_dict(self.property_schema)
        if self.modes is not None:
            out["modes"] = dict(self.modes)
        return out


@dataclass
class ResolvedVariable:
    name: str
    resolved_type: str
    values: Dict[str, Any] = field(default_factory=dict)
    description: Optional[str] = None

    def to_dict(self) -> dict:
        out: Dict[str, Any] = {"name": self.name}
        if self.description:
            out["description"] = self.description
        out["resolvedType"] = self.resolved_type
        out["values"] = {
            mode_id: value.to_dict() if isinstance(value, ResolvedVariable) else value
            for mode_id, value in self.values.items()
        }
        return out


@dataclass
class ResolvedVariableCollection:
    name: str
    modes: Dict[str, str] = field(default_factory=dict)
    variables: List[ResolvedVariable] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "modes": dict(self.modes),
            "variables": [variable.to_dict() for variable in self.variables],
        }


@dataclass
class ReactNode:
    """Presentation tree node: a box, an instance leaf or a text leaf."""
    type: str
    css: Optional[Dict[str, str]] = None
    children: Optional[List[Union["ReactNode", str]]] = None

    def to_dict(self) -> dict:
        out: Dict[str, Any] = {"type": self.type}
        if self.css is not None:
            out["css"] = dict(self.css)
        if self.children is not None:
            out["children"] = [
                child if isinstance(child, str) else child.to_dict()
                for child in self.children
            ]
        return out


@dataclass
class GeneratedComponent:
    name: str
    property_schema: PropertySchema
    tree: ReactNode
