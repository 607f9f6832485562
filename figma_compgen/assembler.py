"""
Component set → GeneratedComponent

Takes the first variant of a component set, finds the instance it wraps,
resolves that instance's main component and combines the property
schemas. Unsuitable selections raise `AssemblyError`, whose message is
meant for the user.
"""

from __future__ import annotations

from typing import Optional, Set

from .classifier import NodeKind, node_kind
from .document import soft_lookup
from .models import GeneratedComponent, PropertySchema
from .react_tree import ReactTreeConverter

MAX_SCHEMA_DEPTH = 8


class AssemblyError(Exception):
    """The selection cannot be turned into a component."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ComponentAssembler:

    def __init__(self, document, converter: Optional[ReactTreeConverter] = None):
        self.document = document
        self.converter = converter or ReactTreeConverter(document)

    async def assemble(self, root: dict) -> GeneratedComponent:
        return await self._assemble(root, set())

    async def _assemble(self, root: dict, seen: Set[str]) -> GeneratedComponent:
        if node_kind(root) is not NodeKind.COMPONENT_SET:
            raise AssemblyError("Selection is not a Component Set")
        seen.add(root.get("id", ""))

        variants = root.get("children") or []
        variant = variants[0] if variants else None
        if variant is None or node_kind(variant) is not NodeKind.COMPONENT:
            raise AssemblyError("First variant is not a Component")

        instance = next(
            (child for child in variant.get("children") or [] if node_kind(child) is NodeKind.INSTANCE),
            None,
        )
        if instance is None:
            raise AssemblyError("No instance node in the Component")

        main = await soft_lookup(self.document.get_main_component(instance))
        if main is None or main.node is None:
            raise AssemblyError(f"Main component not found for instance {instance.get('name', '')}")

        set_schema = await soft_lookup(self.document.get_property_definitions(root)) or {}
        component_schema = await soft_lookup(self.document.get_property_definitions(main.node))
        if component_schema is None:
            component_schema = await self._inherited_schema(main.node, seen)

        tree = await self.converter.convert(main.node)
        return GeneratedComponent(
            name=root.get("name", ""),
            property_schema={**set_schema, **component_schema},
            tree=tree,
        )

    async def _inherited_schema(self, component: dict, seen: Set[str]) -> PropertySchema:
        """Re-run assembly on the component's parent; stop on repeats or depth."""
        parent = await soft_lookup(self.document.get_parent(component))
        if parent is None or parent.get("id") in seen or len(seen) >= MAX_SCHEMA_DEPTH:
            return {}
        try:
            return (await self._assemble(parent, seen)).property_schema
        except AssemblyError:
            seen.add(parent.get("id", ""))
            return await soft_lookup(self.document.get_property_definitions(parent)) or {}
