"""
ir_builder.py: Figma scene nodes → IR (VisitResult tree)

Per-kind extraction:
  INSTANCE       css + instanceOf + propertyValues, all children
  COMPONENT      propertyValues + modes, all children
  COMPONENT_SET  propertySchema, first variant only
  CONTAINER      css, all children
  TEXT           children if any
  VECTOR         css, never descends
  other          warning, childless
"""

import asyncio
import json
import os
from datetime import datetime, timezone
from typing import List

from .classifier import NodeKind, classify, has_children
from .document import soft_lookup
from .models import ComponentRef, VisitResult


def _warn(msg: str) -> None:
    print(f"   ⚠️  [ir] {msg}")


class TreeVisitor:

    def __init__(self, document):
        self.document = document

    async def visit(self, node: dict) -> VisitResult:
        policy = classify(node)
        doc = self.document
        result = VisitResult(name=node.get("name", ""), id=node.get("id", ""))

        if policy.extracts_css:
            result.css = await soft_lookup(doc.get_css(node))

        if policy.kind is NodeKind.INSTANCE:
            main = await soft_lookup(doc.get_main_component(node))
            if main is not None:
                result.instance_of = ComponentRef(name=main.name, id=main.id, key=main.key)
            result.property_values = await soft_lookup(doc.get_variant_properties(node))
        elif policy.kind is NodeKind.COMPONENT:
            result.property_values = await soft_lookup(doc.get_variant_properties(node))
            result.modes = await soft_lookup(doc.get_variable_modes(node))
        elif policy.kind is NodeKind.COMPONENT_SET:
            result.property_schema = await soft_lookup(doc.get_property_definitions(node))
        elif policy.kind is NodeKind.OTHER:
            _warn(f"未處理的節點類型 {node.get('type')} '{result.name}' ({result.id})，視為無子節點")

        if policy.short_circuits or not policy.visits_children or not has_children(node):
            return result

        children = node["children"]
        if policy.first_child_only:
            children = children[:1]
        # gather keeps argument order, so host child order is preserved
        result.children = list(await asyncio.gather(*(self.visit(child) for child in children)))
        return result


# ════════════════════════════════════════════════════════════
# High-level API
# ════════════════════════════════════════════════════════════

async def build_ir_from_selection(document, selection: List[dict]) -> List[VisitResult]:
    """One IR per selected root, visited one after another."""
    visitor = TreeVisitor(document)
    results = []
    for node in selection:
        results.append(await visitor.visit(node))
    return results


def format_tree(result: VisitResult, level: int = 0) -> str:
    css = json.dumps(result.css, ensure_ascii=False, separators=(",", ":")) if result.css is not None else ""
    lines = [f"{'  ' * level}-{result.name}{css}"]
    for child in result.children:
        lines.append(format_tree(child, level + 1))
    return "\n".join(lines)


def save_ir(results: List[VisitResult], output_dir: str = ".figma-compgen") -> str:
    os.makedirs(output_dir, exist_ok=True)
    payload = {
        "generatedAt": datetime.now(timezone.utc).isoformat(),
        "roots": [result.to_dict() for result in results],
    }
    ir_path = os.path.join(output_dir, "selection-ir.json")
    with open(ir_path, 'w', encoding='utf-8') as f:
        json.dump(payload, f, indent=2, ensure_ascii=False)
    return ir_path
