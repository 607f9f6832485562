"""
ComponentAssembler 測試：前置條件錯誤訊息、schema 合併與向上繼承的終止。
"""
import asyncio

import pytest

from figma_compgen.assembler import MAX_SCHEMA_DEPTH, AssemblyError, ComponentAssembler
from figma_compgen.document import FigmaDocument
from figma_compgen.models import PropertyType


def assemble(document, node):
    return asyncio.run(ComponentAssembler(document).assemble(node))


def test_assembles_button(document, node):
    component = assemble(document, node("2:0"))
    assert component.name == "Button"
    assert list(component.property_schema) == ["Size", "Disabled", "Label#1:0", "State"]
    assert component.tree.type == "Box"
    assert component.tree.children[0].type == "Typography"


def test_inherits_schema_from_parent_set(document, node):
    schema = assemble(document, node("2:0")).property_schema
    assert schema["Label#1:0"].type is PropertyType.TEXT
    assert schema["Label#1:0"].default_value == "Click"


@pytest.mark.parametrize("node_id, message", [
    ("3:0", "Selection is not a Component Set"),
    ("2:1", "Selection is not a Component Set"),
    ("4:0", "First variant is not a Component"),
    ("6:0", "First variant is not a Component"),
    ("5:0", "No instance node in the Component"),
    ("7:0", "Main component not found for instance Remote"),
])
def test_precondition_errors(document, node, node_id, message):
    with pytest.raises(AssemblyError) as exc:
        assemble(document, node(node_id))
    assert exc.value.message == message


def _set(set_id, instance_target, schema=None):
    node = {
        "id": f"{set_id}:0", "name": f"Set {set_id}", "type": "COMPONENT_SET",
        "children": [{
            "id": f"{set_id}:1", "name": "V=1", "type": "COMPONENT",
            "children": [{"id": f"{set_id}:2", "name": "Inner", "type": "INSTANCE",
                          "componentId": instance_target}],
        }],
    }
    if schema:
        node["componentPropertyDefinitions"] = schema
    return node


def test_component_schema_wins_on_conflict():
    outer = _set(1, "2:1", {"Size": {"type": "TEXT", "defaultValue": "outer"}})
    inner = _set(2, "3:1")
    inner["children"][0]["componentPropertyDefinitions"] = {"Size": {"type": "TEXT", "defaultValue": "inner"}}
    leaf = {"id": "3:1", "name": "Leaf", "type": "COMPONENT", "children": []}
    root = {"id": "0:0", "type": "DOCUMENT", "children": [outer, inner, leaf]}
    component = assemble(FigmaDocument({"document": root}), outer)
    assert component.property_schema["Size"].default_value == "inner"


def test_mutual_inheritance_terminates():
    # set 1 → variant of set 2 → variant of set 1 → …
    a = _set(1, "2:1")
    b = _set(2, "1:1")
    document = FigmaDocument({"document": {"id": "0:0", "type": "DOCUMENT", "children": [a, b]}})
    component = assemble(document, a)
    assert component.property_schema == {}


def test_deep_inheritance_is_bounded():
    depth = MAX_SCHEMA_DEPTH + 4
    sets = [_set(i, f"{i + 1}:1") for i in range(1, depth)]
    sets.append(_set(depth, "999:1", {"Deep": {"type": "BOOLEAN", "defaultValue": True}}))
    sets.append({"id": "999:1", "name": "End", "type": "COMPONENT", "children": []})
    document = FigmaDocument({"document": {"id": "0:0", "type": "DOCUMENT", "children": sets}})
    component = assemble(document, sets[0])
    assert "Deep" not in component.property_schema


def test_shallow_inheritance_reaches_schema():
    sets = [_set(1, "2:1"), _set(2, "3:1", {"Deep": {"type": "BOOLEAN", "defaultValue": True}}),
            {"id": "3:1", "name": "End", "type": "COMPONENT", "children": []}]
    document = FigmaDocument({"document": {"id": "0:0", "type": "DOCUMENT", "children": sets}})
    component = assemble(document, sets[0])
    assert component.property_schema["Deep"].default_value is True
