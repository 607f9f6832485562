"""
共用測試資料：一個模擬 GET /v1/files/:key 的設計檔與本地變數回應。
"""
import pytest

from figma_compgen.document import FigmaDocument

BLACK = {"type": "SOLID", "color": {"r": 0, "g": 0, "b": 0, "a": 1}}
BLUE = {"type": "SOLID", "color": {"r": 0, "g": 0, "b": 1, "a": 1}}


def alias(variable_id):
    return {"type": "VARIABLE_ALIAS", "id": variable_id}


def make_design_file():
    base_button = {
        "id": "1:0", "name": "Base Button", "type": "COMPONENT_SET",
        "componentPropertyDefinitions": {
            "Label#1:0": {"type": "TEXT", "defaultValue": "Click"},
            "State": {"type": "VARIANT", "defaultValue": "Default", "variantOptions": ["Default", "Hover"]},
        },
        "children": [
            {
                "id": "1:1", "name": "State=Default", "type": "COMPONENT",
                "children": [
                    {
                        "id": "1:2", "name": "Label", "type": "TEXT", "characters": "Click",
                        "fills": [BLACK], "style": {"fontFamily": "Inter", "fontSize": 14},
                    },
                ],
            },
            {"id": "1:3", "name": "State=Hover", "type": "COMPONENT", "children": []},
        ],
    }
    button = {
        "id": "2:0", "name": "Button", "type": "COMPONENT_SET",
        "componentPropertyDefinitions": {
            "Size": {"type": "VARIANT", "defaultValue": "Small", "variantOptions": ["Small", "Large"]},
            "Disabled": {"type": "BOOLEAN", "defaultValue": False},
        },
        "children": [
            {
                "id": "2:1", "name": "Size=Small", "type": "COMPONENT",
                "explicitVariableModes": {"VariableCollectionId:1": "1:0"},
                "children": [
                    {
                        "id": "2:2", "name": "Base Button", "type": "INSTANCE", "componentId": "1:1",
                        "componentProperties": {
                            "State": {"type": "VARIANT", "value": "Default"},
                            "Label#1:0": {"type": "TEXT", "value": "Click"},
                        },
                        "fills": [BLUE], "cornerRadius": 4,
                        "children": [{"id": "I2:2;1:2", "name": "Label", "type": "TEXT", "characters": "Click"}],
                    },
                ],
            },
            {
                "id": "2:3", "name": "Size=Large", "type": "COMPONENT",
                "children": [{"id": "2:4", "name": "Base Button", "type": "INSTANCE", "componentId": "1:1", "children": []}],
            },
        ],
    }
    card = {
        "id": "3:0", "name": "Card", "type": "FRAME",
        "absoluteBoundingBox": {"x": 0, "y": 0, "width": 320, "height": 200},
        "layoutMode": "VERTICAL", "itemSpacing": 8,
        "paddingTop": 16, "paddingRight": 16, "paddingBottom": 16, "paddingLeft": 16,
        "fills": [{"type": "SOLID", "color": {"r": 1, "g": 1, "b": 1, "a": 1}}],
        "children": [
            {"id": "3:1", "name": "Title", "type": "TEXT", "characters": "Hello"},
            {
                "id": "3:2", "name": "Icon", "type": "VECTOR",
                "children": [{"id": "3:3", "name": "Path", "type": "VECTOR"}],
            },
            {"id": "3:4", "name": "Remote", "type": "INSTANCE", "componentId": "9:9", "children": []},
            {"id": "3:5", "name": "Missing", "type": "INSTANCE", "componentId": "9:0", "children": []},
            {"id": "3:6", "name": "Sticky", "type": "STICKY", "children": [{"id": "3:7", "name": "x", "type": "TEXT"}]},
        ],
    }
    empty_set = {"id": "4:0", "name": "Empty Set", "type": "COMPONENT_SET", "children": []}
    no_instance = {
        "id": "5:0", "name": "No Instance", "type": "COMPONENT_SET",
        "children": [
            {"id": "5:1", "name": "Kind=A", "type": "COMPONENT",
             "children": [{"id": "5:2", "name": "Text", "type": "TEXT", "characters": "A"}]},
        ],
    }
    frame_first = {
        "id": "6:0", "name": "Broken Set", "type": "COMPONENT_SET",
        "children": [{"id": "6:1", "name": "Frame", "type": "FRAME", "children": []}],
    }
    remote_set = {
        "id": "7:0", "name": "Remote Set", "type": "COMPONENT_SET",
        "children": [
            {"id": "7:1", "name": "Kind=A", "type": "COMPONENT",
             "children": [{"id": "7:2", "name": "Remote", "type": "INSTANCE", "componentId": "9:9"}]},
        ],
    }
    return {
        "name": "Design System",
        "document": {
            "id": "0:0", "name": "Document", "type": "DOCUMENT",
            "children": [
                {
                    "id": "0:1", "name": "Page 1", "type": "CANVAS",
                    "children": [base_button, button, card, empty_set, no_instance, frame_first, remote_set],
                },
            ],
        },
        "components": {
            "1:1": {"key": "k-base-default", "name": "State=Default", "componentSetId": "1:0"},
            "1:3": {"key": "k-base-hover", "name": "State=Hover", "componentSetId": "1:0"},
            "9:9": {"key": "k-remote", "name": "Remote Icon", "remote": True},
        },
    }


def make_variables():
    red = {"r": 1, "g": 0, "b": 0, "a": 1}
    return {
        "status": 200,
        "error": False,
        "meta": {
            "variables": {
                "VariableID:1:1": {"name": "color/primary", "resolvedType": "COLOR", "valuesByMode": {"1:0": red}},
                "VariableID:1:2": {"name": "button/bg", "resolvedType": "COLOR",
                                   "description": "Button background",
                                   "valuesByMode": {"1:0": alias("VariableID:1:1")}},
                "VariableID:1:3": {"name": "cycle/a", "resolvedType": "COLOR", "valuesByMode": {"1:0": alias("VariableID:1:4")}},
                "VariableID:1:4": {"name": "cycle/b", "resolvedType": "COLOR", "valuesByMode": {"1:0": alias("VariableID:1:3")}},
                "VariableID:1:5": {"name": "self", "resolvedType": "FLOAT", "valuesByMode": {"1:0": alias("VariableID:1:5")}},
                "VariableID:1:6": {"name": "dangling", "resolvedType": "FLOAT", "valuesByMode": {"1:0": alias("VariableID:9:9")}},
                "VariableID:1:7": {"name": "spacing/md", "resolvedType": "FLOAT", "valuesByMode": {"1:0": 16, "1:1": 24}},
            },
            "variableCollections": {
                "VariableCollectionId:1": {
                    "name": "Theme",
                    "modes": [{"modeId": "1:0", "name": "Light"}, {"modeId": "1:1", "name": "Compact"}],
                    "variableIds": ["VariableID:1:1", "VariableID:1:2", "VariableID:8:8", "VariableID:1:7"],
                },
            },
        },
    }


@pytest.fixture
def design_file():
    return make_design_file()


@pytest.fixture
def variables_data():
    return make_variables()


@pytest.fixture
def document(design_file, variables_data):
    return FigmaDocument(design_file, variables_data)


@pytest.fixture
def node(document):
    """依 id 取得節點."""
    return document.get_node
