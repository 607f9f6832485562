"""Node kind classification: maps a Figma node type to its traversal policy."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class NodeKind(str, Enum):
    INSTANCE = "INSTANCE"
    COMPONENT = "COMPONENT"
    COMPONENT_SET = "COMPONENT_SET"
    CONTAINER = "CONTAINER"
    TEXT = "TEXT"
    VECTOR = "VECTOR"
    OTHER = "OTHER"


@dataclass(frozen=True)
class NodePolicy:
    kind: NodeKind
    extracts_css: bool
    short_circuits: bool = False
    visits_children: bool = True
    first_child_only: bool = False


_TYPE_MAP = {
    "INSTANCE": NodeKind.INSTANCE,
    "COMPONENT": NodeKind.COMPONENT,
    "COMPONENT_SET": NodeKind.COMPONENT_SET,
    "FRAME": NodeKind.CONTAINER,
    "GROUP": NodeKind.CONTAINER,
    "SECTION": NodeKind.CONTAINER,
    "TEXT": NodeKind.TEXT,
    "VECTOR": NodeKind.VECTOR,
    "BOOLEAN_OPERATION": NodeKind.VECTOR,
    "STAR": NodeKind.VECTOR,
    "LINE": NodeKind.VECTOR,
    "ELLIPSE": NodeKind.VECTOR,
    "POLYGON": NodeKind.VECTOR,
    "RECTANGLE": NodeKind.VECTOR,
}

POLICIES = {
    NodeKind.INSTANCE: NodePolicy(NodeKind.INSTANCE, extracts_css=True),
    NodeKind.COMPONENT: NodePolicy(NodeKind.COMPONENT, extracts_css=False),
    NodeKind.COMPONENT_SET: NodePolicy(NodeKind.COMPONENT_SET, extracts_css=False, first_child_only=True),
    NodeKind.CONTAINER: NodePolicy(NodeKind.CONTAINER, extracts_css=True),
    NodeKind.TEXT: NodePolicy(NodeKind.TEXT, extracts_css=False),
    NodeKind.VECTOR: NodePolicy(NodeKind.VECTOR, extracts_css=True, short_circuits=True, visits_children=False),
    NodeKind.OTHER: NodePolicy(NodeKind.OTHER, extracts_css=False, visits_children=False),
}

assert set(POLICIES) == set(NodeKind), "every NodeKind needs a policy"


def node_kind(node: dict) -> NodeKind:
    return _TYPE_MAP.get(node.get("type", ""), NodeKind.OTHER)


def classify(node: dict) -> NodePolicy:
    return POLICIES[node_kind(node)]


def has_children(node: dict) -> bool:
    return bool(node.get("children"))
