"""
Figma document query surface

Wraps a `GET /v1/files/:key` response (and optionally the
`/variables/local` response) and answers the lookups the pipeline needs:
CSS, main component, property definitions, variant values, variable modes,
parents and local variables. Nodes stay the raw REST dicts and are never
mutated.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Awaitable, Dict, List, Optional, TypeVar

from .models import PropertyDefinition, PropertySchema, PropertyType

T = TypeVar("T")


class HostLookupError(LookupError):
    """Raised when a node does not belong to the queried document."""


@dataclass
class MainComponent:
    id: str
    name: str
    key: str
    node: Optional[dict] = None


def _warn(msg: str) -> None:
    print(f"   ⚠️  [document] {msg}")


async def soft_lookup(lookup: Awaitable[T]) -> Optional[T]:
    """Await a document query; a node outside the document counts as a miss."""
    try:
        return await lookup
    except HostLookupError:
        return None


class FigmaDocument:

    def __init__(self, file_data: dict, variables_data: Optional[dict] = None):
        self.file_data = file_data or {}
        self.root = self.file_data.get("document", {})
        self.components: Dict[str, dict] = self.file_data.get("components", {}) or {}
        meta = (variables_data or {}).get("meta", {}) or {}
        self._variables: Dict[str, dict] = meta.get("variables", {}) or {}
        self._collections: Dict[str, dict] = meta.get("variableCollections", {}) or {}
        self._nodes: Dict[str, dict] = {}
        self._parents: Dict[str, str] = {}
        self._index(self.root, None)

    def _index(self, node: dict, parent_id: Optional[str]) -> None:
        node_id = node.get("id")
        if node_id is None:
            return
        self._nodes[node_id] = node
        if parent_id is not None:
            self._parents[node_id] = parent_id
        for child in node.get("children", []) or []:
            self._index(child, node_id)

    def _require(self, node: dict) -> dict:
        node_id = node.get("id")
        if node_id is None or self._nodes.get(node_id) is not node:
            raise HostLookupError(f"node {node_id!r} is not part of this document")
        return node

    # ─── Selection ───

    def get_node(self, node_id: str) -> Optional[dict]:
        return self._nodes.get(node_id)

    def select(self, node_ids: List[str]) -> List[dict]:
        """Return nodes for the given ids in request order, skipping unknown ids."""
        selection = []
        for node_id in node_ids:
            node = self._nodes.get(node_id)
            if node is None:
                _warn(f"找不到節點 '{node_id}'，已略過")
                continue
            selection.append(node)
        return selection

    # ─── Async query surface ───

    async def get_css(self, node: dict) -> Dict[str, str]:
        return extract_css(self._require(node))

    async def get_parent(self, node: dict) -> Optional[dict]:
        parent_id = self._parents.get(self._require(node)["id"])
        return self._nodes.get(parent_id) if parent_id else None

    async def get_main_component(self, node: dict) -> Optional[MainComponent]:
        component_id = self._require(node).get("componentId")
        if not component_id:
            return None
        meta = self.components.get(component_id, {})
        local = self._nodes.get(component_id)
        if local is None and not meta:
            return None
        return MainComponent(
            id=component_id,
            name=(local or {}).get("name") or meta.get("name", ""),
            key=meta.get("key", ""),
            node=local,
        )

    async def get_property_definitions(self, node: dict) -> Optional[PropertySchema]:
        raw = self._require(node).get("componentPropertyDefinitions")
        if not raw:
            return None
        return parse_property_definitions(raw)

    async def get_variant_properties(self, node: dict) -> Optional[Dict[str, str]]:
        node = self._require(node)
        if node.get("type") == "INSTANCE":
            values = {
                name: str(prop.get("value"))
                for name, prop in (node.get("componentProperties") or {}).items()
                if prop.get("type") == PropertyType.VARIANT.value
            }
            return values or None
        if node.get("type") == "COMPONENT":
            parent = self._nodes.get(self._parents.get(node["id"], ""))
            if parent is None or parent.get("type") != "COMPONENT_SET":
                return None
            return parse_variant_name(node.get("name", "")) or None
        return None

    async def get_variable_modes(self, node: dict) -> Optional[Dict[str, str]]:
        modes = self._require(node).get("explicitVariableModes")
        return dict(modes) if modes else None

    def local_variables(self) -> Dict[str, dict]:
        return dict(self._variables)

    def local_collections(self) -> Dict[str, dict]:
        return dict(self._collections)


def parse_property_definitions(raw: dict) -> PropertySchema:
    schema: PropertySchema = {}
    for name, definition in raw.items():
        try:
            prop_type = PropertyType(definition.get("type"))
        except ValueError:
            _warn(f"不支援的屬性類型 '{definition.get('type')}'（{name}），已略過")
            continue
        options = definition.get("variantOptions")
        schema[name] = PropertyDefinition(
            type=prop_type,
            default_value=definition.get("defaultValue"),
            variant_options=list(options) if options is not None else None,
        )
    return schema


def parse_variant_name(name: str) -> Dict[str, str]:
    """'Size=Small, State=Hover' → {'Size': 'Small', 'State': 'Hover'}."""
    values = {}
    for part in name.split(","):
        if "=" not in part:
            continue
        key, value = part.split("=", 1)
        if key.strip():
            values[key.strip()] = value.strip()
    return values


# ════════════════════════════════════════════════════════════
# CSS extraction
# ════════════════════════════════════════════════════════════

def _px(value: float) -> str:
    return f"{round(value, 2):g}px"


def _color(color: dict, opacity: Optional[float] = None) -> str:
    r, g, b = (round(color.get(ch, 0) * 255) for ch in ("r", "g", "b"))
    a = color.get("a", 1) if opacity is None else opacity * color.get("a", 1)
    if a >= 1:
        return f"#{r:02X}{g:02X}{b:02X}"
    return f"rgba({r}, {g}, {b}, {round(a, 2):g})"


def _first_solid(paints: list) -> Optional[dict]:
    for paint in paints or []:
        if paint.get("visible", True) and paint.get("type") == "SOLID":
            return paint
    return None


def _css_align(value: str, axis: str) -> str:
    if value == "CENTER":
        return "center"
    if value == "MAX":
        return "flex-end"
    if value == "SPACE_BETWEEN" and axis == "primary":
        return "space-between"
    if value == "BASELINE" and axis == "counter":
        return "baseline"
    return "flex-start"


def extract_css(node: dict) -> Dict[str, str]:
    """Derive a CSS property map from a REST node, in a stable key order."""
    css: Dict[str, str] = {}
    is_text = node.get("type") == "TEXT"

    bbox = node.get("absoluteBoundingBox") or {}
    if bbox.get("width"):
        css["width"] = _px(bbox["width"])
    if bbox.get("height"):
        css["height"] = _px(bbox["height"])

    layout_mode = node.get("layoutMode")
    if layout_mode in ("HORIZONTAL", "VERTICAL"):
        css["display"] = "flex"
        css["flex-direction"] = "row" if layout_mode == "HORIZONTAL" else "column"
        if node.get("layoutWrap") == "WRAP":
            css["flex-wrap"] = "wrap"
        css["justify-content"] = _css_align(node.get("primaryAxisAlignItems", "MIN"), "primary")
        css["align-items"] = _css_align(node.get("counterAxisAlignItems", "MIN"), "counter")
        if node.get("itemSpacing"):
            css["gap"] = _px(node["itemSpacing"])
        padding = [node.get(f"padding{side}", 0) or 0 for side in ("Top", "Right", "Bottom", "Left")]
        if any(padding):
            css["padding"] = " ".join(_px(p) for p in padding)

    fill = _first_solid(node.get("fills"))
    if fill:
        css["color" if is_text else "background"] = _color(fill.get("color", {}), fill.get("opacity"))

    stroke = _first_solid(node.get("strokes"))
    if stroke:
        css["border"] = f"{_px(node.get('strokeWeight', 1))} solid {_color(stroke.get('color', {}), stroke.get('opacity'))}"

    radii = node.get("rectangleCornerRadii")
    if radii and any(radii):
        css["border-radius"] = " ".join(_px(r) for r in radii)
    elif node.get("cornerRadius"):
        css["border-radius"] = _px(node["cornerRadius"])

    shadows = []
    for effect in node.get("effects", []) or []:
        if effect.get("visible", True) and effect.get("type") in ("DROP_SHADOW", "INNER_SHADOW"):
            off = effect.get("offset", {})
            inset = "inset " if effect["type"] == "INNER_SHADOW" else ""
            shadows.append(
                f"{inset}{_px(off.get('x', 0))} {_px(off.get('y', 0))} "
                f"{_px(effect.get('radius', 0))} {_px(effect.get('spread', 0))} "
                f"{_color(effect.get('color', {}))}"
            )
    if shadows:
        css["box-shadow"] = ", ".join(shadows)

    opacity = node.get("opacity")
    if opacity is not None and opacity < 1:
        css["opacity"] = f"{round(opacity, 2):g}"

    if is_text:
        style = node.get("style") or {}
        if style.get("fontFamily"):
            css["font-family"] = style["fontFamily"]
        if style.get("fontSize"):
            css["font-size"] = _px(style["fontSize"])
        if style.get("fontWeight"):
            css["font-weight"] = f"{style['fontWeight']:g}"
        if style.get("lineHeightPx"):
            css["line-height"] = _px(style["lineHeightPx"])
        if style.get("letterSpacing"):
            css["letter-spacing"] = _px(style["letterSpacing"])
        align = style.get("textAlignHorizontal")
        if align and align != "LEFT":
            css["text-align"] = "justify" if align == "JUSTIFIED" else align.lower()

    return css


_ID_RE = re.compile(r"^I?\d+[:\-]\d+")


def normalize_node_id(node_id: str) -> str:
    """URL form '12-34' → API form '12:34'."""
    node_id = node_id.strip()
    if _ID_RE.match(node_id) and ":" not in node_id:
        return node_id.replace("-", ":")
    return node_id
