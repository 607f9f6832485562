"""
Generator: GeneratedComponent → React component source (TSX).

Pure string builders; the same component always renders to the same text.
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Union

from .models import GeneratedComponent, PropertyDefinition, PropertyType, ReactNode

INDENT = "  "
RENDERABLE_TYPE = "React.ReactNode"


def format_component_name(name: str) -> str:
    compact = "".join(name.split())
    return compact[:1].upper() + compact[1:]


def format_prop_name(name: str) -> str:
    # 'Label#12:3' → 'label'; Figma appends '#id' to disambiguate non-variant props
    compact = "".join(name.split("#", 1)[0].split())
    return compact[:1].lower() + compact[1:]


def _quote(value: Any) -> str:
    text = str(value).replace("\\", "\\\\").replace("'", "\\'")
    return f"'{text}'"


def format_prop_type(definition: PropertyDefinition) -> str:
    if definition.type is PropertyType.BOOLEAN:
        return "boolean"
    if definition.type is PropertyType.INSTANCE_SWAP:
        return RENDERABLE_TYPE
    if definition.type is PropertyType.VARIANT and definition.variant_options:
        return " | ".join(_quote(option) for option in definition.variant_options)
    return "string"


def format_default(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return _quote(value)


def format_css(css: Optional[Dict[str, str]]) -> str:
    if not css:
        return ""
    body = "; ".join(f"{key}: {value}" for key, value in css.items())
    return f'style="{body}"'


def render_markup(node: Union[ReactNode, str], indent: int = 0) -> str:
    pad = INDENT * indent
    if isinstance(node, str):
        return f"{pad}{node}"

    tag = format_component_name(node.type)
    style = format_css(node.css)
    open_tag = f"{tag} {style}" if style else tag
    # empty text content renders nothing
    children = [child for child in node.children or [] if child != ""]
    if not children:
        return f"{pad}<{open_tag} />"
    inner = "\n".join(render_markup(child, indent + 1) for child in children)
    return f"{pad}<{open_tag}>\n{inner}\n{pad}</{tag}>"


def render_component(component: GeneratedComponent) -> str:
    name = format_component_name(component.name)
    props_type = f"{name}Props"

    type_lines = [
        f"{INDENT}{format_prop_name(prop)}: {format_prop_type(definition)};"
        for prop, definition in component.property_schema.items()
    ]
    params = []
    for prop, definition in component.property_schema.items():
        prop_name = format_prop_name(prop)
        if definition.default_value is None:
            params.append(prop_name)
        else:
            params.append(f"{prop_name} = {format_default(definition.default_value)}")

    type_block = "\n".join(type_lines)
    type_decl = f"export type {props_type} = {{\n{type_block}\n}};" if type_lines else f"export type {props_type} = {{}};"
    destructure = f"{{ {', '.join(params)} }}" if params else "{}"

    return (
        f"{type_decl}\n\n"
        f"export const {name} = ({destructure}: {props_type}) => {{\n"
        f"{INDENT}return (\n"
        f"{render_markup(component.tree, 2)}\n"
        f"{INDENT});\n"
        "};\n"
    )
