"""Component definition subtree → presentation tree (ReactNode)."""

import asyncio

from .classifier import NodeKind, node_kind
from .document import soft_lookup
from .models import ReactNode

BOX_TYPE = "Box"
TEXT_TYPE = "Typography"


class ReactTreeConverter:

    def __init__(self, document):
        self.document = document

    async def convert(self, node: dict) -> ReactNode:
        kind = node_kind(node)

        if kind is NodeKind.COMPONENT:
            css = await soft_lookup(self.document.get_css(node))
            children = await asyncio.gather(*(self.convert(c) for c in node.get("children") or []))
            return ReactNode(type=BOX_TYPE, css=css, children=list(children))

        if kind is NodeKind.INSTANCE:
            # instances stay opaque references to their component
            css = await soft_lookup(self.document.get_css(node))
            return ReactNode(type=node.get("name", ""), css=css)

        if kind is NodeKind.TEXT:
            css = await soft_lookup(self.document.get_css(node))
            return ReactNode(type=TEXT_TYPE, css=css, children=[node.get("characters", "")])

        return ReactNode(type=node.get("type", ""), css={})
