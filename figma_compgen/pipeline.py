"""
Pipeline: command dispatch for one session

Commands:
  display         dump the IR outline of every selected root
  debug           dump all local variable collections, aliases resolved
  react/generate  generate a React component from one selected component set

Generated code and user-facing errors go out through `post` as
{"type": "react" | "error", "message": str}.
"""

from __future__ import annotations

from typing import Callable, List, Optional

from .assembler import AssemblyError, ComponentAssembler
from .generator import render_component
from .ir_builder import build_ir_from_selection, format_tree
from .models import ResolvedVariableCollection, VisitResult
from .variables import VariableResolver, format_variables

COMMANDS = ("generate", "react", "debug", "display")


def error_message(message: str) -> dict:
    return {"type": "error", "message": message}


def react_message(code: str) -> dict:
    return {"type": "react", "message": code}


class Pipeline:

    def __init__(self, document, resolver: Optional[VariableResolver] = None,
                 post: Optional[Callable[[dict], None]] = None):
        self.document = document
        self.resolver = resolver or VariableResolver.from_document(document)
        self.post = post or (lambda message: None)

    async def handle(self, command: str, selection: List[dict]):
        """Run one command; returns the command's result (IR list, collections or message)."""
        if command == "display":
            return await self.on_selection_change(selection)
        if command == "debug":
            return self.debug_variables()
        if command in ("react", "generate"):
            return await self.generate(selection)
        message = error_message(f"Unknown command '{command}' (expected one of {', '.join(COMMANDS)})")
        self.post(message)
        return message

    async def on_selection_change(self, selection: List[dict]) -> List[VisitResult]:
        results = await build_ir_from_selection(self.document, selection)
        for result in results:
            print(format_tree(result))
        return results

    def debug_variables(self) -> List[ResolvedVariableCollection]:
        collections = self.resolver.resolve_all()
        print(format_variables(collections))
        return collections

    async def generate(self, selection: List[dict]) -> dict:
        if len(selection) != 1:
            message = error_message("Select exactly one Component Set")
        else:
            try:
                component = await ComponentAssembler(self.document).assemble(selection[0])
            except AssemblyError as e:
                message = error_message(e.message)
            else:
                message = react_message(render_component(component))
        self.post(message)
        return message
