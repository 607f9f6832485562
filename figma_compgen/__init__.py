"""
figma-compgen: Figma selection → IR dump / React component (Python 管線)

走訪 Figma 節點樹產生 IR，並將 component set 轉成帶型別 props 的 React 元件。
"""

__version__ = "0.3.0"

from .classifier import NodeKind, NodePolicy, classify
from .document import FigmaDocument, HostLookupError, MainComponent, extract_css
from .models import (
    GeneratedComponent,
    PropertyDefinition,
    PropertyType,
    ReactNode,
    ResolvedVariable,
    ResolvedVariableCollection,
    VisitResult,
)
from .ir_builder import TreeVisitor, build_ir_from_selection, format_tree, save_ir
from .variables import VariableResolver
from .react_tree import ReactTreeConverter
from .assembler import AssemblyError, ComponentAssembler
from .generator import render_component
from .pipeline import Pipeline
from .figma_reader import FigmaAPIClient, load_snapshot, save_snapshot
from .config import load_config, validate_config

__all__ = [
    "__version__",
    "NodeKind",
    "NodePolicy",
    "classify",
    "FigmaDocument",
    "HostLookupError",
    "MainComponent",
    "extract_css",
    "GeneratedComponent",
    "PropertyDefinition",
    "PropertyType",
    "ReactNode",
    "ResolvedVariable",
    "ResolvedVariableCollection",
    "VisitResult",
    "TreeVisitor",
    "build_ir_from_selection",
    "format_tree",
    "save_ir",
    "VariableResolver",
    "ReactTreeConverter",
    "AssemblyError",
    "ComponentAssembler",
    "render_component",
    "Pipeline",
    "FigmaAPIClient",
    "load_snapshot",
    "save_snapshot",
    "load_config",
    "validate_config",
]
