"""
Design variable resolution

`VariableResolver` holds a read-only snapshot of the file's local variables
and collections, built once per session, and expands alias values into
the referenced variable's resolved record.
"""

from __future__ import annotations

import json
from types import MappingProxyType
from typing import Any, FrozenSet, List, Mapping, Optional

from .models import ResolvedVariable, ResolvedVariableCollection

ALIAS_TYPE = "VARIABLE_ALIAS"


def _warn(msg: str) -> None:
    print(f"   ⚠️  [variables] {msg}")


def is_alias(value: Any) -> bool:
    return isinstance(value, dict) and value.get("type") == ALIAS_TYPE and "id" in value


class VariableResolver:

    def __init__(self, variables: Mapping[str, dict], collections: Mapping[str, dict]):
        self._variables = MappingProxyType(dict(variables))
        self._collections = MappingProxyType(dict(collections))

    @classmethod
    def from_document(cls, document) -> "VariableResolver":
        return cls(document.local_variables(), document.local_collections())

    def resolve_variable(self, variable_id: str) -> Optional[ResolvedVariable]:
        return self._resolve(variable_id, frozenset())

    def _resolve(self, variable_id: str, seen: FrozenSet[str]) -> Optional[ResolvedVariable]:
        if variable_id in seen:
            _warn(f"alias cycle at '{variable_id}'，停止解析")
            return None
        raw = self._variables.get(variable_id)
        if raw is None:
            return None
        seen = seen | {variable_id}
        values = {}
        for mode_id, value in (raw.get("valuesByMode") or {}).items():
            values[mode_id] = self._resolve(value["id"], seen) if is_alias(value) else value
        return ResolvedVariable(
            name=raw.get("name", variable_id),
            resolved_type=raw.get("resolvedType", ""),
            values=values,
            description=raw.get("description") or None,
        )

    def resolve_collection(self, collection_id: str) -> Optional[ResolvedVariableCollection]:
        raw = self._collections.get(collection_id)
        if raw is None:
            return None
        variables = []
        for variable_id in raw.get("variableIds", []) or []:
            resolved = self.resolve_variable(variable_id)
            if resolved is not None:
                variables.append(resolved)
        return ResolvedVariableCollection(
            name=raw.get("name", collection_id),
            modes={mode["modeId"]: mode.get("name", "") for mode in raw.get("modes", []) or []},
            variables=variables,
        )

    def resolve_all(self) -> List[ResolvedVariableCollection]:
        collections = []
        for collection_id in self._collections:
            resolved = self.resolve_collection(collection_id)
            if resolved is not None:
                collections.append(resolved)
        return collections


def format_variables(collections: List[ResolvedVariableCollection]) -> str:
    return json.dumps([c.to_dict() for c in collections], indent=2, ensure_ascii=False)
