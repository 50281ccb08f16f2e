"""Flattened JSON schemas for tool inputs and outputs.

Function-calling backends (Gemini in particular) reject ``$ref``, ``$defs``
and most validation keywords. Request models derive from ``FlatBaseModel`` so
the schema an LLM sees is a single self-contained object.
"""

from copy import deepcopy
from typing import Any

from pydantic import BaseModel, ConfigDict

DROPPED_KEYS = frozenset(
    {
        "$defs",
        "$ref",
        "additionalProperties",
        "const",
        "default",
        "examples",
        "exclusiveMaximum",
        "exclusiveMinimum",
        "maxItems",
        "maxLength",
        "maximum",
        "minItems",
        "minLength",
        "minimum",
        "pattern",
        "prefixItems",
        "title",
        "uniqueItems",
    }
)

_DEFS_PREFIX = "#/$defs/"


class _Flattener:
    """Inline ``$ref`` targets and collapse ``Optional[X]`` unions."""

    def __init__(self, defs: dict[str, Any]):
        self.defs = defs

    def visit(self, node: Any, trail: frozenset[str] = frozenset()) -> Any:
        if isinstance(node, list):
            return [self.visit(item, trail) for item in node]
        if not isinstance(node, dict):
            return node

        ref = node.get("$ref")
        if isinstance(ref, str) and ref.startswith(_DEFS_PREFIX):
            return self._inline(node, ref.removeprefix(_DEFS_PREFIX), trail)

        if isinstance(node.get("anyOf"), list):
            return self._collapse_union(node, trail)

        out: dict[str, Any] = {}
        for key, value in node.items():
            if key in DROPPED_KEYS:
                continue
            if key == "properties" and isinstance(value, dict):
                out[key] = {name: self.visit(sub, trail) for name, sub in value.items()}
            else:
                out[key] = self.visit(value, trail)

        if out.get("type") == "array" and "items" not in out:
            tuple_items = node.get("prefixItems")
            out["items"] = (
                self.visit(tuple_items[0], trail) if tuple_items else {"type": "string"}
            )
        return out

    def _siblings(self, node: dict[str, Any], trail: frozenset[str]) -> dict[str, Any]:
        return {
            key: self.visit(value, trail)
            for key, value in node.items()
            if key not in DROPPED_KEYS and key != "anyOf"
        }

    def _inline(
        self, node: dict[str, Any], name: str, trail: frozenset[str]
    ) -> dict[str, Any]:
        siblings = self._siblings(node, trail)
        if name not in self.defs:
            return {"type": "object", **siblings}
        if name in trail:
            return {"type": "object", "description": f"(recursive: {name})", **siblings}
        target = self.visit(deepcopy(self.defs[name]), trail | {name})
        return {**target, **siblings}

    def _collapse_union(
        self, node: dict[str, Any], trail: frozenset[str]
    ) -> dict[str, Any]:
        members = node["anyOf"]
        concrete = [m for m in members if not (isinstance(m, dict) and m.get("type") == "null")]
        out = self._siblings(node, trail)
        if not concrete:
            out.setdefault("type", "string")
            return out

        out.update(self.visit(concrete[0], trail))
        description = node.get("description")
        if len(concrete) > 1:
            names = ", ".join(_type_name(m) for m in concrete)
            note = f"(Union of: {names})"
            out["description"] = f"{description} {note}" if description else note
        elif description is not None:
            out["description"] = description
        if len(concrete) < len(members):
            out["nullable"] = True
        return out


def _type_name(member: Any) -> str:
    if isinstance(member, dict):
        if "type" in member:
            return str(member["type"])
        ref = member.get("$ref")
        if isinstance(ref, str):
            return ref.rsplit("/", 1)[-1]
    return "unknown"


def _mark_optional(schema: dict[str, Any]) -> None:
    required = set(schema.get("required", []))
    for name, prop in schema.get("properties", {}).items():
        if not isinstance(prop, dict):
            continue
        if name not in required:
            text = prop.get("description", "")
            if not text.startswith("(Optional)"):
                prop["description"] = f"(Optional) {text}".rstrip()
        if prop.get("type") == "object":
            _mark_optional(prop)
        elif prop.get("type") == "array" and isinstance(prop.get("items"), dict):
            _mark_optional(prop["items"])


def flatten_schema(schema: dict[str, Any]) -> dict[str, Any]:
    """Return ``schema`` with every ``$ref`` inlined and unsupported keys removed.

    Fields missing from ``required`` get an ``(Optional)`` description prefix,
    since the ``default`` that used to say so is stripped.
    """
    flat = _Flattener(schema.get("$defs", {})).visit(schema)
    _mark_optional(flat)
    return flat


class FlatBaseModel(BaseModel):
    """Tool input model whose JSON schema is flattened for function calling."""

    @classmethod
    def model_json_schema(cls, **kwargs: Any) -> dict[str, Any]:
        return flatten_schema(super().model_json_schema(**kwargs))


class OutputBaseModel(BaseModel):
    """Tool output model.

    Accepts Python field names on construction and serializes using the
    camelCase aliases the CMS and the agents expect.
    """

    model_config = ConfigDict(
        validate_by_name=True,
        validate_by_alias=True,
        serialize_by_alias=True,
    )
