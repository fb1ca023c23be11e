"""Schema compactor: rewrite a schema subtree into the minimal notation.

A schema node is first classified into one of four shapes, each of which
knows how to compact itself:

* :class:`BareType` -- ``{"type": "string"}`` becomes ``"string"``
* :class:`TypedFormat` -- ``{"type": "integer", "format": "int64"}`` becomes
  ``"integer(int64)"``
* :class:`ObjectSchema` -- everything else that is a mapping; keeps only
  ``type``, ``format``, ``enum``, ``required`` and ``$ref`` and recurses into
  ``properties`` and ``items``
* :class:`Opaque` -- non-mapping input, returned unchanged

Properties that compact to a plain type string are folded into their key:
``{"name": {"type": "string"}}`` becomes ``{"string name": true}``. That
notation is one-way; it is not a schema any more.
"""

from typing import Any

from pydantic import BaseModel

from openapi_slim.refs import strip_ref


class BareType(BaseModel):
    type: str

    def compact(self) -> str:
        return self.type


class TypedFormat(BaseModel):
    type: str
    format: str

    def compact(self) -> str:
        return f"{self.type}({self.format})"


class ObjectSchema(BaseModel):
    node: dict

    def compact(self, ancestors: frozenset[int] = frozenset()) -> dict:
        node = self.node
        result: dict[str, Any] = {}

        if _present(node.get("type")):
            result["type"] = node["type"]
        if _present(node.get("format")):
            result["format"] = node["format"]
        if node.get("enum") is not None:
            result["enum"] = node["enum"]
        if node.get("required") is not None:
            result["required"] = node["required"]
        if node.get("$ref"):
            result["$ref"] = strip_ref(node["$ref"])

        properties = node.get("properties")
        if isinstance(properties, dict):
            result["properties"] = {}
            for name, prop in properties.items():
                compacted = compact_schema(prop, ancestors)
                if isinstance(compacted, str):
                    result["properties"][f"{compacted} {name}"] = True
                else:
                    result["properties"][name] = compacted

        if node.get("items") is not None:
            result["items"] = compact_schema(node["items"], ancestors)

        return result


class Opaque(BaseModel):
    value: Any = None

    def compact(self) -> Any:
        return self.value


SchemaShape = BareType | TypedFormat | ObjectSchema | Opaque


def classify(node: Any) -> SchemaShape:
    """Pick the compaction rule that applies to a schema node."""
    if not isinstance(node, dict):
        return Opaque(value=node)
    keys = set(node)
    if keys == {"type"} and _nonempty_str(node["type"]):
        return BareType(type=node["type"])
    if keys == {"type", "format"} and _nonempty_str(node["type"]) and _nonempty_str(node["format"]):
        return TypedFormat(type=node["type"], format=node["format"])
    return ObjectSchema(node=node)


def compact_schema(node: Any, ancestors: frozenset[int] = frozenset()) -> Any:
    """Return the compact form of a schema node. Never raises.

    ancestors holds the ids of the enclosing nodes; a node that contains
    itself (YAML anchors can build such trees) compacts to an empty object
    where it recurs.
    """
    if id(node) in ancestors:
        return {}
    shape = classify(node)
    if isinstance(shape, ObjectSchema):
        return shape.compact(ancestors | {id(node)})
    return shape.compact()


def _nonempty_str(value: Any) -> bool:
    return isinstance(value, str) and value != ""


def _present(value: Any) -> bool:
    # lists and mappings count even when empty
    return isinstance(value, (list, dict)) or bool(value)
