"""Helpers for internal schema references."""

from typing import Any

SCHEMA_REF_PREFIXES = ("#/components/schemas/", "#/definitions/")


def is_schema_ref(ref: Any) -> bool:
    return isinstance(ref, str) and ref.startswith(SCHEMA_REF_PREFIXES)


def strip_ref(ref: Any) -> Any:
    """Return the bare schema name for an internal schema reference.

    Anything else (external refs, non-strings) is returned unchanged.
    """
    if not is_schema_ref(ref):
        return ref
    for prefix in SCHEMA_REF_PREFIXES:
        if ref.startswith(prefix):
            return ref[len(prefix):]
    return ref


def schema_map(document: dict) -> dict | None:
    """Return ``components.schemas`` (OpenAPI 3) or ``definitions`` (Swagger 2)."""
    components = document.get("components")
    if isinstance(components, dict) and isinstance(components.get("schemas"), dict):
        return components["schemas"]
    if isinstance(document.get("definitions"), dict):
        return document["definitions"]
    return None
