"""Reference collector: which schemas does the API surface actually use?"""

import logging
from collections.abc import Iterable
from typing import Any

from openapi_slim.config import DEFAULT_SEED_SCHEMAS, RefPolicy
from openapi_slim.refs import is_schema_ref, schema_map, strip_ref

logger = logging.getLogger(__name__)


def collect_references(
    document: dict,
    policy: RefPolicy = RefPolicy.DIRECT,
    seeds: Iterable[str] = DEFAULT_SEED_SCHEMAS,
) -> list[str]:
    """Collect the names of internal schemas referenced under ``paths``.

    Seed schemas are added whenever the document defines them. With
    ``RefPolicy.TRANSITIVE`` references inside collected schemas are
    followed too. Names are returned in discovery order, without duplicates,
    and only if the document's schema map has an entry for them.
    """
    schemas = schema_map(document)
    if not schemas:
        return []

    found: dict[str, None] = {}
    _walk(document.get("paths"), found)
    for name in seeds:
        if schemas.get(name) is not None:
            found.setdefault(name, None)

    if policy == RefPolicy.TRANSITIVE:
        queue = list(found)
        while queue:
            name = queue.pop(0)
            nested: dict[str, None] = {}
            _walk(schemas.get(name), nested)
            for ref in nested:
                if ref not in found:
                    found[ref] = None
                    queue.append(ref)

    refs = [name for name in found if schemas.get(name) is not None]
    logger.debug("Collected %d schema references (policy: %s)", len(refs), policy.value)
    return refs


def _walk(node: Any, found: dict[str, None], visited: set[int] | None = None) -> None:
    """Recursively record schema refs (lists element-wise, mappings value-wise).

    Each container is visited once, so YAML aliases that point back at an
    enclosing node do not recurse forever.
    """
    if not isinstance(node, (list, dict)):
        return
    if visited is None:
        visited = set()
    if id(node) in visited:
        return
    visited.add(id(node))

    if isinstance(node, list):
        for item in node:
            _walk(item, found, visited)
    else:
        ref = node.get("$ref")
        if is_schema_ref(ref):
            found.setdefault(strip_ref(ref), None)
        for value in node.values():
            _walk(value, found, visited)
