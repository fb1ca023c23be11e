"""Orchestrator: parse, extract, collect and compact into the final document."""

import json
import logging
import math

from openapi_slim.collector import collect_references
from openapi_slim.compactor import compact_schema
from openapi_slim.config import SimplifierConfig
from openapi_slim.errors import FormatError
from openapi_slim.extractor import extract_endpoints
from openapi_slim.parser.base import CompactDocument, SimplifyResult
from openapi_slim.parser.document import parse_document
from openapi_slim.parser.structured import StructuredParser
from openapi_slim.refs import schema_map

logger = logging.getLogger(__name__)


def compact_document(document: dict, config: SimplifierConfig | None = None) -> CompactDocument:
    """Build the compact representation of a parsed API document."""
    config = config or SimplifierConfig()
    compact = CompactDocument()

    compact.host = _resolve_host(document)
    compact.sec = _resolve_security(document)
    compact.endpoints = extract_endpoints(document.get("paths"), config.max_description_length)

    refs = collect_references(document, policy=config.ref_policy, seeds=config.seed_schemas)
    schemas = schema_map(document)
    if refs and schemas:
        compact.schemas = {name: compact_schema(schemas[name]) for name in refs if schemas.get(name) is not None}

    logger.debug(
        "Compacted %d endpoints and %d schemas",
        len(compact.endpoints),
        len(compact.schemas or {}),
    )
    return compact


def serialize(compact: CompactDocument) -> str:
    """Minimal JSON text: no indentation, no spaces after separators."""
    return json.dumps(
        compact.model_dump(exclude_none=True),
        separators=(",", ":"),
        ensure_ascii=False,
        default=str,
    )


def simplify(
    text: str,
    structured: StructuredParser | None = None,
    config: SimplifierConfig | None = None,
) -> SimplifyResult:
    """Run the whole engine on raw document text.

    Empty input yields an empty output and no reduction metric.
    """
    document = parse_document(text, structured)
    if document is None:
        return SimplifyResult(output="", input_length=len(text), output_length=0)

    try:
        output = serialize(compact_document(document, config))
    except (RecursionError, ValueError) as e:
        # self-referencing values copied verbatim (enum, required) cannot be serialized
        raise FormatError(f"Document cannot be compacted: {e}") from e
    return SimplifyResult(
        output=output,
        input_length=len(text),
        output_length=len(output),
        reduction=reduction_percent(len(text), len(output)),
    )


def reduction_percent(input_length: int, output_length: int) -> int | None:
    """Size reduction in percent, rounded half up; None for empty input."""
    if input_length <= 0:
        return None
    return math.floor((input_length - output_length) / input_length * 100 + 0.5)


def _resolve_host(document: dict) -> str | None:
    servers = document.get("servers")
    if isinstance(servers, list) and servers and isinstance(servers[0], dict):
        if servers[0].get("url"):
            return str(servers[0]["url"])
    if document.get("host"):
        return str(document["host"])
    return None


def _resolve_security(document: dict) -> list[str] | None:
    components = document.get("components")
    schemes = components.get("securitySchemes") if isinstance(components, dict) else None
    if not isinstance(schemes, dict):
        schemes = document.get("securityDefinitions")
    if not isinstance(schemes, dict):
        return None
    return [str(name) for name in schemes]
