"""Endpoint extractor: one compact descriptor per (method, path) operation."""

import re
from typing import Any

from openapi_slim.config import DEFAULT_MAX_DESCRIPTION_LENGTH
from openapi_slim.parser.base import EndpointDescriptor
from openapi_slim.refs import is_schema_ref, strip_ref

HTTP_METHODS = ("get", "post", "put", "patch", "delete", "head", "options")

ELLIPSIS = "..."

_WHITESPACE = re.compile(r"\s+")


def extract_endpoints(
    paths: Any, max_description_length: int = DEFAULT_MAX_DESCRIPTION_LENGTH
) -> list[EndpointDescriptor]:
    """Build endpoint descriptors in document order (path, then method)."""
    endpoints: list[EndpointDescriptor] = []
    if not isinstance(paths, dict):
        return endpoints

    for path, path_item in paths.items():
        if not isinstance(path_item, dict):
            continue
        for method, operation in path_item.items():
            if not isinstance(method, str) or method.lower() not in HTTP_METHODS:
                continue
            if not isinstance(operation, dict):
                operation = {}
            endpoints.append(_extract_operation(method.lower(), str(path), operation, max_description_length))

    return endpoints


def _extract_operation(method: str, path: str, operation: dict, max_length: int) -> EndpointDescriptor:
    endpoint = EndpointDescriptor(m=method, p=path)

    endpoint.desc = truncate_description(_pick_description(operation), max_length)

    params = operation.get("parameters")
    if isinstance(params, list):
        params = [p for p in params if isinstance(p, dict)]
        path_params = [_render_param(p) for p in params if p.get("in") == "path"]
        query_params = [_render_param(p, detailed=True) for p in params if p.get("in") == "query"]
        if path_params:
            endpoint.pp = path_params
        if query_params:
            endpoint.qp = query_params

    endpoint.req = _json_schema_ref(operation.get("requestBody"))

    responses = operation.get("responses")
    if not isinstance(responses, dict):
        responses = {}
    ok_response = _lookup_status(responses, 200, 201)
    endpoint.res = _json_schema_ref(ok_response)

    endpoint.codes = [code for code in map(_status_code, responses) if code is not None]
    return endpoint


def truncate_description(desc: Any, max_length: int = DEFAULT_MAX_DESCRIPTION_LENGTH) -> str | None:
    """Collapse whitespace and cap the text at max_length (plus an ellipsis)."""
    if not isinstance(desc, str):
        return None
    cleaned = _WHITESPACE.sub(" ", desc).strip()
    if not cleaned:
        return None
    if len(cleaned) <= max_length:
        return cleaned
    return cleaned[:max_length] + ELLIPSIS


def _pick_description(operation: dict) -> str | None:
    for key in ("summary", "description"):
        value = operation.get(key)
        if isinstance(value, str) and value:
            return value
    return None


def _render_param(param: dict, detailed: bool = False) -> str:
    schema = param.get("schema")
    if not isinstance(schema, dict):
        schema = {}
    # Swagger 2.0 puts the type on the parameter itself
    param_type = schema.get("type") or param.get("type") or "unknown"

    rendered = f"{param.get('name', '')}:{param_type}"
    if param.get("required") is False:
        rendered += "?"
    if detailed:
        if schema.get("format"):
            rendered += f"({schema['format']})"
        if isinstance(schema.get("enum"), list):
            rendered += "[" + "|".join(_enum_literal(v) for v in schema["enum"]) + "]"
    return rendered


def _enum_literal(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _json_schema_ref(container: Any) -> str | None:
    """Schema name of ``container.content["application/json"].schema`` if it is a direct ref."""
    if not isinstance(container, dict):
        return None
    content = container.get("content")
    if not isinstance(content, dict):
        return None
    json_content = content.get("application/json")
    if not isinstance(json_content, dict):
        return None
    schema = json_content.get("schema")
    if isinstance(schema, dict) and is_schema_ref(schema.get("$ref")):
        return strip_ref(schema["$ref"])
    return None


def _lookup_status(responses: dict, *codes: int) -> Any:
    """Return the first declared response among codes."""
    for code in codes:
        # YAML loaders turn unquoted status codes into ints
        for key in (str(code), code):
            value = responses.get(key)
            # a null response counts as undeclared
            if value or isinstance(value, dict):
                return value
    return None


def _status_code(key: Any) -> int | None:
    if isinstance(key, bool):
        return None
    try:
        return int(key)
    except (TypeError, ValueError):
        return None
