"""Data models for the compact API representation.

The engine builds these models and dumps them with ``exclude_none`` so that
absent optional fields never show up in the serialized output.
"""

from typing import Any

from pydantic import BaseModel


class EndpointDescriptor(BaseModel):
    """Compact form of one (method, path) operation."""

    m: str  # get / post / put / patch / delete / head / options
    p: str  # /pets/{petId}
    desc: str | None = None
    pp: list[str] | None = None  # path params, "name:type"
    qp: list[str] | None = None  # query params, "name:type?(format)[a|b]"
    req: str | None = None
    res: str | None = None
    codes: list[int] = []


class CompactDocument(BaseModel):
    """The whole compact document, in serialization order."""

    host: str | None = None
    sec: list[str] | None = None
    endpoints: list[EndpointDescriptor] = []
    schemas: dict[str, Any] | None = None


class SimplifyResult(BaseModel):
    """Output of one engine run plus the size metric."""

    output: str
    input_length: int
    output_length: int
    reduction: int | None = None  # percent, None for empty input
