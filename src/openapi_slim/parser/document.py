"""Turn raw API document text into a value tree.

JSON is tried first since it is the stricter format and needs no extra
parser; YAML is the fallback and requires a loaded structured parser.
"""

import json
import logging
from typing import Any

from openapi_slim.errors import FormatError, ParserUnavailable

from .structured import StructuredParser

logger = logging.getLogger(__name__)


def parse_document(text: str, structured: StructuredParser | None = None) -> dict[str, Any] | None:
    """Parse an OpenAPI/Swagger document given as JSON or YAML text.

    Returns None for empty or whitespace-only input. A list or scalar
    document yields an empty mapping.

    Raises:
        ParserUnavailable: The text is not JSON and no YAML parser was given.
        FormatError: The text is neither JSON nor YAML, or parses to null.
    """
    if not text.strip():
        return None

    try:
        data = json.loads(text)
    except json.JSONDecodeError:
        if structured is None:
            raise ParserUnavailable("YAML parser not loaded yet, please wait...")
        try:
            data = structured.parse(text)
        except FormatError as e:
            raise FormatError(f"Invalid JSON or YAML format: {e}") from e

    if data is None:
        raise FormatError("API document is empty (null)")
    if not isinstance(data, dict):
        # a list or scalar has none of the optional fields
        logger.warning("API document is a %s, not a mapping; treating it as empty", type(data).__name__)
        return {}
    return data
