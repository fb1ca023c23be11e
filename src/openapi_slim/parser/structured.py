"""Structured-document (YAML) parser capability.

The engine never imports or loads a YAML parser on its own. Callers own a
:class:`ParserHandle`, decide when to load it, and pass the loaded parser
into :func:`~openapi_slim.parser.document.parse_document`.
"""

import logging
from typing import Any, Protocol

import yaml

from openapi_slim.errors import FormatError, ParserLoadError

logger = logging.getLogger(__name__)


class StructuredParser(Protocol):
    """Anything that can turn structured-document text into a value tree."""

    def parse(self, text: str) -> Any: ...


class YamlParser:
    """PyYAML safe loader, using libyaml bindings when they are available."""

    def __init__(self, loader: type | None = None):
        self.loader = loader or getattr(yaml, "CSafeLoader", yaml.SafeLoader)

    def parse(self, text: str) -> Any:
        try:
            return yaml.load(text, Loader=self.loader)
        except yaml.YAMLError as e:
            raise FormatError(str(e)) from e


class ParserHandle:
    """Loaded/not-loaded lifecycle for the structured parser.

    A fresh handle is not loaded; :meth:`get` returns ``None`` until
    :meth:`load` succeeds. Loading is idempotent.
    """

    def __init__(self, factory=YamlParser):
        self._factory = factory
        self._parser: StructuredParser | None = None

    @property
    def is_loaded(self) -> bool:
        return self._parser is not None

    def load(self) -> StructuredParser:
        if self._parser is None:
            try:
                self._parser = self._factory()
            except Exception as e:
                raise ParserLoadError(f"Failed to load YAML parser: {e}") from e
            logger.debug("Structured parser loaded: %s", type(self._parser).__name__)
        return self._parser

    def get(self) -> StructuredParser | None:
        return self._parser
