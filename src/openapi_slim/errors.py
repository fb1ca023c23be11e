"""Exception hierarchy for openapi-slim.

All exceptions inherit from :class:`SlimError`. The CLI catches
``SlimError`` and turns it into a single error message; the engine never
returns a partial compact document once one of these is raised.

Subclass hierarchy::

    SlimError
    +-- FormatError        (text is neither JSON nor YAML, or not a mapping)
    +-- ParserUnavailable  (YAML parser not loaded yet; retry later)
    +-- ParserLoadError    (loading the YAML parser failed)
"""


class SlimError(Exception):
    """Base exception for all openapi-slim errors."""


class FormatError(SlimError):
    """Raised when the input text cannot be parsed into an API document."""


class ParserUnavailable(SlimError):
    """Raised when YAML parsing is needed but no parser has been loaded.

    This is a retryable condition: callers should load the structured
    parser (see :class:`~openapi_slim.parser.structured.ParserHandle`) and
    invoke the engine again.
    """


class ParserLoadError(SlimError):
    """Raised when the structured-document parser fails to load."""
