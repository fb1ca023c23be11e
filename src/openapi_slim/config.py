"""Engine configuration.

Defaults live here; the CLI overrides them from flags and environment
variables (see :mod:`openapi_slim.cli`).
"""

from enum import Enum

from pydantic import BaseModel, Field

DEFAULT_MAX_DESCRIPTION_LENGTH = 100

# Schemas kept whenever the document defines them, referenced or not.
DEFAULT_SEED_SCHEMAS = ("Error", "Granularity", "AggregationFunction", "ResponseFormat")


class RefPolicy(str, Enum):
    """How far the reference collector follows ``$ref`` edges.

    ``DIRECT`` only looks at references under ``paths``; schemas that are
    referenced solely from inside another schema are left out. ``TRANSITIVE``
    also follows references inside every collected schema.
    """

    DIRECT = "direct"
    TRANSITIVE = "transitive"


class SimplifierConfig(BaseModel):
    max_description_length: int = Field(default=DEFAULT_MAX_DESCRIPTION_LENGTH, ge=1)
    ref_policy: RefPolicy = RefPolicy.DIRECT
    seed_schemas: tuple[str, ...] = DEFAULT_SEED_SCHEMAS
