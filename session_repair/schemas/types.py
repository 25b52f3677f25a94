"""
Shared type definitions for schemas.

Centralizes the base models used by the transcript and operations schemas.

Layering:
- This module provides FOUNDATION models (BaseStrictModel, PermissiveModel)
- transcript.py builds wire-format records on PermissiveModel
- operations/ builds service results on BaseStrictModel
"""

from __future__ import annotations

import pydantic

# ==============================================================================
# Base Strict Model (Foundation)
# ==============================================================================


class BaseStrictModel(pydantic.BaseModel):
    """
    Foundation strict model for data this package produces.

    Uses extra='forbid' to reject unknown fields - any field not modeled
    causes immediate validation failure (fail-fast).
    """

    model_config = pydantic.ConfigDict(
        extra='forbid',  # Reject unknown fields (fail-fast)
        strict=True,  # Strict type coercion
        frozen=True,  # Immutable after creation
    )


# ==============================================================================
# Permissive Model (Foundation)
# ==============================================================================


class PermissiveModel(pydantic.BaseModel):
    """
    Foundation permissive model for data this package only reads.

    Symmetry with BaseStrictModel:
    - BaseStrictModel: extra='forbid' (rejects unknown fields)
    - PermissiveModel: extra='allow' (accepts unknown fields)

    Transcript records carry dozens of fields that repair never looks at;
    they must survive untouched, so the record model keeps them as extras.
    """

    model_config = pydantic.ConfigDict(
        extra='allow',
        strict=True,
        frozen=True,
    )
