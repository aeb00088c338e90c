"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, guardedbuild.toml only
contains overrides.  An empty (or missing) file is a valid config.
"""

from __future__ import annotations

from pydantic import BaseModel


class OutputConfig(BaseModel):
    """[output] section."""

    model_config = {"frozen": True}

    json_output: bool = False
    quiet: bool = False

