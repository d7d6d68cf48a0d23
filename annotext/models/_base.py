from __future__ import annotations

import os

from pydantic import BaseModel, ConfigDict

_EXTRA_MODES = ("allow", "forbid", "ignore")


def _extra_mode() -> str:
    # ANNOTEXT_MODEL_EXTRA picks how unknown keys in documents and rule files
    # are handled; anything unrecognised keeps them an error.
    mode = os.getenv("ANNOTEXT_MODEL_EXTRA", "").strip().lower()
    return mode if mode in _EXTRA_MODES else "forbid"


class AnnotextModel(BaseModel):
    """Base for the document and rule-file models; rejects unknown keys by default."""

    model_config = ConfigDict(extra=_extra_mode())


__all__ = ["AnnotextModel"]
