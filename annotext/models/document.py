"""Pydantic models for linear-data documents and registry rule files."""

from __future__ import annotations

from typing import Any, Dict, List, Union

from pydantic import Field, field_validator

from ._base import AnnotextModel


class AnnotationModel(AnnotextModel):
    type: str
    data: Dict[str, Any] = Field(default_factory=dict)


# A reference is either a key into ContentDocument.annotations (shared
# instance) or an inline annotation (fresh instance per occurrence).
AnnotationRefModel = Union[str, AnnotationModel]

# "x" is a plain character; ["x", ref, ...] is an annotated one.
UnitModel = Union[str, List[AnnotationRefModel]]


class ContentDocument(AnnotextModel):
    """Linear content: a table of shared annotations plus the unit list."""

    annotations: Dict[str, AnnotationModel] = Field(default_factory=dict)
    data: List[UnitModel] = Field(default_factory=list)

    @field_validator("data")
    @classmethod
    def _check_units(cls, units: List[UnitModel]) -> List[UnitModel]:
        for pos, unit in enumerate(units):
            if isinstance(unit, str):
                if len(unit) != 1:
                    raise ValueError(
                        f"unit {pos}: expected a single character, got {unit!r}"
                    )
                continue
            if len(unit) < 2:
                raise ValueError(
                    f"unit {pos}: annotated unit needs a character and at least one annotation"
                )
            char = unit[0]
            if not isinstance(char, str) or len(char) != 1:
                raise ValueError(
                    f"unit {pos}: first element must be a single character, got {char!r}"
                )
        return units


class RuleConfig(AnnotextModel):
    open: str
    close: str
    # When true, open/close are str.format templates over the escaped payload
    template: bool = False


class RegistryConfig(AnnotextModel):
    replace_defaults: bool = False
    rules: Dict[str, RuleConfig] = Field(default_factory=dict)
