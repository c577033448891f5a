"""Aspect registry file models."""

from __future__ import annotations

import math
import re
from typing import List

from pydantic import BaseModel, Field, field_validator, model_validator


class AspectDefinition(BaseModel):
    name: str = Field(..., min_length=1)
    selector: str = Field(..., min_length=1)
    pattern: str = Field(..., min_length=1)
    weight: float = Field(default=1.0, ge=0.0, allow_inf_nan=False)
    perfection: float = Field(..., gt=0.0, allow_inf_nan=False)

    @field_validator("name", "selector")
    @classmethod
    def strip_text(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be blank")
        return v

    @field_validator("pattern")
    @classmethod
    def validate_pattern(cls, v: str) -> str:
        try:
            compiled = re.compile(v)
        except re.error as e:
            raise ValueError(f"invalid regular expression: {e}") from e
        if compiled.groups < 1:
            raise ValueError("pattern must contain a capture group")
        return v


class AspectsFile(BaseModel):
    aspects: List[AspectDefinition] = Field(..., min_length=1)

    @model_validator(mode="after")
    def validate_registry(self) -> "AspectsFile":
        names = [a.name for a in self.aspects]
        duplicates = sorted({n for n in names if names.count(n) > 1})
        if duplicates:
            raise ValueError(f"duplicate aspect names: {', '.join(duplicates)}")
        try:
            total_weight = math.fsum(a.weight for a in self.aspects)
        except OverflowError as e:
            raise ValueError("total aspect weight overflows") from e
        if not math.isfinite(total_weight):
            raise ValueError("total aspect weight must be finite")
        if total_weight <= 0:
            raise ValueError("total aspect weight must be > 0")
        return self
