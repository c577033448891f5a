"""Framework-agnostic domain models."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Union


class ErrorCode(str, Enum):
    NOT_FOUND = "NOT_FOUND"
    NO_MATCH = "NO_MATCH"
    FORMAT_ERROR = "FORMAT_ERROR"


@dataclass(frozen=True)
class Aspect:
    """One tracked attribute of a device, e.g. screen size.

    ``perfection`` is the value that scores exactly 100% before weighting.
    ``selector`` addresses the specs sheet cell and ``pattern`` pulls the number
    out of it through its first capture group.
    """

    name: str
    perfection: float
    selector: str
    pattern: str
    weight: float = 1.0


@dataclass(frozen=True)
class ExtractionFailure:
    """Why a value could not be read from the document."""

    code: ErrorCode
    message: str
    detail: Optional[str] = None
    aspect: Optional[str] = None

    def for_aspect(self, name: str) -> "ExtractionFailure":
        return ExtractionFailure(code=self.code, message=self.message, detail=self.detail, aspect=name)

    def describe(self) -> str:
        prefix = f"{self.aspect}: " if self.aspect else ""
        suffix = f" ({self.detail})" if self.detail else ""
        return f"{prefix}{self.message}{suffix}"


@dataclass(frozen=True)
class AspectScore:
    name: str
    value: float
    perfection: float
    weight: float
    raw_score: float

    @property
    def contribution(self) -> float:
        return self.raw_score * self.weight


@dataclass
class ScoreAccumulator:
    """Running totals for one scoring pass.

    Totals are summed with ``math.fsum`` so they do not depend on aspect order.
    """

    weights: list[float] = field(default_factory=list)
    contributions: list[float] = field(default_factory=list)

    def add_weight(self, weight: float) -> None:
        self.weights.append(weight)

    def add_score(self, score: AspectScore) -> None:
        self.contributions.append(score.contribution)

    @property
    def total_weight(self) -> float:
        return math.fsum(self.weights)

    @property
    def total_raw_score(self) -> float:
        return math.fsum(self.contributions)


@dataclass(frozen=True)
class ScoreReport:
    device_name: str
    aspects: tuple[AspectScore, ...]
    total_raw_score: float
    total_weight: float

    @property
    def final_score(self) -> float:
        return self.total_raw_score / self.total_weight

    def final_score_percent(self, digits: int = 0) -> str:
        return f"{self.final_score:.{digits}%}"


ScoringResult = Union[ScoreReport, ExtractionFailure]
