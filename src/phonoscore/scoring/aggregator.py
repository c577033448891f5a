"""Scoring aggregator: fold per-aspect ratios into one weighted score."""

from __future__ import annotations

import math
from typing import Callable, Iterable, Optional, Union

from bs4 import BeautifulSoup, Tag

from ..domain.models import (
    Aspect,
    AspectScore,
    ErrorCode,
    ExtractionFailure,
    ScoreAccumulator,
    ScoreReport,
    ScoringResult,
)
from ..extraction.extractor import extract, parse_number
from ..extraction.locator import inner_html, locate
from .registry import AspectExpressions, check_aspects

AspectCallback = Callable[[AspectScore], None]


def raw_score(value: float, perfection: float) -> float:
    """Ratio of ``value`` to the perfection threshold; not capped at 1.0."""
    return value / perfection


def read_aspect_value(
    tree: BeautifulSoup | Tag,
    aspect: Aspect,
    *,
    shared_camera_selector: bool = False,
) -> Union[float, ExtractionFailure]:
    if shared_camera_selector:
        selector = AspectExpressions.SELFIE_CAMERA_SELECTOR
        pattern = AspectExpressions.SELFIE_CAMERA_PATTERN
    else:
        selector = aspect.selector
        pattern = aspect.pattern

    node = locate(tree, selector)
    if isinstance(node, ExtractionFailure):
        return node
    captured = extract(inner_html(node), pattern)
    if isinstance(captured, ExtractionFailure):
        return captured
    return parse_number(captured)


def score_document(
    tree: BeautifulSoup | Tag,
    aspects: Iterable[Aspect],
    *,
    device_name: str = "",
    shared_camera_selector: bool = False,
    on_aspect: Optional[AspectCallback] = None,
) -> ScoringResult:
    """Score every aspect in order and return the report.

    The first aspect that cannot be read ends the pass and its failure is
    returned instead of a report.
    """
    checked = check_aspects(aspects)
    acc = ScoreAccumulator()
    scores: list[AspectScore] = []

    for aspect in checked:
        acc.add_weight(aspect.weight)

        value = read_aspect_value(tree, aspect, shared_camera_selector=shared_camera_selector)
        if isinstance(value, ExtractionFailure):
            return value.for_aspect(aspect.name)

        score = AspectScore(
            name=aspect.name,
            value=value,
            perfection=aspect.perfection,
            weight=aspect.weight,
            raw_score=raw_score(value, aspect.perfection),
        )
        if not math.isfinite(score.contribution):
            return ExtractionFailure(
                code=ErrorCode.FORMAT_ERROR,
                message="aspect score is out of range",
                detail=repr(value),
                aspect=aspect.name,
            )
        acc.add_score(score)
        scores.append(score)
        if on_aspect is not None:
            on_aspect(score)

    try:
        total_raw_score = acc.total_raw_score
    except OverflowError:
        total_raw_score = math.inf
    if not math.isfinite(total_raw_score):
        return ExtractionFailure(
            code=ErrorCode.FORMAT_ERROR,
            message="total score is out of range",
        )

    return ScoreReport(
        device_name=device_name,
        aspects=tuple(scores),
        total_raw_score=total_raw_score,
        total_weight=acc.total_weight,
    )
