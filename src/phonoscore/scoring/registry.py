"""Aspect registry: the ordered set of aspects a device is scored on."""

from __future__ import annotations

import json
import math
from pathlib import Path
from typing import Iterable

from ..config.settings import PhonoscoreSettings
from ..domain.errors import ConfigurationError
from ..domain.models import Aspect
from ..models.aspects_file import AspectsFile


class AspectExpressions:
    """Selectors and patterns for GSMArena spec sheets."""

    SCREEN_SIZE_SELECTOR = 'td[data-spec="displaysize"]'
    SCREEN_SIZE_PATTERN = r"(\d+\.\d+) inches"

    BATTERY_SIZE_SELECTOR = 'td[data-spec="batdescription1"]'
    BATTERY_SIZE_PATTERN = r"(\d+) mAh"

    # Can read "32 GB 4 GB RAM"; the first "GB" is storage.
    STORAGE_SIZE_SELECTOR = 'td[data-spec="internalmemory"]'
    STORAGE_SIZE_PATTERN = r"(\d+) GB"

    SELFIE_CAMERA_SELECTOR = 'td[data-spec="cam2modules"]'
    SELFIE_CAMERA_PATTERN = r"(\d+(?:\.\d+)?) MP"


DEFAULT_ASPECTS: tuple[Aspect, ...] = (
    Aspect(
        name="Screen size",
        perfection=5.5,
        selector=AspectExpressions.SCREEN_SIZE_SELECTOR,
        pattern=AspectExpressions.SCREEN_SIZE_PATTERN,
        weight=3,
    ),
    Aspect(
        name="Battery size",
        perfection=3000,
        selector=AspectExpressions.BATTERY_SIZE_SELECTOR,
        pattern=AspectExpressions.BATTERY_SIZE_PATTERN,
    ),
    Aspect(
        name="Storage size",
        perfection=128,
        selector=AspectExpressions.STORAGE_SIZE_SELECTOR,
        pattern=AspectExpressions.STORAGE_SIZE_PATTERN,
    ),
    Aspect(
        name="Selfie camera megapixels",
        perfection=10,
        selector=AspectExpressions.SELFIE_CAMERA_SELECTOR,
        pattern=AspectExpressions.SELFIE_CAMERA_PATTERN,
        weight=0.9,
    ),
)


def check_aspects(aspects: Iterable[Aspect]) -> tuple[Aspect, ...]:
    """Reject aspect sets that cannot produce a finite score."""
    checked = tuple(aspects)
    if not checked:
        raise ConfigurationError("aspect registry must not be empty")
    for a in checked:
        if not (math.isfinite(a.weight) and a.weight >= 0):
            raise ConfigurationError("aspect weight must be finite and >= 0", detail=a.name)
        if not (math.isfinite(a.perfection) and a.perfection > 0):
            raise ConfigurationError("aspect perfection must be finite and > 0", detail=a.name)
    try:
        total_weight = math.fsum(a.weight for a in checked)
    except OverflowError as e:
        raise ConfigurationError("total aspect weight overflows") from e
    if not (math.isfinite(total_weight) and total_weight > 0):
        raise ConfigurationError("total aspect weight must be finite and > 0", detail=str(total_weight))
    return checked


def parse_registry(raw: object) -> tuple[Aspect, ...]:
    try:
        doc = AspectsFile.model_validate(raw)
    except Exception as e:
        raise ConfigurationError("invalid aspect registry", detail=str(e)) from e
    return tuple(
        Aspect(
            name=a.name,
            perfection=a.perfection,
            selector=a.selector,
            pattern=a.pattern,
            weight=a.weight,
        )
        for a in doc.aspects
    )


def load_registry(path: str | Path) -> tuple[Aspect, ...]:
    """Load aspects from a JSON file of the form ``{"aspects": [...]}``."""
    p = Path(path)
    try:
        raw = json.loads(p.read_text(encoding="utf-8"))
    except OSError as e:
        raise ConfigurationError(f"cannot read aspect registry {p}", detail=str(e)) from e
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"aspect registry {p} must be valid JSON", detail=str(e)) from e
    return parse_registry(raw)


def build_registry(settings: PhonoscoreSettings) -> tuple[Aspect, ...]:
    if settings.aspects_file:
        return load_registry(settings.aspects_file)
    return DEFAULT_ASPECTS
