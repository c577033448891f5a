"""Value extraction from specs sheet fragments.

Fragments look like ``6.4 inches, 100.5 cm<sup>2</sup>`` or
``128 GB 6 GB RAM, 64 GB 4 GB RAM``. Patterns are anchored on the unit that
follows the number, so the first capture group of the first match is the value.
"""

from __future__ import annotations

import math
import re
from typing import Union

from ..domain.models import ErrorCode, ExtractionFailure

# Invariant-culture number: "." is the only decimal separator, no grouping.
_NUMBER_RE = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")


def extract(raw: str, pattern: Union[str, re.Pattern[str]]) -> Union[str, ExtractionFailure]:
    """Return capture group 1 of the first match of ``pattern`` in ``raw``."""
    regex = re.compile(pattern) if isinstance(pattern, str) else pattern
    if regex.groups < 1:
        raise ValueError(f"pattern has no capture group: {regex.pattern!r}")

    match = regex.search(raw)
    if match is None:
        return ExtractionFailure(
            code=ErrorCode.NO_MATCH,
            message="pattern did not match",
            detail=regex.pattern,
        )

    captured = match.group(1)
    if not captured:
        return ExtractionFailure(
            code=ErrorCode.NO_MATCH,
            message="pattern matched without capturing a value",
            detail=regex.pattern,
        )
    return captured


def parse_number(text: str) -> Union[float, ExtractionFailure]:
    """Parse ``text`` as a float independently of the host locale."""
    candidate = text.strip()
    if not _NUMBER_RE.fullmatch(candidate):
        return ExtractionFailure(
            code=ErrorCode.FORMAT_ERROR,
            message="captured text is not a number",
            detail=repr(text),
        )

    value = float(candidate)
    if not math.isfinite(value):
        return ExtractionFailure(
            code=ErrorCode.FORMAT_ERROR,
            message="captured number is out of range",
            detail=repr(text),
        )
    return value
