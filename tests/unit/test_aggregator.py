from __future__ import annotations

import math
from dataclasses import replace

import pytest

from phonoscore.domain.errors import ConfigurationError
from phonoscore.domain.models import Aspect, AspectScore, ErrorCode, ExtractionFailure, ScoreReport
from phonoscore.extraction.locator import parse_document
from phonoscore.scoring.aggregator import raw_score, score_document
from phonoscore.scoring.registry import DEFAULT_ASPECTS


def test_all_aspects_at_perfection_score_exactly_100(perfect_page) -> None:
    report = score_document(parse_document(perfect_page), DEFAULT_ASPECTS, device_name="Phone")
    assert isinstance(report, ScoreReport)
    assert [a.raw_score for a in report.aspects] == [1.0, 1.0, 1.0, 1.0]
    assert report.final_score == 1.0
    assert report.final_score_percent() == "100%"


def test_half_screen_size_weighs_three_times(device_page) -> None:
    page = device_page(
        displaysize="2.75 inches",
        batdescription1="3000 mAh",
        internalmemory="128 GB",
        cam2modules="10 MP",
    )
    report = score_document(parse_document(page), DEFAULT_ASPECTS)
    assert isinstance(report, ScoreReport)
    assert report.aspects[0].raw_score == 0.5
    assert report.total_raw_score == pytest.approx(4.4)
    assert report.total_weight == pytest.approx(5.9)
    assert report.final_score == pytest.approx(4.4 / 5.9)
    assert report.final_score_percent(2) == "74.58%"


def test_raw_score_is_not_clamped(device_page) -> None:
    page = device_page(batdescription1="6000 mAh")
    report = score_document(parse_document(page), DEFAULT_ASPECTS)
    assert isinstance(report, ScoreReport)
    battery = report.aspects[1]
    assert battery.name == "Battery size"
    assert battery.raw_score == 2.0
    assert raw_score(0.0, 10) == 0.0


def test_total_weight_is_order_independent(device_page) -> None:
    tree = parse_document(device_page())
    forward = score_document(tree, DEFAULT_ASPECTS)
    backward = score_document(tree, tuple(reversed(DEFAULT_ASPECTS)))
    assert forward.total_weight == math.fsum(a.weight for a in DEFAULT_ASPECTS)
    assert backward.total_weight == forward.total_weight
    assert backward.total_raw_score == forward.total_raw_score


def test_missing_node_aborts_without_partial_score(device_page) -> None:
    seen: list[AspectScore] = []
    tree = parse_document(device_page(internalmemory=None))
    result = score_document(tree, DEFAULT_ASPECTS, on_aspect=seen.append)
    assert isinstance(result, ExtractionFailure)
    assert result.code == ErrorCode.NOT_FOUND
    assert result.aspect == "Storage size"
    assert [s.name for s in seen] == ["Screen size", "Battery size"]


def test_unmatched_pattern_aborts(device_page) -> None:
    tree = parse_document(device_page(batdescription1="Removable Li-Ion battery"))
    result = score_document(tree, DEFAULT_ASPECTS)
    assert isinstance(result, ExtractionFailure)
    assert result.code == ErrorCode.NO_MATCH
    assert result.aspect == "Battery size"


def test_non_numeric_capture_is_format_error_not_zero(device_page) -> None:
    aspects = (
        Aspect(name="Camera", perfection=10, selector='td[data-spec="cam2modules"]', pattern=r"(\w+) MP"),
    )
    tree = parse_document(device_page(cam2modules="abc MP"))
    result = score_document(tree, aspects)
    assert isinstance(result, ExtractionFailure)
    assert result.code == ErrorCode.FORMAT_ERROR
    assert result.describe().startswith("Camera: ")


def test_shared_camera_selector_reads_camera_for_every_aspect(device_page) -> None:
    tree = parse_document(device_page())
    report = score_document(tree, DEFAULT_ASPECTS, shared_camera_selector=True)
    assert isinstance(report, ScoreReport)
    assert [a.value for a in report.aspects] == [20.0, 20.0, 20.0, 20.0]


def test_zero_weight_aspect_is_counted_but_contributes_nothing(device_page) -> None:
    aspects = (
        Aspect(name="Battery", perfection=2000, selector='td[data-spec="batdescription1"]', pattern=r"(\d+) mAh"),
        Aspect(
            name="Storage",
            perfection=16,
            selector='td[data-spec="internalmemory"]',
            pattern=r"(\d+) GB",
            weight=0,
        ),
    )
    report = score_document(parse_document(device_page()), aspects)
    assert isinstance(report, ScoreReport)
    assert report.total_weight == 1.0
    assert report.final_score == 2.0
    assert report.aspects[1].raw_score == 2.0


_BATTERY = Aspect(name="Battery", perfection=2000, selector='td[data-spec="batdescription1"]', pattern=r"(\d+) mAh")
_STORAGE = Aspect(name="Storage", perfection=16, selector='td[data-spec="internalmemory"]', pattern=r"(\d+) GB")


@pytest.mark.parametrize(
    "aspects",
    [
        (),
        (replace(_BATTERY, weight=0), replace(_STORAGE, weight=0)),
        (replace(_BATTERY, weight=1e308), replace(_STORAGE, weight=1e308)),
        (replace(_BATTERY, weight=math.inf),),
        (replace(_BATTERY, perfection=math.nan),),
    ],
)
def test_unusable_registry_is_rejected_before_extraction(device_page, aspects) -> None:
    seen: list[AspectScore] = []
    with pytest.raises(ConfigurationError):
        score_document(parse_document(device_page()), aspects, on_aspect=seen.append)
    assert seen == []


def test_overflowing_aspect_score_is_format_error(device_page) -> None:
    result = score_document(parse_document(device_page()), (replace(_BATTERY, perfection=1e-308),))
    assert isinstance(result, ExtractionFailure)
    assert result.code == ErrorCode.FORMAT_ERROR
    assert result.aspect == "Battery"


def test_overflowing_total_score_is_format_error(device_page) -> None:
    aspects = (replace(_BATTERY, perfection=4e-305), replace(_STORAGE, perfection=3.2e-307))
    result = score_document(parse_document(device_page()), aspects)
    assert isinstance(result, ExtractionFailure)
    assert result.code == ErrorCode.FORMAT_ERROR
    assert result.message == "total score is out of range"
