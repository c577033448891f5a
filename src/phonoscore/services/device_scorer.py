"""Device scoring orchestration service (business logic)."""

from __future__ import annotations

from typing import Optional, Sequence

from ..domain.errors import ScoringFailedError
from ..domain.models import Aspect, AspectScore, ExtractionFailure, ScoreReport, ScoringResult
from ..extraction.locator import parse_document, read_device_name
from ..observability.logger import get_logger
from ..scoring.aggregator import AspectCallback, score_document
from ..scoring.registry import check_aspects
from ..scraping.page_fetcher import PageFetcher

logger = get_logger(__name__)


class DeviceScoringService:
    """Service layer for scoring one device page.

    Responsibilities:
    - Fetch the page through the injected fetcher
    - Parse it and read the device name
    - Run the aspect registry over it and return a report or the first failure
    """

    def __init__(
        self,
        fetcher: PageFetcher,
        aspects: Sequence[Aspect],
        *,
        shared_camera_selector: bool = False,
    ):
        self._fetcher = fetcher
        self._aspects = check_aspects(aspects)
        self._shared_camera_selector = shared_camera_selector

    @property
    def aspects(self) -> tuple[Aspect, ...]:
        return self._aspects

    def score_html(
        self,
        html: str,
        *,
        source_url: str = "",
        on_aspect: Optional[AspectCallback] = None,
    ) -> ScoringResult:
        tree = parse_document(html)

        device_name = read_device_name(tree)
        if isinstance(device_name, ExtractionFailure):
            logger.warning("device_info_missing", url=source_url)
            return device_name
        logger.info("device_identified", url=source_url, device_name=device_name)

        def _observe(score: AspectScore) -> None:
            logger.info(
                "aspect_scored",
                aspect=score.name,
                value=score.value,
                perfection=score.perfection,
                weight=score.weight,
                raw_score=score.raw_score,
            )
            if on_aspect is not None:
                on_aspect(score)

        result = score_document(
            tree,
            self._aspects,
            device_name=device_name,
            shared_camera_selector=self._shared_camera_selector,
            on_aspect=_observe,
        )
        if isinstance(result, ExtractionFailure):
            logger.warning(
                "scoring_aborted",
                url=source_url,
                aspect=result.aspect,
                error_code=result.code.value,
                error_message=result.message,
                detail=result.detail,
            )
        else:
            logger.info("scoring_completed", url=source_url, final_score=result.final_score)
        return result

    async def score_url(self, url: str, *, on_aspect: Optional[AspectCallback] = None) -> ScoringResult:
        page = await self._fetcher.fetch_html(url)
        return self.score_html(page.html, source_url=page.url, on_aspect=on_aspect)

    async def score_url_or_raise(self, url: str, *, on_aspect: Optional[AspectCallback] = None) -> ScoreReport:
        result = await self.score_url(url, on_aspect=on_aspect)
        if isinstance(result, ExtractionFailure):
            raise ScoringFailedError(result)
        return result
