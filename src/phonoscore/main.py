"""Command-line entrypoint: score one GSMArena device page."""

from __future__ import annotations

import argparse
import asyncio
import sys
from typing import Optional, Sequence, TextIO

import aiohttp

from .config.settings import PhonoscoreSettings, get_settings
from .domain.errors import ConfigurationError, InvalidURLError, PhonoscoreError
from .domain.models import ExtractionFailure, ScoreReport
from .observability.logger import configure_logging, get_logger
from .scoring.registry import build_registry
from .scraping.page_fetcher import PageFetcher
from .services.device_scorer import DeviceScoringService

logger = get_logger(__name__)

# Pages used while developing the aspect expressions:
#   https://www.gsmarena.com/samsung_galaxy_tab_s3_9_7-8554.php
#   https://www.gsmarena.com/xiaomi_redmi_note_6_pro-9333.php
#   https://www.gsmarena.com/vivo_nex_dual_display-9435.php
#   https://www.gsmarena.com/nokia_110-4755.php


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="phonoscore", description="Score a mobile device from its GSMArena page.")
    parser.add_argument("url", nargs="?", help="URL of the device page (prompted for when omitted)")
    parser.add_argument("--aspects-file", help="JSON file with aspect definitions")
    parser.add_argument(
        "--legacy-shared-selector",
        action="store_true",
        help="extract every aspect with the selfie camera selector, as the first release did",
    )
    return parser


def resolve_settings(args: argparse.Namespace) -> PhonoscoreSettings:
    try:
        settings = get_settings()
        overrides: dict[str, object] = {}
        if args.aspects_file:
            overrides["aspects_file"] = args.aspects_file
        if args.legacy_shared_selector:
            overrides["shared_camera_selector"] = True
        if overrides:
            settings = settings.model_copy(update=overrides)
            settings.validate()
    except ValueError as e:
        raise ConfigurationError("invalid settings", detail=str(e)) from e
    return settings


def print_report(report: ScoreReport, out: TextIO) -> None:
    print(report.device_name, file=out)
    for aspect in report.aspects:
        print(f"Evaluating {aspect.name}", file=out)
        print(f"\tRaw score {aspect.raw_score:.2%}", file=out)
    print(file=out)
    print(f"This mobile device achieved a score of {report.final_score_percent()}", file=out)


async def run(
    url: str,
    settings: PhonoscoreSettings,
    *,
    out: Optional[TextIO] = None,
    err: Optional[TextIO] = None,
) -> int:
    out = out or sys.stdout
    err = err or sys.stderr
    aspects = build_registry(settings)

    async with aiohttp.ClientSession() as session:
        fetcher = PageFetcher(
            session,
            timeout_seconds=settings.fetch_timeout_seconds,
            user_agent=settings.user_agent,
        )
        service = DeviceScoringService(
            fetcher,
            aspects,
            shared_camera_selector=settings.shared_camera_selector,
        )
        result = await service.score_url(url)

    if isinstance(result, ExtractionFailure):
        print(f"{result.code.value}: {result.describe()}", file=err)
        return 1

    print_report(result, out)
    return 0


def read_url() -> str:
    try:
        return input("URL of gsmarena page: ")
    except EOFError as e:
        raise InvalidURLError("That's not a valid URL.", detail="no input") from e


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        settings = resolve_settings(args)
        configure_logging()

        url = args.url if args.url else read_url()
        logger.info("scoring_requested", url=url, aspects_file=settings.aspects_file)
        return asyncio.run(run(url.strip(), settings))
    except PhonoscoreError as e:
        detail = getattr(e, "info", None)
        suffix = f" ({detail.detail})" if detail is not None and detail.detail else ""
        print(f"{e}{suffix}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
