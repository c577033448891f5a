"""Attribute locator: find the specs sheet cell for a CSS selector."""

from __future__ import annotations

from typing import Union

from bs4 import BeautifulSoup, Tag

from ..domain.models import ErrorCode, ExtractionFailure

MODEL_NAME_SELECTOR = 'h1[data-spec="modelname"]'


def parse_document(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "lxml")


def locate(tree: BeautifulSoup | Tag, selector: str) -> Union[Tag, ExtractionFailure]:
    """Return the first node matching ``selector``, or a NOT_FOUND failure."""
    node = tree.select_one(selector)
    if node is None:
        return ExtractionFailure(
            code=ErrorCode.NOT_FOUND,
            message="no element matches selector",
            detail=selector,
        )
    return node


def inner_html(node: Tag) -> str:
    return node.decode_contents()


def read_device_name(tree: BeautifulSoup | Tag) -> Union[str, ExtractionFailure]:
    node = locate(tree, MODEL_NAME_SELECTOR)
    if isinstance(node, ExtractionFailure):
        return ExtractionFailure(
            code=ErrorCode.NOT_FOUND,
            message="No device info found on this page.",
            detail=MODEL_NAME_SELECTOR,
        )
    return node.get_text(strip=True)
