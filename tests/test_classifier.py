"""Classification and strategy selection tests — pure functions, no deps."""
from __future__ import annotations

import pytest

from doctext.extraction.classifier import ExtractionStrategy, FileClassification, classify, select_strategy


@pytest.mark.parametrize("mime_type", ["image/png", "image/jpeg", "image/webp", "image/tiff"])
def test_image_types_classify_as_image(mime_type: str) -> None:
    result = classify(mime_type)
    assert result.category == "image"
    assert result.subtype == mime_type.split("/")[1]
    assert select_strategy(result) is ExtractionStrategy.IMAGE


def test_pdf_dispatches_to_pdf() -> None:
    result = classify("application/pdf")
    assert result == FileClassification(category="application", subtype="pdf")
    assert select_strategy(result) is ExtractionStrategy.PDF


def test_pdf_subtype_wins_over_image_category() -> None:
    assert select_strategy(classify("image/pdf")) is ExtractionStrategy.PDF


@pytest.mark.parametrize("mime_type", ["text/plain", "application/json", "application/octet-stream", "video/mp4"])
def test_other_types_are_unsupported(mime_type: str) -> None:
    assert select_strategy(classify(mime_type)) is None


def test_missing_separator_is_malformed() -> None:
    result = classify("image")
    assert result.is_well_formed is False
    assert select_strategy(result) is None


def test_no_normalization_applied() -> None:
    result = classify("IMAGE/PNG")
    assert result.category == "IMAGE"
    assert select_strategy(result) is None

    padded = classify(" image/png")
    assert padded.category == " image"
    assert select_strategy(padded) is None


def test_only_first_separator_splits() -> None:
    result = classify("image/svg+xml/extra")
    assert result.category == "image"
    assert result.subtype == "svg+xml/extra"


def test_classification_is_deterministic() -> None:
    assert classify("application/pdf") == classify("application/pdf")
