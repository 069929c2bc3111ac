from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True)
class FileClassification:
    category: str
    subtype: str
    is_well_formed: bool = True


class ExtractionStrategy(str, Enum):
    PDF = "pdf"
    IMAGE = "image"


def classify(mime_type: str) -> FileClassification:
    """Split a declared MIME type into (category, subtype).

    No case or whitespace normalization is applied. A value without the
    ``/`` separator yields a malformed classification that no strategy accepts.
    """
    category, sep, subtype = mime_type.partition("/")
    if not sep:
        return FileClassification(category=category, subtype="", is_well_formed=False)
    return FileClassification(category=category, subtype=subtype)


def select_strategy(classification: FileClassification) -> ExtractionStrategy | None:
    # pdf subtype wins over the image category, so "image/pdf" goes to the PDF parser
    if not classification.is_well_formed:
        return None
    if classification.subtype == "pdf":
        return ExtractionStrategy.PDF
    if classification.category == "image":
        return ExtractionStrategy.IMAGE
    return None
