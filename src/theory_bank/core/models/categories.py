"""
Module: categories

Purpose:
    Closed enumerations used by question records: the question category
    (with its fixed Hebrew label table) and the license class.

Key Classes:
    - QuestionCategory: Category enum with label round-trip
    - LicenseClass: Vehicle license class enum
    - UnknownCategoryError: Raised for labels outside the closed table

Key Constants:
    - LICENSE_TAG_LITERALS: Bracketed tag literal -> LicenseClass

Used By:
    - core.models.questions.QuestionRecord
    - extractor.markup: License tag scanning
    - extractor.assembler: Category resolution
"""

from __future__ import annotations

from enum import Enum
from typing import Dict


class UnknownCategoryError(ValueError):
    """Category label is not one of the fixed labels."""

    def __init__(self, label: str):
        super().__init__(f"Unknown question category label: {label!r}")
        self.label = label


class QuestionCategory(str, Enum):
    """Question category (closed set)."""
    SAFETY = "safety"
    TRAFFIC_LAWS = "traffic_laws"
    ROAD_SIGNS = "road_signs"
    CAR_KNOWLEDGE = "car_knowledge"

    def __str__(self) -> str:
        return self.value

    @property
    def label(self) -> str:
        """Canonical label as it appears in the source workbook."""
        return _CATEGORY_TO_LABEL[self]

    @classmethod
    def from_label(cls, label: str) -> QuestionCategory:
        """
        Resolve a workbook label to its category.

        Matching is exact: no trimming, no case folding.

        Raises:
            UnknownCategoryError: If label is not in the fixed table
        """
        try:
            return _LABEL_TO_CATEGORY[label]
        except KeyError:
            raise UnknownCategoryError(label) from None


_CATEGORY_TO_LABEL: Dict[QuestionCategory, str] = {
    QuestionCategory.SAFETY: "בטיחות",
    QuestionCategory.TRAFFIC_LAWS: "חוקי התנועה",
    QuestionCategory.ROAD_SIGNS: "תמרורים",
    QuestionCategory.CAR_KNOWLEDGE: "הכרת הרכב",
}

_LABEL_TO_CATEGORY: Dict[str, QuestionCategory] = {
    label: category for category, label in _CATEGORY_TO_LABEL.items()
}


class LicenseClass(str, Enum):
    """Vehicle license class a question applies to."""
    A = "A"
    B = "B"
    C1 = "C1"
    C = "C"
    D = "D"

    def __str__(self) -> str:
        return self.value


# Literals are matched byte-for-byte. The "B" tag uses CYRILLIC CAPITAL
# LETTER VE (U+0412), and the C1/C tags are swapped in the source data.
LICENSE_TAG_LITERALS: Dict[str, LicenseClass] = {
    "«A»": LicenseClass.A,
    "«В»": LicenseClass.B,
    "«C1»": LicenseClass.C,
    "«C»": LicenseClass.C1,
    "«D»": LicenseClass.D,
}
