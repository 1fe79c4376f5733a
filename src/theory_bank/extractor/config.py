"""
Module: extractor.config

Purpose:
    Configuration dataclass for the workbook extractor. Holds the header
    names, markup conventions and failure policy used by a parse.

Key Classes:
    - ParserConfig: Immutable parser settings

Dependencies:
    - dataclasses: For frozen dataclass support

Used By:
    - extractor.sheet: Column names
    - extractor.markup: Answer count, marker prefix, tag literals
    - extractor.assembler: Number width, strict mode
"""

from dataclasses import dataclass
from typing import Tuple

from theory_bank.core.models.categories import LICENSE_TAG_LITERALS, LicenseClass


@dataclass(frozen=True)
class ParserConfig:
    """
    Configuration for question bank parsing.

    Attributes:
        question_column: Header of the question text column (default "title2")
        answer_column: Header of the answer markup column (default "description4")
        category_column: Header of the category label column (default "category")
        answer_count: Text runs taken as answers before the metadata line (default 4)
        marker_prefix: Span id prefix marking the correct answer (default "correctAnswer")
        number_width: Digits in the question number prefix (default 4)
        license_tags: (bracketed tag literal, license class) pairs
        strict: Raise on the first bad row instead of collecting row errors
    """
    question_column: str = "title2"
    answer_column: str = "description4"
    category_column: str = "category"
    answer_count: int = 4
    marker_prefix: str = "correctAnswer"
    number_width: int = 4
    license_tags: Tuple[Tuple[str, LicenseClass], ...] = tuple(LICENSE_TAG_LITERALS.items())
    strict: bool = False

    def __post_init__(self) -> None:
        if self.answer_count < 1:
            raise ValueError(f"answer_count must be positive: {self.answer_count}")
        if self.number_width < 1:
            raise ValueError(f"number_width must be positive: {self.number_width}")
        names = (self.question_column, self.answer_column, self.category_column)
        if len(set(names)) != len(names):
            raise ValueError(f"column names must be distinct: {names}")


DEFAULT_CONFIG = ParserConfig()
