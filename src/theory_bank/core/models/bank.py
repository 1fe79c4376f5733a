"""
Module: bank

Purpose:
    Provides QuestionBank - the ordered result of parsing one worksheet -
    and RowError, the record of a data row that could not be assembled.

Key Functions:
    - QuestionBank.by_category(): Filter by category
    - QuestionBank.for_license(): Filter by license class
    - QuestionBank.get(number): Look up a question by number
    - QuestionBank.to_dict() / QuestionBank.from_dict(): Serialization

Dependencies:
    - .questions.QuestionRecord
    - core.schemas.validator: Record validation on from_dict

Used By:
    - extractor.assembler: Returned from every parse
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Tuple

from ..schemas.validator import validate_question
from .categories import LicenseClass, QuestionCategory
from .questions import QuestionRecord


@dataclass(frozen=True)
class RowError:
    """
    A data row that failed to assemble.

    Attributes:
        row_index: 1-based worksheet row number (header is row 1)
        column: Header name of the offending column, if known
        message: Human-readable reason
    """
    row_index: int
    column: Optional[str]
    message: str

    def __str__(self) -> str:
        where = f"row {self.row_index}"
        if self.column:
            where += f", column {self.column!r}"
        return f"{where}: {self.message}"

    def to_dict(self) -> dict:
        return {
            "row_index": self.row_index,
            "column": self.column,
            "message": self.message,
        }


@dataclass(frozen=True)
class QuestionBank:
    """
    All questions recovered from one worksheet, in worksheet order.

    Attributes:
        questions: Parsed records
        errors: Rows skipped because they could not be assembled.
            Always empty when parsed with strict=True.
    """
    questions: Tuple[QuestionRecord, ...] = ()
    errors: Tuple[RowError, ...] = field(default=())

    def __len__(self) -> int:
        return len(self.questions)

    def __iter__(self) -> Iterator[QuestionRecord]:
        return iter(self.questions)

    @property
    def ok(self) -> bool:
        """True if every data row produced a record."""
        return not self.errors

    def get(self, number: int) -> Optional[QuestionRecord]:
        """First question with the given number, or None."""
        for question in self.questions:
            if question.number == number:
                return question
        return None

    def by_category(self, category: QuestionCategory) -> List[QuestionRecord]:
        return [q for q in self.questions if q.category == category]

    def for_license(self, license_class: LicenseClass) -> List[QuestionRecord]:
        return [q for q in self.questions if q.applies_to(license_class)]

    def to_dict(self) -> dict:
        return {
            "questions": [q.to_dict() for q in self.questions],
            "errors": [e.to_dict() for e in self.errors],
        }

    @classmethod
    def from_dict(cls, data: dict, *, validate: bool = True, strict: bool = False) -> QuestionBank:
        """
        Deserialize from dictionary.

        Args:
            data: Dict from to_dict()
            validate: Validate each question record before building it
            strict: Use full JSON schema validation (requires validate)

        Raises:
            ValidationError: If validate=True and a record is invalid
        """
        questions = []
        for i, item in enumerate(data.get("questions", [])):
            if validate:
                validate_question(item, strict=strict, path=f"questions[{i}]")
            questions.append(QuestionRecord.from_dict(item))

        errors = tuple(
            RowError(
                row_index=e["row_index"],
                column=e.get("column"),
                message=e["message"],
            )
            for e in data.get("errors", [])
        )
        return cls(questions=tuple(questions), errors=errors)
