"""
Module: questions

Purpose:
    Provides the QuestionRecord dataclass - one fully parsed question
    recovered from a single worksheet row.

Key Functions:
    - QuestionRecord.applies_to(license_class): License membership check
    - QuestionRecord.to_dict() / QuestionRecord.from_dict(): Serialization

Dependencies:
    - .answers.AnswerSet
    - .categories.QuestionCategory, LicenseClass

Used By:
    - core.models.bank.QuestionBank
    - extractor.assembler
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import FrozenSet, Optional

from .answers import AnswerSet
from .categories import LicenseClass, QuestionCategory


@dataclass(frozen=True, eq=False)
class QuestionRecord:
    """
    Complete question representation (immutable).

    Attributes:
        number: Question number from the fixed-width prefix of text
        text: Full question text, prefix included
        answers: Possible answers and the correct index
        category: Question category
        license_classes: License classes the question is tagged for
        image_url: Optional image reference, used verbatim

    Equality and hashing use number only, so two records for the same
    question compare equal even if their text differs.

    Example:
        >>> q = QuestionRecord(
        ...     number=862,
        ...     text="0862. Before driving we must ensure...",
        ...     answers=AnswerSet(("A1", "A2", "A3", "A4"), 0, True),
        ...     category=QuestionCategory.CAR_KNOWLEDGE,
        ... )
        >>> q.answers.correct_answer
        'A1'
    """
    number: int
    text: str
    answers: AnswerSet
    category: QuestionCategory
    license_classes: FrozenSet[LicenseClass] = field(default_factory=frozenset)
    image_url: Optional[str] = None

    def __post_init__(self) -> None:
        if self.number < 0:
            raise ValueError(f"number cannot be negative: {self.number}")
        # Accept any iterable of classes but always store a frozenset
        if not isinstance(self.license_classes, frozenset):
            object.__setattr__(self, "license_classes", frozenset(self.license_classes))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, QuestionRecord):
            return NotImplemented
        return self.number == other.number

    def __hash__(self) -> int:
        return hash(self.number)

    @property
    def has_image(self) -> bool:
        return self.image_url is not None

    def applies_to(self, license_class: LicenseClass) -> bool:
        """Whether the question is tagged for license_class."""
        return license_class in self.license_classes

    def to_dict(self) -> dict:
        """
        Serialize to dictionary.

        License classes are emitted sorted by value so output is stable.
        """
        d = {
            "number": self.number,
            "text": self.text,
            "category": self.category.value,
            "answers": self.answers.to_dict(),
            "license_classes": sorted(c.value for c in self.license_classes),
        }
        if self.image_url is not None:
            d["image_url"] = self.image_url
        return d

    @classmethod
    def from_dict(cls, data: dict) -> QuestionRecord:
        return cls(
            number=data["number"],
            text=data["text"],
            answers=AnswerSet.from_dict(data["answers"]),
            category=QuestionCategory(data["category"]),
            license_classes=frozenset(LicenseClass(c) for c in data.get("license_classes", [])),
            image_url=data.get("image_url"),
        )

    def __repr__(self) -> str:
        return (
            f"QuestionRecord({self.number}, category={self.category}, "
            f"answers={len(self.answers)}, image={self.has_image})"
        )
