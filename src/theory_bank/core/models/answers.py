"""
Module: answers

Purpose:
    Provides the AnswerSet dataclass - the ordered possible answers of a
    question together with the index of the correct one.

Key Functions:
    - AnswerSet.correct_answer: The marked answer text (or None)
    - AnswerSet.reordered(order): Permute answers, remapping the index
    - AnswerSet.to_dict() / AnswerSet.from_dict(): Serialization

Invariants:
    The (answers, correct_index) pair is a single unit. Any reordering
    must go through reordered() so the index follows its answer.

Used By:
    - core.models.questions.QuestionRecord
    - extractor.markup: Built by the decoder
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence, Tuple


@dataclass(frozen=True)
class AnswerSet:
    """
    Possible answers in document order plus the correct index.

    Attributes:
        answers: Answer strings, at most four in well-formed input
        correct_index: Position of the correct answer. Recorded at scan
            time as the number of answers collected before the marker.
        marker_found: False when no correct-answer marker was present
            and correct_index is only the default 0
    """
    answers: Tuple[str, ...] = ()
    correct_index: int = 0
    marker_found: bool = False

    def __post_init__(self) -> None:
        if self.correct_index < 0:
            raise ValueError(f"correct_index cannot be negative: {self.correct_index}")

    def __len__(self) -> int:
        return len(self.answers)

    @property
    def correct_answer(self) -> Optional[str]:
        """Text of the correct answer, None if the index is out of range."""
        if self.correct_index < len(self.answers):
            return self.answers[self.correct_index]
        return None

    def reordered(self, order: Sequence[int]) -> AnswerSet:
        """
        Return a new AnswerSet with answers permuted.

        Args:
            order: New position -> old position, a permutation of
                range(len(answers))

        Raises:
            ValueError: If order is not a permutation of the answers
        """
        if sorted(order) != list(range(len(self.answers))):
            raise ValueError(f"order must be a permutation of {len(self.answers)} answers: {list(order)}")

        correct_index = self.correct_index
        if self.correct_index < len(self.answers):
            correct_index = list(order).index(self.correct_index)

        return AnswerSet(
            answers=tuple(self.answers[i] for i in order),
            correct_index=correct_index,
            marker_found=self.marker_found,
        )

    def to_dict(self) -> dict:
        return {
            "answers": list(self.answers),
            "correct_index": self.correct_index,
            "marker_found": self.marker_found,
        }

    @classmethod
    def from_dict(cls, data: dict) -> AnswerSet:
        return cls(
            answers=tuple(data.get("answers", [])),
            correct_index=data.get("correct_index", 0),
            marker_found=data.get("marker_found", False),
        )
