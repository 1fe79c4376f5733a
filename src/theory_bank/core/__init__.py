"""
Theory Bank Core Package

Shared data models and schema validation. These models are the single
source of truth for everything the extractor produces.
"""

from .models import (
    AnswerSet,
    LicenseClass,
    QuestionBank,
    QuestionCategory,
    QuestionRecord,
    RowError,
    UnknownCategoryError,
)

__all__ = [
    "AnswerSet",
    "LicenseClass",
    "QuestionBank",
    "QuestionCategory",
    "QuestionRecord",
    "RowError",
    "UnknownCategoryError",
]
