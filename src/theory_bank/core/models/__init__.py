"""
Core Models Package

Immutable data models for parsed theory-test questions. All models are
frozen dataclasses: a record is built once per worksheet row and never
changed afterwards.
"""

from .categories import LicenseClass, QuestionCategory, UnknownCategoryError, LICENSE_TAG_LITERALS
from .answers import AnswerSet
from .questions import QuestionRecord
from .bank import QuestionBank, RowError

__all__ = [
    "LicenseClass",
    "QuestionCategory",
    "UnknownCategoryError",
    "LICENSE_TAG_LITERALS",
    "AnswerSet",
    "QuestionRecord",
    "QuestionBank",
    "RowError",
]
