"""
Schema Validation Utilities

Validates serialized question records before they are turned back into
QuestionRecord objects.

Two levels:
- Basic (default): required fields, enum values, answer index bounds
- Strict: basic checks plus full JSON Schema validation with jsonschema
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import jsonschema

from ..models.categories import LicenseClass, QuestionCategory


QUESTION_SCHEMA_VERSION = 1

_CATEGORY_VALUES = tuple(c.value for c in QuestionCategory)
_LICENSE_VALUES = tuple(c.value for c in LicenseClass)

# Load schemas lazily
_SCHEMAS: dict[str, dict] = {}


def _load_schema(name: str) -> dict:
    """Load a schema from the schemas directory."""
    if name not in _SCHEMAS:
        schema_path = Path(__file__).parent / f"{name}.schema.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")
        with open(schema_path, "r", encoding="utf-8") as f:
            _SCHEMAS[name] = json.load(f)
    return _SCHEMAS[name]


class ValidationError(Exception):
    """Raised when data fails schema validation."""

    def __init__(self, message: str, path: str = "", errors: list[str] | None = None):
        super().__init__(message)
        self.path = path
        self.errors = errors or []


def _join(base: str, name: str) -> str:
    return f"{base}.{name}" if base else name


def validate_question(data: dict[str, Any], *, strict: bool = False, path: str = "") -> None:
    """
    Validate a serialized question record.

    Args:
        data: Question dictionary (QuestionRecord.to_dict() format)
        strict: If True, also validate against question.schema.json
        path: Prefix for error paths, e.g. "questions[3]"

    Raises:
        ValidationError: If data is invalid
    """
    if not isinstance(data, dict):
        raise ValidationError("question must be a dict", path=path)

    required = ["number", "text", "category", "answers"]
    missing = [f for f in required if f not in data]
    if missing:
        raise ValidationError(
            f"Missing required fields: {missing}",
            path=path,
            errors=[f"Missing field: {f}" for f in missing]
        )

    number = data["number"]
    if not isinstance(number, int) or isinstance(number, bool) or number < 0:
        raise ValidationError(
            f"Invalid number: {number!r} (must be non-negative integer)",
            path=_join(path, "number")
        )

    if not isinstance(data["text"], str):
        raise ValidationError("text must be a string", path=_join(path, "text"))

    category = data["category"]
    if category not in _CATEGORY_VALUES:
        raise ValidationError(
            f"Invalid category: {category!r}",
            path=_join(path, "category")
        )

    for cls in data.get("license_classes", []):
        if cls not in _LICENSE_VALUES:
            raise ValidationError(
                f"Invalid license class: {cls!r}",
                path=_join(path, "license_classes")
            )

    image_url = data.get("image_url")
    if image_url is not None and not isinstance(image_url, str):
        raise ValidationError("image_url must be a string", path=_join(path, "image_url"))

    _validate_answers(data["answers"], _join(path, "answers"))

    if strict:
        schema = _load_schema("question")
        try:
            jsonschema.validate(data, schema)
        except jsonschema.ValidationError as e:
            raise ValidationError(
                f"Schema validation failed: {e.message}",
                path=_join(path, ".".join(str(p) for p in e.absolute_path)),
                errors=[e.message]
            )


def _validate_answers(data: Any, path: str) -> None:
    """Validate the answers block, including the index invariant."""
    if not isinstance(data, dict):
        raise ValidationError("answers must be a dict", path=path)

    answers = data.get("answers")
    if not isinstance(answers, list) or not all(isinstance(a, str) for a in answers):
        raise ValidationError(
            "answers.answers must be a list of strings",
            path=_join(path, "answers")
        )

    index = data.get("correct_index", 0)
    if not isinstance(index, int) or index < 0:
        raise ValidationError(
            f"Invalid correct_index: {index!r} (must be non-negative integer)",
            path=_join(path, "correct_index")
        )
    # The index is the answer count when the marker was seen, so a marker
    # after the last collected answer gives index == len(answers)
    if index > len(answers):
        raise ValidationError(
            f"correct_index {index} out of range for {len(answers)} answers",
            path=_join(path, "correct_index")
        )
