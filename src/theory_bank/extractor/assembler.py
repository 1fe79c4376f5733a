"""
Module: extractor.assembler

Purpose:
    Turn worksheet rows into QuestionRecord objects and collect them
    into a QuestionBank. Main entry point of the extractor.

Key Functions:
    - parse_xlsx_file(): Parse a workbook on disk
    - parse_xlsx_bytes(): Parse an in-memory workbook
    - parse_workbook(): Parse an already opened openpyxl Workbook
    - assemble_record(): Build one record from one SheetRow

Key Classes:
    - RowParseError: Raised in strict mode for the first bad row

Failure policy:
    Missing required headers and unreadable workbooks always abort.
    Row-level failures (unknown category, bad number prefix, non-text
    cell, blank row) are collected on QuestionBank.errors and the parse continues,
    unless config.strict is set, in which case the first one raises.

Dependencies:
    - extractor.sheet: Column resolution and row iteration
    - extractor.markup: Answer decoding
    - core.models: Output types

Used By:
    - Presentation layer (quiz UI)
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Any, List, Optional, Union

from openpyxl.workbook.workbook import Workbook

from theory_bank.core.models import (
    QuestionBank,
    QuestionCategory,
    QuestionRecord,
    RowError,
    UnknownCategoryError,
)

from .config import DEFAULT_CONFIG, ParserConfig
from .markup import decode_answers
from .sheet import SheetRow, iter_sheet_rows, open_workbook

logger = logging.getLogger(__name__)


class RowParseError(Exception):
    """A data row could not be assembled (strict mode only)."""

    def __init__(self, error: RowError):
        super().__init__(str(error))
        self.error = error


class _RowFailure(Exception):
    """Internal signal carrying the column and reason for a bad row."""

    def __init__(self, column: Optional[str], message: str):
        super().__init__(message)
        self.column = column
        self.message = message


def cell_text(value: Any) -> Optional[str]:
    """
    Convert a cell value to text, or None if it has no text form.

    Strings pass through unchanged. Integers and integral floats
    become their integer digits ("862", not "862.0"). Empty cells,
    booleans and dates have no text form.
    """
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return str(int(value)) if value.is_integer() else str(value)
    return None


def parse_number(text: str, width: int = DEFAULT_CONFIG.number_width) -> int:
    """
    Parse the fixed-width question number prefix.

    Example:
        >>> parse_number("0862. Before driving...")
        862

    Raises:
        ValueError: If text does not start with width ASCII digits
    """
    prefix = text[:width]
    if not re.fullmatch(rf"[0-9]{{{width}}}", prefix):
        raise ValueError(f"expected {width}-digit question number prefix, got {prefix!r}")
    return int(prefix)


def _require_text(value: Any, column: str) -> str:
    text = cell_text(value)
    if text is None:
        raise _RowFailure(column, f"cell is not text: {value!r}")
    return text


def assemble_record(row: SheetRow, config: ParserConfig = DEFAULT_CONFIG) -> QuestionRecord:
    """
    Build a QuestionRecord from one worksheet row.

    Raises:
        RowParseError: If the row cannot be assembled
    """
    try:
        return _assemble(row, config)
    except _RowFailure as failure:
        raise RowParseError(RowError(row.index, failure.column, failure.message)) from None


def _assemble(row: SheetRow, config: ParserConfig) -> QuestionRecord:
    if row.is_blank:
        raise _RowFailure(None, "row is empty")
    question = _require_text(row.question, config.question_column)
    markup = _require_text(row.answers, config.answer_column)
    category_label = _require_text(row.category, config.category_column)

    decoded = decode_answers(markup, config)
    if not decoded.answers.marker_found:
        logger.warning(f"Row {row.index}: no correct-answer marker, defaulting to first answer")

    try:
        category = QuestionCategory.from_label(category_label)
    except UnknownCategoryError as e:
        raise _RowFailure(config.category_column, str(e))

    try:
        number = parse_number(question, config.number_width)
    except ValueError as e:
        raise _RowFailure(config.question_column, str(e))

    return QuestionRecord(
        number=number,
        text=question,
        answers=decoded.answers,
        category=category,
        license_classes=decoded.license_classes,
        image_url=decoded.image_url,
    )


def parse_workbook(workbook: Workbook, config: ParserConfig = DEFAULT_CONFIG) -> QuestionBank:
    """
    Parse the first worksheet of an opened workbook.

    The workbook is not closed; the caller owns it.

    Args:
        workbook: openpyxl Workbook
        config: Parser settings

    Returns:
        QuestionBank with records in worksheet order and any row errors

    Raises:
        MissingColumnError: If a required header is absent
        RowParseError: On the first bad row, if config.strict
    """
    questions: List[QuestionRecord] = []
    errors: List[RowError] = []

    for row in iter_sheet_rows(workbook, config):
        try:
            questions.append(assemble_record(row, config))
        except RowParseError as e:
            if config.strict:
                raise
            logger.warning(f"Skipping {e.error}")
            errors.append(e.error)

    logger.info(f"Parsed {len(questions)} questions ({len(errors)} row errors)")
    return QuestionBank(questions=tuple(questions), errors=tuple(errors))


def _parse_source(source: Any, config: ParserConfig) -> QuestionBank:
    workbook = open_workbook(source)
    try:
        return parse_workbook(workbook, config)
    finally:
        workbook.close()


def parse_xlsx_bytes(data: bytes, config: ParserConfig = DEFAULT_CONFIG) -> QuestionBank:
    """
    Parse an xlsx workbook held in memory.

    Raises:
        WorkbookFormatError: If data is not a readable xlsx workbook
        MissingColumnError: If a required header is absent
    """
    return _parse_source(bytes(data), config)


def parse_xlsx_file(path: Union[str, Path], config: ParserConfig = DEFAULT_CONFIG) -> QuestionBank:
    """
    Parse an xlsx workbook from disk.

    Example:
        >>> bank = parse_xlsx_file(Path("theory_questions.xlsx"))
        >>> len(bank)
        1802
    """
    logger.debug(f"Opening workbook {path}")
    return _parse_source(Path(path), config)
