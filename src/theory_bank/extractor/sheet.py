"""
Module: extractor.sheet

Purpose:
    Locate the required columns of a question workbook and iterate its
    data rows. Only the first worksheet is read.

Key Functions:
    - open_workbook(): Open a workbook from a path, bytes or file object
    - resolve_columns(): Map required header names to column positions
    - iter_sheet_rows(): Lazily yield data rows (header excluded)

Key Classes:
    - SheetRow: Raw cell values of one data row
    - ColumnMap: Resolved column positions
    - WorkbookFormatError: Unreadable workbook
    - MissingColumnError (+ one subclass per required column)

Dependencies:
    - openpyxl: xlsx reading

Used By:
    - extractor.assembler
"""

from __future__ import annotations

import io
import logging
import zipfile
from dataclasses import dataclass
from pathlib import Path
from typing import Any, BinaryIO, Iterator, List, Optional, Sequence, Tuple, Type, Union

import openpyxl
from openpyxl.utils.exceptions import InvalidFileException
from openpyxl.workbook.workbook import Workbook

from .config import DEFAULT_CONFIG, ParserConfig

logger = logging.getLogger(__name__)

WorkbookSource = Union[str, Path, bytes, bytearray, BinaryIO]


class WorkbookFormatError(Exception):
    """Workbook could not be opened or is not a valid xlsx file."""
    pass


class MissingColumnError(Exception):
    """
    A required header is absent from the first worksheet.

    Attributes:
        column: Header name this error is about
        missing: Every required header that was absent, in lookup order
    """

    def __init__(self, column: str, missing: Sequence[str] = ()):
        self.column = column
        self.missing: Tuple[str, ...] = tuple(missing) or (column,)
        message = f"Did not find {column!r} header in the worksheet"
        if len(self.missing) > 1:
            message += f" (missing: {', '.join(repr(m) for m in self.missing)})"
        super().__init__(message)


class MissingQuestionColumnError(MissingColumnError):
    """Question text column (title2) is missing."""


class MissingAnswerColumnError(MissingColumnError):
    """Answer markup column (description4) is missing."""


class MissingCategoryColumnError(MissingColumnError):
    """Category column is missing."""


@dataclass(frozen=True)
class ColumnMap:
    """Zero-based positions of the required columns."""
    question: int
    answer: int
    category: int


@dataclass(frozen=True)
class SheetRow:
    """
    Raw cell values of one data row.

    Attributes:
        index: 1-based worksheet row number (the header is row 1)
        question: Question column value
        answers: Answer markup column value
        category: Category column value
    """
    index: int
    question: Any
    answers: Any
    category: Any

    @property
    def is_blank(self) -> bool:
        """True if all three required cells are empty."""
        return self.question is None and self.answers is None and self.category is None


def open_workbook(source: WorkbookSource) -> Workbook:
    """
    Open a workbook read-only with cached formula values.

    Args:
        source: Path, raw xlsx bytes, or a binary file object

    Returns:
        openpyxl Workbook. Caller is responsible for close().

    Raises:
        WorkbookFormatError: If the file is missing, unreadable or not xlsx
    """
    if isinstance(source, (bytes, bytearray)):
        source = io.BytesIO(bytes(source))

    try:
        return openpyxl.load_workbook(source, read_only=True, data_only=True)
    except (InvalidFileException, zipfile.BadZipFile, KeyError, OSError, ValueError) as e:
        raise WorkbookFormatError(f"Could not open workbook: {e}") from e


def _find_column(header: Sequence[Any], name: str) -> Optional[int]:
    for position, value in enumerate(header):
        if isinstance(value, str) and value == name:
            return position
    return None


def resolve_columns(header: Sequence[Any], config: ParserConfig = DEFAULT_CONFIG) -> ColumnMap:
    """
    Map the required header names to column positions.

    Matching is exact and case-sensitive. Column order is irrelevant and
    extra columns are ignored. All three lookups run before anything is
    raised, so the error lists every missing header.

    Args:
        header: First-row cell values
        config: Supplies the three header names

    Returns:
        ColumnMap with zero-based positions

    Raises:
        MissingQuestionColumnError: Question header absent (checked first)
        MissingAnswerColumnError: Answer header absent
        MissingCategoryColumnError: Category header absent
    """
    lookups: List[Tuple[str, Type[MissingColumnError]]] = [
        (config.question_column, MissingQuestionColumnError),
        (config.answer_column, MissingAnswerColumnError),
        (config.category_column, MissingCategoryColumnError),
    ]
    positions = [_find_column(header, name) for name, _ in lookups]

    missing = [name for (name, _), pos in zip(lookups, positions) if pos is None]
    for name in missing:
        logger.error(f"Required header {name!r} not found in worksheet")

    for (name, error_cls), pos in zip(lookups, positions):
        if pos is None:
            raise error_cls(name, missing)

    question, answer, category = positions
    logger.debug(f"Resolved columns: question={question}, answer={answer}, category={category}")
    return ColumnMap(question=question, answer=answer, category=category)


def first_worksheet(workbook: Workbook):
    """Return the first worksheet of the workbook."""
    sheets = workbook.worksheets
    if not sheets:
        raise WorkbookFormatError("Workbook contains no worksheets")
    if len(sheets) > 1:
        logger.debug(f"Workbook has {len(sheets)} worksheets, reading {sheets[0].title!r} only")
    return sheets[0]


def iter_sheet_rows(workbook: Workbook, config: ParserConfig = DEFAULT_CONFIG) -> Iterator[SheetRow]:
    """
    Resolve columns and return a lazy iterator over the data rows.

    Columns are resolved immediately, so a missing header raises here
    rather than on first iteration. The returned iterator is single-pass.
    Every data row is yielded, blank ones included.

    Raises:
        MissingColumnError: If a required header is absent
        WorkbookFormatError: If the workbook has no worksheets
    """
    sheet = first_worksheet(workbook)
    rows = sheet.iter_rows(values_only=True)
    header = next(rows, None) or ()
    columns = resolve_columns(header, config)
    return _iter_data_rows(rows, columns)


def _cell(row: Sequence[Any], position: int) -> Any:
    # Read-only sheets without a stored dimension return ragged rows
    return row[position] if position < len(row) else None


def _iter_data_rows(rows: Iterator[Sequence[Any]], columns: ColumnMap) -> Iterator[SheetRow]:
    for index, row in enumerate(rows, start=2):
        yield SheetRow(
            index=index,
            question=_cell(row, columns.question),
            answers=_cell(row, columns.answer),
            category=_cell(row, columns.category),
        )
