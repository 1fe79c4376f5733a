"""
Module: extractor

Purpose:
    Workbook extraction: read the first worksheet of a theory-test
    workbook and rebuild typed question records from its cells.

Key Functions:
    - parse_xlsx_file(): Parse a workbook on disk
    - parse_xlsx_bytes(): Parse an in-memory workbook
    - parse_workbook(): Parse an opened openpyxl Workbook
    - decode_answers(): Decode a single answer-markup cell
    - resolve_columns(): Locate the required columns in a header row

Used By:
    - Presentation layer (quiz UI)
"""

from .config import DEFAULT_CONFIG, ParserConfig
from .markup import DecodedAnswers, decode_answers, iter_tokens, parse_license_line
from .sheet import (
    ColumnMap,
    MissingAnswerColumnError,
    MissingCategoryColumnError,
    MissingColumnError,
    MissingQuestionColumnError,
    SheetRow,
    WorkbookFormatError,
    iter_sheet_rows,
    open_workbook,
    resolve_columns,
)
from .assembler import (
    RowParseError,
    assemble_record,
    parse_workbook,
    parse_xlsx_bytes,
    parse_xlsx_file,
)

__all__ = [
    "DEFAULT_CONFIG",
    "ParserConfig",
    "DecodedAnswers",
    "decode_answers",
    "iter_tokens",
    "parse_license_line",
    "ColumnMap",
    "MissingAnswerColumnError",
    "MissingCategoryColumnError",
    "MissingColumnError",
    "MissingQuestionColumnError",
    "SheetRow",
    "WorkbookFormatError",
    "iter_sheet_rows",
    "open_workbook",
    "resolve_columns",
    "RowParseError",
    "assemble_record",
    "parse_workbook",
    "parse_xlsx_bytes",
    "parse_xlsx_file",
]
