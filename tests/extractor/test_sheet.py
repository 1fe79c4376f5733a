"""
Tests for extractor.sheet

Test Coverage:
- resolve_columns(): Order independence, exact matching, missing headers
- iter_sheet_rows(): Header skipping, row numbering, blank rows, first sheet only
- open_workbook(): Bytes/path input, format errors
"""

import io

import pytest
from openpyxl import Workbook

from theory_bank.extractor.config import ParserConfig
from theory_bank.extractor.sheet import (
    ColumnMap,
    MissingAnswerColumnError,
    MissingCategoryColumnError,
    MissingColumnError,
    MissingQuestionColumnError,
    WorkbookFormatError,
    iter_sheet_rows,
    open_workbook,
    resolve_columns,
)

CANONICAL = ("title2", "description4", "category")


class TestResolveColumns:
    """Tests for header resolution."""

    def test_resolve_when_canonical_order_then_positions_match(self):
        assert resolve_columns(CANONICAL) == ColumnMap(question=0, answer=1, category=2)

    def test_resolve_when_permuted_with_extras_then_positions_follow_names(self):
        header = ("id", "category", None, "title2", "notes", "description4")
        assert resolve_columns(header) == ColumnMap(question=3, answer=5, category=1)

    @pytest.mark.parametrize(
        "absent, error_cls",
        [
            ("title2", MissingQuestionColumnError),
            ("description4", MissingAnswerColumnError),
            ("category", MissingCategoryColumnError),
        ],
    )
    def test_resolve_when_one_missing_then_specific_error(self, absent, error_cls):
        header = [name for name in CANONICAL if name != absent]
        with pytest.raises(error_cls) as exc_info:
            resolve_columns(header)
        assert exc_info.value.column == absent
        assert exc_info.value.missing == (absent,)

    def test_resolve_when_several_missing_then_all_reported(self):
        with pytest.raises(MissingAnswerColumnError) as exc_info:
            resolve_columns(("title2",))
        assert exc_info.value.missing == ("description4", "category")
        assert "category" in str(exc_info.value)

    def test_resolve_when_all_missing_then_question_error_first(self):
        with pytest.raises(MissingQuestionColumnError) as exc_info:
            resolve_columns(())
        assert exc_info.value.missing == CANONICAL

    def test_resolve_when_case_differs_then_not_matched(self):
        with pytest.raises(MissingQuestionColumnError):
            resolve_columns(("Title2", "description4", "category"))

    def test_resolve_when_custom_names_then_used(self):
        config = ParserConfig(question_column="q", answer_column="a", category_column="c")
        assert resolve_columns(("c", "a", "q"), config) == ColumnMap(question=2, answer=1, category=0)

    def test_missing_column_errors_share_base_class(self):
        for cls in (MissingQuestionColumnError, MissingAnswerColumnError, MissingCategoryColumnError):
            assert issubclass(cls, MissingColumnError)


class TestIterSheetRows:
    """Tests for lazy row iteration."""

    @pytest.fixture
    def workbook(self) -> Workbook:
        wb = Workbook()
        ws = wb.active
        ws.append(["category", "extra", "title2", "description4"])
        ws.append(["cat-1", "x", "q-1", "a-1"])
        ws.append([None, None, None, None])
        ws.append(["cat-2", "y", "q-2", "a-2"])
        return wb

    def test_iter_when_rows_then_header_excluded_and_values_mapped(self, workbook):
        rows = list(iter_sheet_rows(workbook))
        assert [(r.question, r.answers, r.category) for r in rows] == [
            ("q-1", "a-1", "cat-1"),
            (None, None, None),
            ("q-2", "a-2", "cat-2"),
        ]

    def test_iter_when_empty_row_then_yielded_as_blank(self, workbook):
        rows = list(iter_sheet_rows(workbook))
        assert [r.index for r in rows] == [2, 3, 4]
        assert [r.is_blank for r in rows] == [False, True, False]

    def test_iter_when_header_missing_then_raises_before_iteration(self):
        wb = Workbook()
        wb.active.append(["title2", "category"])
        with pytest.raises(MissingAnswerColumnError):
            iter_sheet_rows(wb)

    def test_iter_when_sheet_empty_then_question_error(self):
        with pytest.raises(MissingQuestionColumnError):
            iter_sheet_rows(Workbook())

    def test_iter_when_second_sheet_then_ignored(self, workbook):
        other = workbook.create_sheet("other")
        other.append(list(CANONICAL))
        other.append(["q-x", "a-x", "cat-x"])
        rows = list(iter_sheet_rows(workbook))
        assert len(rows) == 3

    def test_iter_when_consumed_then_not_restartable(self, workbook):
        rows = iter_sheet_rows(workbook)
        assert len(list(rows)) == 3
        assert list(rows) == []


class TestOpenWorkbook:
    """Tests for workbook opening."""

    def test_open_when_bytes_then_reads_first_sheet(self, make_xlsx):
        data = make_xlsx(CANONICAL, [["q", "a", "c"]])
        wb = open_workbook(data)
        try:
            rows = list(iter_sheet_rows(wb))
        finally:
            wb.close()
        assert [(r.question, r.answers, r.category) for r in rows] == [("q", "a", "c")]

    def test_open_when_file_object_then_reads(self, make_xlsx):
        wb = open_workbook(io.BytesIO(make_xlsx(CANONICAL, [])))
        try:
            assert list(iter_sheet_rows(wb)) == []
        finally:
            wb.close()

    def test_open_when_not_xlsx_bytes_then_format_error(self):
        with pytest.raises(WorkbookFormatError):
            open_workbook(b"definitely not a zip archive")

    def test_open_when_path_missing_then_format_error(self, tmp_path):
        with pytest.raises(WorkbookFormatError) as exc_info:
            open_workbook(tmp_path / "missing.xlsx")
        assert isinstance(exc_info.value.__cause__, OSError)
