from __future__ import annotations

import logging
from typing import List, Optional

from openpyxl import Workbook
from openpyxl.cell.cell import ILLEGAL_CHARACTERS_RE
from openpyxl.styles import Alignment, Font, PatternFill
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet

from .models import Config
from .render import MAX_CHARACTERS_PER_CELL, truncate_value
from .report import CategoryResult, ComparisonReport

LOGGER = logging.getLogger(__name__)

DOCUMENT_SHEET = "Document"
VERIFICATION_SHEET = "Verification Errors"
DIFF_TITLE = "Same/Diff"
EQUAL_VALUE = "Equal"
DIFFERENT_VALUE = "Different"
MISSING_EQUAL_VALUE = "Equal*"
PROPERTY_TITLE = "Property"
SUMMARY_EQUAL = "Equals"
SUMMARY_DIFFERENT = "Diff"

GREEN = PatternFill(start_color="C6EFCE", end_color="C6EFCE", fill_type="solid")
YELLOW = PatternFill(start_color="FFEB9C", end_color="FFEB9C", fill_type="solid")
HEADER_FONT = Font(bold=True)
WRAP = Alignment(wrap_text=True, vertical="top")


def _autosize(ws: Worksheet, max_width: int = 60) -> None:
    for i, col in enumerate(ws.columns, start=1):
        max_len = max((len(str(c.value)) for c in col if c.value is not None), default=0)
        ws.column_dimensions[get_column_letter(i)].width = min(max_len + 2, max_width)


def _format(ws: Worksheet, headers: List[str], widths: Optional[List[int]] = None, max_width: int = 80) -> None:
    ws.freeze_panes = "A2"
    ws.auto_filter.ref = f"A1:{get_column_letter(len(headers))}1"
    for cell in ws[1]:
        cell.font = HEADER_FONT
    for row in ws.iter_rows(min_row=2):
        for cell in row:
            cell.alignment = WRAP
    if widths:
        for i, width in enumerate(widths, start=1):
            ws.column_dimensions[get_column_letter(i)].width = min(width, max_width)
    else:
        _autosize(ws, max_width)


def _mark(cell, equal: bool, equal_text: str = EQUAL_VALUE, different_text: str = DIFFERENT_VALUE) -> None:
    cell.value = equal_text if equal else different_text
    cell.fill = GREEN if equal else YELLOW


def _cell_text(value: Optional[str], max_chars: int = MAX_CHARACTERS_PER_CELL) -> str:
    """Cell text openpyxl accepts: control characters dropped, then truncated."""
    if value is None:
        return ""
    return truncate_value(ILLEGAL_CHARACTERS_RE.sub("", value), max_chars)


def _write_rows(ws: Worksheet, result: CategoryResult, max_chars: int) -> None:
    category = result.category
    diff_col = len(category.key_headers) + 1
    for row in result.rows:
        values = [_cell_text(v, max_chars) for v in category.key_values(row.key)]
        values.append("")
        for record in row.values:
            if record is None:
                values.append(category.absent_value)
            else:
                values.append(_cell_text(category.render(record), max_chars))
        ws.append(values)
        _mark(ws.cell(row=ws.max_row, column=diff_col), row.equal)


def _write_property_rows(ws: Worksheet, result: CategoryResult, max_chars: int) -> None:
    # One line per property; "Equal*" when the present records agree but a document lacks the record.
    category = result.category
    diff_col = len(category.key_headers) + 2
    for row in result.rows:
        keys = [_cell_text(v, max_chars) for v in category.key_values(row.key)]
        all_present = len(row.present) == len(row.values)
        for prop in category.properties:
            values = keys + [prop.title, ""]
            for record in row.values:
                if record is None:
                    values.append(category.absent_value)
                else:
                    values.append(_cell_text(prop.render(record), max_chars))
            ws.append(values)
            cell = ws.cell(row=ws.max_row, column=diff_col)
            if prop.agrees(row.values):
                _mark(cell, True, EQUAL_VALUE if all_present else MISSING_EQUAL_VALUE)
            else:
                _mark(cell, False)


def write_category(ws: Worksheet, result: CategoryResult, doc_names: List[str], max_chars: int, max_width: int) -> None:
    category = result.category
    key_headers = list(category.key_headers)
    if category.properties:
        key_headers.append(PROPERTY_TITLE)
    headers = key_headers + [DIFF_TITLE] + [_cell_text(name) for name in doc_names]
    ws.append(headers)
    if result.error is not None:
        ws.append([_cell_text(f"Comparison failed: {result.error}", max_chars)])
        _format(ws, headers, max_width=max_width)
        return

    if category.properties:
        _write_property_rows(ws, result, max_chars)
    else:
        _write_rows(ws, result, max_chars)

    widths = [category.column_width] * len(category.key_headers)
    if category.properties:
        widths.append(25)
    widths += [10] + [category.column_width] * len(doc_names)
    _format(ws, headers, widths, max_width)


def write_summary(ws: Worksheet, report: ComparisonReport, max_chars: int, max_width: int) -> None:
    headers = ["Document"] + [f.title for f in report.summary]
    ws.append(headers)
    ws.append(["Compare Results"] + [""] * len(report.summary))
    for col, summary_field in enumerate(report.summary, start=2):
        cell = ws.cell(row=2, column=col)
        if summary_field.equal is None:
            cell.value = "N/A"
        else:
            _mark(cell, summary_field.equal, SUMMARY_EQUAL, SUMMARY_DIFFERENT)
    for doc_index, name in enumerate(report.doc_names):
        ws.append([_cell_text(name)] + [_cell_text(f.values[doc_index], max_chars) for f in report.summary])
    _format(ws, headers, max_width=max_width)


def write_verification(ws: Worksheet, report: ComparisonReport) -> None:
    headers = ["Document", "Verification Error"]
    ws.append(headers)
    for name, messages in zip(report.doc_names, report.verification):
        for message in messages:
            ws.append([_cell_text(name), _cell_text(message)])
    _format(ws, headers)


def write_workbook(path: str, report: ComparisonReport, config: Optional[Config] = None) -> None:
    excel_cfg = (config or {}).get("excel") or {}
    max_chars = int(excel_cfg.get("max_cell_chars", MAX_CHARACTERS_PER_CELL))
    max_width = int(excel_cfg.get("max_column_width", 80))

    wb = Workbook()
    summary = wb.active
    summary.title = DOCUMENT_SHEET
    write_summary(summary, report, max_chars, max_width)

    for result in report.categories:
        write_category(wb.create_sheet(result.category.sheet_title), result, report.doc_names, max_chars, max_width)

    write_verification(wb.create_sheet(VERIFICATION_SHEET), report)
    wb.save(path)
    LOGGER.info("Wrote %s (%d sheets)", path, len(wb.sheetnames))
