"""CSV and XLSX serialization of search results."""

import io
import logging
import time
from typing import List, Optional, Sequence, Union

from openpyxl import Workbook
from openpyxl.styles import Border, Font, PatternFill, Side
from openpyxl.utils import get_column_letter

from webless_explorer.core.errors import ExportError
from webless_explorer.models import ExportFormat, ExportResult, FullBusinessData

logger = logging.getLogger(__name__)

HEADERS = ["Name", "Address", "Rating", "Phone Number", "Website", "Has Website"]
FILE_PREFIX = "webless_explorer_export"
NO_DATA_MESSAGE = "No data to export."
SHEET_TITLE = "Businesses"

HEADER_FILL = PatternFill(start_color="FFDDDDDD", end_color="FFDDDDDD", fill_type="solid")
NO_WEBSITE_FILL = PatternFill(start_color="FFFFE0E0", end_color="FFFFE0E0", fill_type="solid")
HEADER_BORDER = Border(bottom=Side(style="thin"))

MIN_COLUMN_WIDTH = 10
COLUMN_PADDING = 2
ADDRESS_MAX_WIDTH = 50
# 0-based column index -> fixed width
FIXED_COLUMN_WIDTHS = {2: 10, 5: 15}


def format_rating(rating: Optional[float]) -> str:
    return f"{rating:.1f}" if rating else "N/A"


def _row_values(record: FullBusinessData) -> List[str]:
    return [
        record.name,
        record.address,
        format_rating(record.rating),
        record.phone_number or "",
        record.website or "",
        "Yes" if record.website else "No",
    ]


def _quote(value: str) -> str:
    return '"' + (value or "").replace('"', '""') + '"'


def to_csv(records: Sequence[FullBusinessData]) -> str:
    """Render records as CSV; only Name and Address are quoted."""
    if not records:
        raise ExportError(NO_DATA_MESSAGE)

    lines = [",".join(HEADERS)]
    for record in records:
        values = _row_values(record)
        values[0] = _quote(values[0])
        values[1] = _quote(values[1])
        lines.append(",".join(values))
    return "\n".join(lines)


def _column_width(index: int, cells: Sequence[str]) -> int:
    if index in FIXED_COLUMN_WIDTHS:
        return FIXED_COLUMN_WIDTHS[index]
    # Empty cells count as the minimum width.
    longest = max(len(str(value)) if value else MIN_COLUMN_WIDTH for value in cells)
    if index == 1:
        return min(longest + COLUMN_PADDING, ADDRESS_MAX_WIDTH)
    if longest < MIN_COLUMN_WIDTH:
        return MIN_COLUMN_WIDTH
    return longest + COLUMN_PADDING


def to_xlsx(records: Sequence[FullBusinessData]) -> bytes:
    """Render records as an XLSX workbook; rows without a website are tinted red."""
    if not records:
        raise ExportError(NO_DATA_MESSAGE)

    wb = Workbook()
    ws = wb.active
    ws.title = SHEET_TITLE

    ws.append(HEADERS)
    for cell in ws[1]:
        cell.font = Font(bold=True)
        cell.fill = HEADER_FILL
        cell.border = HEADER_BORDER

    rows = [HEADERS]
    for record in records:
        values = _row_values(record)
        ws.append(values)
        rows.append(values)
        if not record.website:
            for cell in ws[ws.max_row]:
                cell.fill = NO_WEBSITE_FILL

    for index in range(len(HEADERS)):
        column_cells = [row[index] for row in rows]
        ws.column_dimensions[get_column_letter(index + 1)].width = _column_width(index, column_cells)

    buffer = io.BytesIO()
    wb.save(buffer)
    return buffer.getvalue()


def build_file_name(fmt: ExportFormat, timestamp_ms: Optional[int] = None) -> str:
    if timestamp_ms is None:
        timestamp_ms = int(time.time() * 1000)
    return f"{FILE_PREFIX}_{timestamp_ms}.{fmt.extension}"


def export_data(records: Sequence[FullBusinessData], fmt: Union[ExportFormat, str]) -> ExportResult:
    """Serialize records for download. Never raises; failures are reported in the result."""
    logger.info("Exporting %d records to %s", len(records), getattr(fmt, "value", fmt))
    if not records:
        return ExportResult(success=False, error=NO_DATA_MESSAGE)

    try:
        export_format = ExportFormat.parse(fmt)
    except ValueError:
        return ExportResult(success=False, error="Unsupported export format.")

    try:
        if export_format is ExportFormat.CSV:
            content: Union[str, bytes] = to_csv(records)
        else:
            content = to_xlsx(records)
    except Exception as exc:  # noqa: BLE001
        logger.exception("Error exporting data to %s: %s", export_format.value, exc)
        return ExportResult(success=False, error=f"Failed to export data: {exc}")

    return ExportResult(
        success=True,
        file_content=content,
        file_name=build_file_name(export_format),
        mime_type=export_format.mime_type,
    )
