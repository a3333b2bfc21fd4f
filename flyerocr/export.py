"""Spreadsheet export of extracted products using openpyxl."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Sequence

from .models import ProductRecord
from .normalize import clean_description, format_price, strip_control

logger = logging.getLogger(__name__)

HEADERS = [
    "Barcode",
    "Scale Code",
    "Description",
    "Arabic Description",
    "Qty",
    "Regular Price",
    "Offer Price",
]

TEXT_COLUMNS = (2, 3)  # zero-based: Description, Arabic Description
PRICE_COLUMNS = (5, 6)  # zero-based: Regular Price, Offer Price
PRICE_FORMAT = "0.00"
DEFAULT_SHEET_NAME = "Flyer_Capture"


def export_row(record: ProductRecord) -> list:
    """Map a record to its spreadsheet row (prices as two-decimal strings)."""
    qty = record.quantity
    return [
        "",  # Barcode
        "",  # Scale Code
        clean_description(record.description),
        strip_control(record.arabic_description or ""),
        qty if qty is not None and qty > 1 else "",
        format_price(record.regular_price),
        format_price(record.offer_price),
    ]


def build_rows(records: Sequence[ProductRecord]) -> list[list]:
    """Header row followed by one row per record."""
    return [list(HEADERS)] + [export_row(r) for r in records]


def can_export(records: Sequence[ProductRecord], filename: str | None) -> bool:
    return bool(records) and bool(filename and filename.strip())


def export_filename(filename: str) -> str:
    name = filename.strip()
    if not name.lower().endswith(".xlsx"):
        name += ".xlsx"
    return name


def write_workbook(
    records: Sequence[ProductRecord],
    filename: str | None,
    output_dir: str | Path = ".",
    sheet_name: str = DEFAULT_SHEET_NAME,
) -> Path | None:
    """Write records to ``<output_dir>/<filename>.xlsx``.

    Returns the written path, or None when export is disabled (no records
    or a blank filename).
    """
    if not can_export(records, filename):
        logger.info("Export skipped: no records or blank filename")
        return None

    from openpyxl import Workbook
    from openpyxl.styles import Font

    wb = Workbook()
    ws = wb.active
    ws.title = sheet_name

    rows = build_rows(records)
    ws.append(rows[0])
    for cell in ws[1]:
        cell.font = Font(bold=True)

    for row in rows[1:]:
        ws.append(row)
        excel_row = ws.max_row
        # Leading "=" in flyer text is literal, not a formula
        for col in TEXT_COLUMNS:
            ws.cell(row=excel_row, column=col + 1).data_type = "s"
        for col in PRICE_COLUMNS:
            value = row[col]
            if value == "":
                continue
            cell = ws.cell(row=excel_row, column=col + 1)
            cell.value = float(value)
            cell.number_format = PRICE_FORMAT

    out_dir = Path(output_dir)
    out_dir.mkdir(parents=True, exist_ok=True)
    path = out_dir / export_filename(filename)
    wb.save(path)
    logger.info("Exported %d product(s) to %s", len(records), path)
    return path
