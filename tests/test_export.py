"""Tests for spreadsheet export."""

import pytest
from openpyxl import load_workbook

from flyerocr.export import (
    HEADERS,
    build_rows,
    can_export,
    export_filename,
    export_row,
    write_workbook,
)
from flyerocr.models import ProductRecord
from flyerocr.normalize import clean_description, format_price, normalize_suffix, strip_control


@pytest.fixture
def records():
    return [
        ProductRecord(description="Cup Cake Box*", quantity=3, regular_price="AED 12.00", offer_price=""),
        ProductRecord(
            description="Tomato /kg",
            arabic_description="طماطم /كيلو",
            quantity=1,
            regular_price="3.5",
            offer_price="2.99",
        ),
    ]


class TestExportRow:
    def test_cup_cake_box_scenario(self, records):
        assert export_row(records[0]) == ["", "", "Cup Cake Box", "", 3, "12.00", ""]

    def test_quantity_of_one_is_empty(self, records):
        row = export_row(records[1])
        assert row[4] == ""
        assert row == ["", "", "Tomato /kg", "طماطم /كيلو", "", "3.50", "2.99"]

    def test_missing_quantity_is_empty(self):
        row = export_row(ProductRecord(description="Bread"))
        assert row == ["", "", "Bread", "", "", "", ""]

    def test_unparseable_price_is_empty(self):
        row = export_row(ProductRecord(description="X", regular_price="N/A", offer_price="  "))
        assert row[5] == ""
        assert row[6] == ""

    def test_build_rows_starts_with_headers(self, records):
        rows = build_rows(records)
        assert rows[0] == HEADERS
        assert len(rows) == 3


class TestNormalizeHelpers:
    def test_clean_description(self):
        assert clean_description(' #Fresh "Milk"* ') == "Fresh Milk"
        assert clean_description(None) == ""

    def test_format_price_keeps_leading_number(self):
        assert format_price("12.00.5") == "12.00"
        assert format_price("1,299.00 AED") == "1299.00"
        assert format_price("") == ""

    def test_suffix_gets_single_space(self):
        assert normalize_suffix("Banana   /  kg") == "Banana /kg"
        assert normalize_suffix("Juice/500ml") == "Juice /500ml"

    def test_fraction_is_left_alone(self):
        assert normalize_suffix("Cheese 1/2 kg") == "Cheese 1/2 kg"

    def test_control_characters_are_dropped(self):
        assert strip_control("Milk\x01\x1f") == "Milk"
        assert clean_description("Fresh\x00 Milk") == "Fresh Milk"
        assert normalize_suffix("Banana\x0b/kg") == "Banana /kg"
        # tabs and newlines are allowed in cells
        assert strip_control("a\tb") == "a\tb"


class TestCanExport:
    def test_empty_records(self):
        assert can_export([], "flyer") is False

    def test_blank_filename(self, records):
        assert can_export(records, "") is False
        assert can_export(records, "   ") is False
        assert can_export(records, None) is False

    def test_enabled(self, records):
        assert can_export(records, "flyer") is True


class TestExportFilename:
    def test_appends_extension(self):
        assert export_filename("  weekly offers ") == "weekly offers.xlsx"

    def test_does_not_duplicate_extension(self):
        assert export_filename("flyer.XLSX") == "flyer.XLSX"


class TestWriteWorkbook:
    def test_disabled_export_is_noop(self, tmp_path):
        assert write_workbook([], "flyer", output_dir=tmp_path) is None
        assert write_workbook([ProductRecord(description="A")], "  ", output_dir=tmp_path) is None
        assert list(tmp_path.iterdir()) == []

    def test_writes_header_and_rows(self, records, tmp_path):
        path = write_workbook(records, "flyer", output_dir=tmp_path)
        assert path == tmp_path / "flyer.xlsx"
        assert path.exists()

        wb = load_workbook(path)
        assert wb.sheetnames == ["Flyer_Capture"]
        ws = wb.active
        assert [c.value for c in ws[1]] == HEADERS
        assert ws[1][0].font.bold

        row = [c.value for c in ws[2]]
        assert row[2] == "Cup Cake Box"
        assert row[4] == 3
        assert row[5] == 12.0
        assert row[6] in (None, "")
        assert row[0] in (None, "")

        row3 = [c.value for c in ws[3]]
        assert row3[3] == "طماطم /كيلو"
        assert row3[4] in (None, "")

    def test_price_cells_are_numeric_with_two_decimals(self, records, tmp_path):
        path = write_workbook(records, "flyer", output_dir=tmp_path)
        ws = load_workbook(path).active

        regular = ws.cell(row=2, column=6)
        assert regular.data_type == "n"
        assert regular.value == 12.0
        assert regular.number_format == "0.00"

        offer = ws.cell(row=3, column=7)
        assert offer.value == 2.99
        assert offer.number_format == "0.00"

        empty_offer = ws.cell(row=2, column=7)
        assert empty_offer.number_format != "0.00"

    def test_custom_sheet_name(self, records, tmp_path):
        path = write_workbook(records, "flyer", output_dir=tmp_path, sheet_name="Week 42")
        assert load_workbook(path).sheetnames == ["Week 42"]

    def test_reexport_produces_identical_rows(self, records, tmp_path):
        first = write_workbook(records, "flyer", output_dir=tmp_path / "a")
        second = write_workbook(records, "flyer", output_dir=tmp_path / "b")

        def _values(path):
            ws = load_workbook(path).active
            return [[c.value for c in row] for row in ws.iter_rows()]

        assert _values(first) == _values(second)

    def test_leading_equals_is_written_as_text(self, tmp_path):
        records = [ProductRecord(description="=2 FOR 10", arabic_description="=عرض", offer_price="10")]
        path = write_workbook(records, "flyer", output_dir=tmp_path)
        ws = load_workbook(path).active

        description = ws.cell(row=2, column=3)
        assert description.data_type == "s"
        assert description.value == "=2 FOR 10"
        arabic = ws.cell(row=2, column=4)
        assert arabic.data_type == "s"
        assert arabic.value == "=عرض"

    def test_control_characters_do_not_break_export(self, tmp_path):
        records = [ProductRecord(description="Milk\x01", arabic_description="حليب\x02", offer_price="4.25")]
        path = write_workbook(records, "flyer", output_dir=tmp_path)
        ws = load_workbook(path).active

        assert ws.cell(row=2, column=3).value == "Milk"
        assert ws.cell(row=2, column=4).value == "حليب"
        assert ws.cell(row=2, column=7).value == 4.25
