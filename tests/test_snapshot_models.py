"""Tests for snapshot and ledger models."""

import pytest
from pydantic import ValidationError

from beanfolio.ledger import LedgerTarget, SaveRequest
from beanfolio.snapshot import CellSnapshot


class TestCellSnapshot:
    """Test the CellSnapshot model."""

    def test_defaults_are_blank(self):
        """Test that an empty cell has no value and no formula."""
        snapshot = CellSnapshot()

        assert snapshot.display_value is None
        assert snapshot.formula is None
        assert snapshot.is_blank
        assert not snapshot.has_formula

    def test_accepts_camel_case_alias(self):
        """Test building a cell from the wire format."""
        snapshot = CellSnapshot.model_validate({"displayValue": 100, "formula": "=A1*2"})

        assert snapshot.display_value == 100
        assert snapshot.formula == "=A1*2"
        assert snapshot.has_formula
        assert not snapshot.is_blank

    def test_booleans_are_not_coerced_to_numbers(self):
        """Test that True stays a bool rather than becoming 1."""
        snapshot = CellSnapshot.model_validate({"displayValue": True})

        assert snapshot.display_value is True

    def test_integers_stay_integers(self):
        """Test that whole numbers keep their type."""
        snapshot = CellSnapshot(display_value=5)

        assert isinstance(snapshot.display_value, int)
        assert not isinstance(snapshot.display_value, bool)

    def test_formula_only_cell_is_not_blank(self):
        """Test that a formula without a computed value still counts as content."""
        assert not CellSnapshot(formula="=SUM(A1:A3)").is_blank

    def test_cells_are_frozen(self):
        """Test that snapshots cannot be mutated after capture."""
        snapshot = CellSnapshot(display_value="x")

        with pytest.raises(ValidationError):
            snapshot.display_value = "y"


class TestLedgerModels:
    """Test LedgerTarget and SaveRequest."""

    def test_ledger_target_from_wire_format(self):
        """Test parsing a camelCase ledger target."""
        target = LedgerTarget.model_validate(
            {
                "spreadsheetId": "spreadsheet-1",
                "spreadsheetTitle": "Beanfolio",
                "sheetId": 9,
                "sheetTitle": "Archive",
            }
        )

        assert target.spreadsheet_id == "spreadsheet-1"
        assert target.sheet_id == 9

    def test_ledger_target_dumps_by_alias(self, ledger_target):
        """Test serializing back to the wire format."""
        data = ledger_target.model_dump(by_alias=True)

        assert data == {
            "spreadsheetId": "spreadsheet-1",
            "spreadsheetTitle": "Beanfolio",
            "sheetId": 9,
            "sheetTitle": "Archive",
        }

    def test_save_request_defaults(self):
        """Test that label and cells default to empty."""
        request = SaveRequest(column_count=3)

        assert request.label == ""
        assert request.cells == []
        assert request.column_count == 3

    def test_save_request_parses_nested_cells(self):
        """Test parsing a save request body."""
        request = SaveRequest.model_validate(
            {
                "label": "Q1 Close",
                "columnCount": 2,
                "cells": [[{"displayValue": 5}, {"displayValue": None}]],
            }
        )

        assert request.cells[0][0].display_value == 5
        assert request.cells[0][1].is_blank


class TestBlankDisplayValues:
    """Test that blank display values are captured as None."""

    @pytest.mark.parametrize("raw", ["", "   ", "\t\n", float("nan"), float("inf")])
    def test_blank_values_become_none(self, raw):
        snapshot = CellSnapshot.model_validate({"displayValue": raw})

        assert snapshot.display_value is None
        assert snapshot.is_blank

    def test_padded_text_is_kept(self):
        assert CellSnapshot(display_value=" Cash ").display_value == " Cash "
