"""Tests for the command-line export."""

import json
import sys
from unittest.mock import patch

import pytest

from beanfolio.cli import load_grid, main, run_export


class TestLoadGrid:
    """Test reading snapshot grids from JSON."""

    def test_cell_objects(self, tmp_path):
        path = tmp_path / "grid.json"
        path.write_text(json.dumps([[{"displayValue": 10}, {"displayValue": 20, "formula": "=A1*2"}]]))

        grid = load_grid(path)

        assert grid[0][1].display_value == 20
        assert grid[0][1].formula == "=A1*2"

    def test_bare_values(self, tmp_path):
        path = tmp_path / "grid.json"
        path.write_text(json.dumps([["Cash", 5, "=B1+1"]]))

        grid = load_grid(path)

        assert grid[0][0].display_value == "Cash"
        assert grid[0][2].formula == "=B1+1"
        assert grid[0][2].display_value is None


class TestRunExport:
    """Test the export command."""

    def test_writes_file(self, tmp_path, capsys):
        path = tmp_path / "grid.json"
        path.write_text(json.dumps([["a", 1], [None, None]]))

        written = run_export(path, "tsv", "March", tmp_path / "out")

        assert written == tmp_path / "out" / "March.tsv"
        assert written.read_bytes() == "\ufeffa\t1".encode("utf-8")
        assert "Wrote" in capsys.readouterr().out

    def test_bad_input_exits(self, tmp_path, capsys):
        path = tmp_path / "grid.json"
        path.write_text("not json")

        with pytest.raises(SystemExit) as exc_info:
            run_export(path, "csv", "", tmp_path)

        assert exc_info.value.code == 1
        assert "Export failed" in capsys.readouterr().out

    def test_main_dispatches_export(self, tmp_path):
        path = tmp_path / "grid.json"
        path.write_text("[]")
        argv = ["beanfolio", "export", str(path), "-f", "xlsx", "-l", "Book", "-o", str(tmp_path)]

        with patch.object(sys, "argv", argv), patch("beanfolio.cli.run_export") as run:
            main()

        run.assert_called_once_with(path, "xlsx", "Book", tmp_path)
