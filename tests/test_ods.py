"""Tests for the OpenDocument spreadsheet builder."""

import re

from beanfolio.export import to_ods_archive
from beanfolio.export.ods import ODS_MIMETYPE, build_cell_xml, build_content_xml

from conftest import cell, read_zip


class TestOdsArchive:
    """Test the document package."""

    def test_mimetype_is_first_entry_and_stored(self, sample_grid):
        archive = to_ods_archive(sample_grid)

        assert archive[30:38] == b"mimetype"
        assert archive[38 : 38 + len(ODS_MIMETYPE)] == ODS_MIMETYPE.encode("ascii")
        assert read_zip(archive)["mimetype"] == ODS_MIMETYPE.encode("ascii")

    def test_contains_all_parts(self, sample_grid):
        parts = read_zip(to_ods_archive(sample_grid))

        assert list(parts) == [
            "mimetype",
            "content.xml",
            "styles.xml",
            "meta.xml",
            "settings.xml",
            "META-INF/manifest.xml",
        ]

    def test_manifest_lists_every_xml_part(self, sample_grid):
        manifest = read_zip(to_ods_archive(sample_grid))["META-INF/manifest.xml"].decode("utf-8")

        assert f'manifest:media-type="{ODS_MIMETYPE}" manifest:full-path="/"' in manifest
        for name in ("content.xml", "styles.xml", "meta.xml", "settings.xml"):
            assert f'manifest:full-path="{name}"' in manifest
        assert 'manifest:version="1.2"' in manifest


class TestOdsCells:
    """Test cell emission rules."""

    def test_blank_cell(self):
        assert build_cell_xml(cell()) == "<table:table-cell/>"
        assert build_cell_xml(cell(float("inf"))) == "<table:table-cell/>"

    def test_float_cell(self):
        xml = build_cell_xml(cell(2.5))

        assert xml == '<table:table-cell office:value-type="float" office:value="2.5"><text:p>2.5</text:p></table:table-cell>'

    def test_boolean_cell(self):
        xml = build_cell_xml(cell(False))

        assert 'office:value-type="boolean" office:boolean-value="false"' in xml
        assert "<text:p>FALSE</text:p>" in xml

    def test_string_cell_is_escaped(self):
        xml = build_cell_xml(cell("R&D <2026>"))

        assert xml == '<table:table-cell office:value-type="string"><text:p>R&amp;D &lt;2026&gt;</text:p></table:table-cell>'

    def test_formula_keeps_value_and_adds_annotation(self):
        xml = build_cell_xml(cell(100, "=A1*2"))

        assert xml == (
            '<table:table-cell office:value-type="float" office:value="100">'
            "<office:annotation><text:p>Formula: =A1*2</text:p></office:annotation>"
            "<text:p>100</text:p></table:table-cell>"
        )

    def test_formula_without_value_keeps_annotation(self):
        xml = build_cell_xml(cell(formula='=IF(A1>0,"y","")'))

        assert xml == (
            "<table:table-cell><office:annotation>"
            "<text:p>Formula: =IF(A1&gt;0,&quot;y&quot;,&quot;&quot;)</text:p>"
            "</office:annotation></table:table-cell>"
        )


class TestOdsContent:
    """Test table layout in content.xml."""

    def test_every_row_and_cell_is_emitted(self):
        grid = [[cell("a"), cell()], [cell(), cell()], [cell(), cell(1)]]

        content = build_content_xml(grid)

        assert content.count("<table:table-row>") == 3
        assert content.count("<table:table-cell") == 6

    def test_sample_grid_content(self, sample_grid):
        content = read_zip(to_ods_archive(sample_grid))["content.xml"].decode("utf-8")

        assert 'table:name="Sheet1"' in content
        assert '<text:p> Cash </text:p>' in content
        assert "Formula: =A1*2" in content
        assert re.search(r'office:value="42"><text:p>42</text:p>', content)

    def test_empty_grid_has_no_rows(self):
        assert "<table:table-row>" not in build_content_xml([])
