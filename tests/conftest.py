"""Pytest configuration and shared fixtures."""

import io
import zipfile
from pathlib import Path

import pytest

from beanfolio.config import Settings
from beanfolio.ledger import LedgerTarget
from beanfolio.snapshot import CellSnapshot


def cell(display_value=None, formula=None) -> CellSnapshot:
    """Shorthand for building a snapshot cell."""
    return CellSnapshot(display_value=display_value, formula=formula)


def read_zip(data: bytes) -> dict[str, bytes]:
    """Open archive bytes with the standard library reader."""
    with zipfile.ZipFile(io.BytesIO(data)) as archive:
        return {info.filename: archive.read(info) for info in archive.infolist()}


@pytest.fixture
def mock_settings(tmp_path: Path) -> Settings:
    """Create settings with test values."""
    creds_file = tmp_path / "credentials.json"
    token_file = tmp_path / "token.json"
    creds_file.write_text('{"installed": {"client_id": "test"}}')

    return Settings(
        google_credentials_path=creds_file,
        google_token_path=token_file,
        export_dir=tmp_path / "exports",
        host="127.0.0.1",
        port=8000,
        debug=False,
        cors_allow_origins=["*"],
    )


@pytest.fixture
def ledger_target() -> LedgerTarget:
    """The archive sheet of an existing ledger spreadsheet."""
    return LedgerTarget(
        spreadsheet_id="spreadsheet-1",
        spreadsheet_title="Beanfolio",
        sheet_id=9,
        sheet_title="Archive",
    )


@pytest.fixture
def sample_grid() -> list[list[CellSnapshot]]:
    """A 2x3 grid mixing strings, numbers, booleans, a formula and a blank."""
    return [
        [cell(" Cash "), cell(100, "=A1*2"), cell()],
        [cell(True), cell(False), cell(42)],
    ]


# Configure pytest-asyncio
def pytest_configure(config):
    """Configure pytest with asyncio settings."""
    config.addinivalue_line("markers", "asyncio: mark test as async")
