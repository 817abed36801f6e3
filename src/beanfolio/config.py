"""Configuration management for Beanfolio."""

import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel

load_dotenv()


def _parse_cors_origins() -> list[str]:
    """Parse CORS origins from environment variable."""
    cors_env = os.getenv("CORS_ALLOW_ORIGINS")
    if cors_env:
        return cors_env.split(",")
    return ["*"]


class Settings(BaseModel):
    """Application settings."""

    # Google OAuth client secrets and cached token
    google_credentials_path: Path = Path(os.getenv("GOOGLE_CREDENTIALS_PATH", "credentials.json"))
    google_token_path: Path = Path(os.getenv("GOOGLE_TOKEN_PATH", "token.json"))

    # Google REST endpoints
    sheets_api_base: str = os.getenv(
        "SHEETS_API_BASE", "https://sheets.googleapis.com/v4/spreadsheets"
    )
    drive_api_base: str = os.getenv("DRIVE_API_BASE", "https://www.googleapis.com/drive/v3")
    request_timeout_seconds: float = float(os.getenv("REQUEST_TIMEOUT_SECONDS", "30.0"))

    # Ledger spreadsheet layout
    ledger_file_name: str = os.getenv("LEDGER_FILE_NAME", "Beanfolio")
    archive_sheet_name: str = os.getenv("ARCHIVE_SHEET_NAME", "Archive")

    # Grid dimensions captured per snapshot
    grid_rows: int = int(os.getenv("GRID_ROWS", "120"))
    grid_columns: int = int(os.getenv("GRID_COLUMNS", "12"))

    # Where the CLI writes exported files
    export_dir: Path = Path(os.getenv("EXPORT_DIR", "exports"))

    # Server settings
    host: str = os.getenv("HOST", "127.0.0.1")
    port: int = int(os.getenv("PORT", "8000"))
    debug: bool = os.getenv("DEBUG", "false").lower() == "true"

    # CORS settings (comma-separated list of allowed origins, or * for all)
    cors_allow_origins: list[str] = _parse_cors_origins()

    log_level: str = os.getenv("LOG_LEVEL", "INFO")


settings = Settings()
