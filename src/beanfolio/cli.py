"""Command-line interface for Beanfolio."""

import argparse
import json
import logging
import sys
from pathlib import Path

import uvicorn

from .config import settings


def main():
    """Main entry point for the CLI."""
    parser = argparse.ArgumentParser(
        description="Beanfolio - spreadsheet snapshot export and Google Sheets ledger"
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Server command
    server_parser = subparsers.add_parser("serve", help="Start the web server")
    server_parser.add_argument(
        "--host", default=settings.host, help=f"Host to bind to (default: {settings.host})"
    )
    server_parser.add_argument(
        "--port", type=int, default=settings.port, help=f"Port to bind to (default: {settings.port})"
    )
    server_parser.add_argument(
        "--reload", action="store_true", help="Enable auto-reload for development"
    )

    # Export command
    export_parser = subparsers.add_parser(
        "export", help="Export a JSON grid snapshot to a file"
    )
    export_parser.add_argument("grid", type=Path, help="JSON file holding a list of rows of cells")
    export_parser.add_argument(
        "--format", "-f", default="csv", choices=["csv", "tsv", "xlsx", "ods"], help="Output format"
    )
    export_parser.add_argument("--label", "-l", default="", help="Label used for the file name")
    export_parser.add_argument(
        "--out", "-o", type=Path, default=settings.export_dir, help="Output directory"
    )

    # Auth command
    subparsers.add_parser("auth", help="Authenticate with the Google Sheets and Drive APIs")

    args = parser.parse_args()

    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "serve":
        run_server(args.host, args.port, args.reload)
    elif args.command == "export":
        run_export(args.grid, args.format, args.label, args.out)
    elif args.command == "auth":
        run_auth()
    else:
        parser.print_help()
        sys.exit(1)


def run_server(host: str, port: int, reload: bool):
    """Run the web server."""
    uvicorn.run(
        "beanfolio.api:create_app",
        host=host,
        port=port,
        reload=reload,
        factory=True,
    )


def load_grid(path: Path):
    """Read a snapshot grid from JSON.

    Each cell is either an object with ``displayValue``/``formula`` keys or
    a bare value, where strings starting with ``=`` are taken as formulas.
    """
    from .snapshot import CellSnapshot, build_snapshot

    rows = json.loads(path.read_text(encoding="utf-8"))
    if rows and all(isinstance(cell, dict) for row in rows for cell in row):
        return [[CellSnapshot.model_validate(cell) for cell in row] for row in rows]
    return build_snapshot(rows)


def run_export(grid_path: Path, export_format: str, label: str, out_dir: Path) -> Path:
    """Export a grid file and print where it was written."""
    from .export import ExportFormat, build_export_file, write_export_file
    from .snapshot import trim_trailing_empty_rows

    try:
        cells = trim_trailing_empty_rows(load_grid(grid_path))
        export_file = build_export_file(cells, ExportFormat(export_format), label)
        path = write_export_file(export_file, out_dir)
    except Exception as e:
        print(f"Export failed: {e}")
        sys.exit(1)

    print(f"Wrote {path}")
    return path


def run_auth():
    """Run the Google authentication flow."""
    from .ledger.credentials import get_credentials

    print("Authenticating with Google Sheets and Drive APIs...")
    try:
        get_credentials()
        print("Authentication successful!")
        print("Token saved. You can now save blocks to your Beanfolio ledger.")
    except Exception as e:
        print(f"Authentication failed: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
