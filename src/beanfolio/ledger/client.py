"""Google Sheets/Drive client for the Beanfolio ledger."""

import logging
from typing import Any, Optional

import httpx

from ..config import settings
from .models import LedgerApiError, LedgerTarget, SaveRequest
from .payload import build_append_request, build_append_rows

logger = logging.getLogger(__name__)

SPREADSHEET_MIME_TYPE = "application/vnd.google-apps.spreadsheet"


class GoogleLedgerClient:
    """Finds the ledger spreadsheet and appends labelled blocks to it.

    Calls are made one at a time with a bearer token; nothing is retried.
    Pass an ``http_client`` to share a connection pool or to inject a mock
    transport in tests.
    """

    def __init__(
        self,
        access_token: str,
        http_client: Optional[httpx.AsyncClient] = None,
        sheets_api_base: Optional[str] = None,
        drive_api_base: Optional[str] = None,
        ledger_file_name: Optional[str] = None,
        archive_sheet_name: Optional[str] = None,
    ):
        self.access_token = access_token
        self.sheets_api_base = sheets_api_base or settings.sheets_api_base
        self.drive_api_base = drive_api_base or settings.drive_api_base
        self.ledger_file_name = ledger_file_name or settings.ledger_file_name
        self.archive_sheet_name = archive_sheet_name or settings.archive_sheet_name
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(timeout=settings.request_timeout_seconds)

    async def __aenter__(self) -> "GoogleLedgerClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the underlying HTTP client if this instance created it."""
        if self._owns_client:
            await self._client.aclose()

    async def find_or_create_ledger(self) -> LedgerTarget:
        """Locate the most recently modified ledger, creating one if none exists."""
        existing = await self._find_most_recent_ledger()

        if existing is None:
            return await self._create_ledger()

        metadata = await self._get_spreadsheet_metadata(existing["id"])
        sheet_id, sheet_title = await self._ensure_archive_sheet(metadata)

        return LedgerTarget(
            spreadsheet_id=metadata["spreadsheetId"],
            spreadsheet_title=metadata["properties"]["title"],
            sheet_id=sheet_id,
            sheet_title=sheet_title,
        )

    async def append_ledger_block(self, ledger: LedgerTarget, request: SaveRequest) -> None:
        """Append gap rows, the label row and the data block to the archive sheet."""
        rows = build_append_rows(request.label, request.cells, request.column_count)

        if not rows:
            return

        await self._request(
            "POST",
            f"{self.sheets_api_base}/{ledger.spreadsheet_id}:batchUpdate",
            json=build_append_request(ledger.sheet_id, rows),
        )
        logger.info(
            f"Appended {len(rows)} rows to '{ledger.sheet_title}' in spreadsheet {ledger.spreadsheet_id}"
        )

    async def _find_most_recent_ledger(self) -> Optional[dict]:
        escaped_name = self.ledger_file_name.replace("'", "\\'")
        query = " and ".join(
            [
                f"name = '{escaped_name}'",
                f"mimeType = '{SPREADSHEET_MIME_TYPE}'",
                "trashed = false",
            ]
        )
        params = {
            "q": query,
            "orderBy": "modifiedTime desc",
            "fields": "files(id,name,modifiedTime)",
            "pageSize": "10",
        }

        response = await self._request("GET", f"{self.drive_api_base}/files", params=params)
        files = response.get("files") or []
        if not files:
            logger.info(f"No '{self.ledger_file_name}' spreadsheet found")
            return None
        return files[0]

    async def _get_spreadsheet_metadata(self, spreadsheet_id: str) -> dict:
        params = {"fields": "spreadsheetId,properties.title,sheets.properties(sheetId,title)"}
        return await self._request("GET", f"{self.sheets_api_base}/{spreadsheet_id}", params=params)

    async def _ensure_archive_sheet(self, metadata: dict) -> tuple[int, str]:
        for sheet in metadata.get("sheets", []):
            properties = sheet["properties"]
            if properties["title"] == self.archive_sheet_name:
                return properties["sheetId"], properties["title"]

        logger.info(
            f"Adding '{self.archive_sheet_name}' sheet to spreadsheet {metadata['spreadsheetId']}"
        )
        response = await self._request(
            "POST",
            f"{self.sheets_api_base}/{metadata['spreadsheetId']}:batchUpdate",
            json={"requests": [{"addSheet": {"properties": {"title": self.archive_sheet_name}}}]},
        )

        replies = response.get("replies") or [{}]
        properties = (replies[0].get("addSheet") or {}).get("properties")
        if not properties:
            raise LedgerApiError(f"Unable to create {self.archive_sheet_name} sheet.")

        return properties["sheetId"], properties["title"]

    async def _create_ledger(self) -> LedgerTarget:
        logger.info(f"Creating '{self.ledger_file_name}' spreadsheet")
        created = await self._request(
            "POST",
            self.sheets_api_base,
            json={
                "properties": {"title": self.ledger_file_name},
                "sheets": [{"properties": {"title": self.archive_sheet_name}}],
            },
        )

        for sheet in created.get("sheets", []):
            properties = sheet["properties"]
            if properties["title"] == self.archive_sheet_name:
                return LedgerTarget(
                    spreadsheet_id=created["spreadsheetId"],
                    spreadsheet_title=created["properties"]["title"],
                    sheet_id=properties["sheetId"],
                    sheet_title=properties["title"],
                )

        raise LedgerApiError(f"Created spreadsheet is missing {self.archive_sheet_name} sheet.")

    async def _request(
        self,
        method: str,
        url: str,
        params: Optional[dict] = None,
        json: Optional[dict] = None,
    ) -> Any:
        headers = {
            "Authorization": f"Bearer {self.access_token}",
            "Content-Type": "application/json",
        }

        try:
            response = await self._client.request(method, url, params=params, json=json, headers=headers)
        except httpx.HTTPError as e:
            logger.error(f"Google API request to {url} failed: {e}")
            raise LedgerApiError(f"Google API request failed: {e}") from e

        if not response.is_success:
            message = _error_message(response)
            logger.error(f"Google API returned {response.status_code}: {message}")
            raise LedgerApiError(message, status_code=response.status_code)

        return response.json()


def _error_message(response: httpx.Response) -> str:
    """Prefer the API's own error message over a generic one."""
    fallback = f"Google API request failed ({response.status_code})."
    try:
        payload = response.json()
    except ValueError:
        return fallback

    if isinstance(payload, dict):
        error = payload.get("error")
        if isinstance(error, dict) and error.get("message"):
            return error["message"]
    return fallback
