"""
fetcher.py
- Purpose: Pull a rectangular grid of cells out of a Google Sheets tab.
- Strategy: public CSV export first (no credentials needed for link-shared
  sheets), then the authenticated Sheets v4 API via a service account.
- Design: Infrastructure adapter; no parsing beyond CSV -> Row. Failures are
  raised as SheetFetchError subclasses, never returned as an empty grid.
"""

from __future__ import annotations

import csv
import io
import json
import logging
import time
from typing import Any
from urllib.parse import quote

import httpx
from google.oauth2 import service_account
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

from app.core.config import settings
from app.sheets.errors import SheetAccessError, SheetFetchError, SheetNotFoundError
from app.sheets.types import Row, to_row

logger = logging.getLogger("app.sheets.fetcher")

SCOPE = "https://www.googleapis.com/auth/spreadsheets.readonly"


def _is_gid(tab_name: str | None) -> bool:
    return bool(tab_name) and tab_name.isdigit()


class SheetsFetcher:
    """
    fetch_grid(sheet_id, tab_name) -> list[Row]

    tab_name may be a tab title ("Competency Framework V2") or a numeric gid
    copied from the sheet URL. None means the first tab.
    """

    def __init__(
        self,
        *,
        timeout_seconds: int | None = None,
        service_account_key: str | None = None,
        admin_email: str | None = None,
        http_client: httpx.Client | None = None,
        sheets_service: Any | None = None,
    ):
        self._timeout = timeout_seconds or settings.SHEETS_TIMEOUT_SECONDS
        self._service_account_key = service_account_key or settings.GOOGLE_SERVICE_ACCOUNT_KEY
        self._admin_email = admin_email or settings.GOOGLE_WORKSPACE_ADMIN_EMAIL
        self._http = http_client
        self._service = sheets_service

    @property
    def has_credentials(self) -> bool:
        return self._service is not None or bool(self._service_account_key)

    def fetch_grid(self, sheet_id: str, tab_name: str | None = None) -> list[Row]:
        t0 = time.time()
        try:
            rows = self._fetch_public_csv(sheet_id, tab_name)
            strategy = "public_csv"
        except SheetFetchError as e:
            if not self.has_credentials:
                logger.warning(
                    "sheets.fetch.failed",
                    extra={"sheet_id": sheet_id, "tab": tab_name, "error": str(e)},
                )
                raise
            logger.info(
                "sheets.fetch.fallback_auth",
                extra={"sheet_id": sheet_id, "tab": tab_name, "public_error": str(e)},
            )
            rows = self._fetch_authenticated(sheet_id, tab_name)
            strategy = "sheets_api"

        logger.info(
            "sheets.fetch.done",
            extra={
                "sheet_id": sheet_id,
                "tab": tab_name,
                "strategy": strategy,
                "rows": len(rows),
                "duration_ms": int((time.time() - t0) * 1000),
            },
        )
        return rows

    # ----------------------------
    # Public CSV export
    # ----------------------------
    def _public_csv_url(self, sheet_id: str, tab_name: str | None) -> str:
        base = f"{settings.SHEETS_PUBLIC_BASE_URL.rstrip('/')}/{sheet_id}"
        if not tab_name:
            return f"{base}/export?format=csv"
        if _is_gid(tab_name):
            return f"{base}/export?format=csv&gid={tab_name}"
        return f"{base}/gviz/tq?tqx=out:csv&sheet={quote(tab_name)}"

    def _fetch_public_csv(self, sheet_id: str, tab_name: str | None) -> list[Row]:
        url = self._public_csv_url(sheet_id, tab_name)
        try:
            if self._http is not None:
                resp = self._http.get(url)
            else:
                with httpx.Client(timeout=float(self._timeout), follow_redirects=True) as client:
                    resp = client.get(url)
        except httpx.HTTPError as e:
            raise SheetFetchError(f"Public export request failed: {e}") from e

        if resp.status_code == 404:
            raise SheetNotFoundError(f"Sheet {sheet_id} not found (public export)")
        if resp.status_code in (401, 403):
            raise SheetAccessError(f"Sheet {sheet_id} is not publicly readable")
        if resp.status_code >= 400:
            raise SheetFetchError(f"Public export returned HTTP {resp.status_code}")

        # Private sheets bounce to an HTML sign-in page with a 200.
        content_type = (resp.headers.get("content-type") or "").lower()
        if "text/html" in content_type:
            raise SheetAccessError(f"Sheet {sheet_id} requires sign-in")

        reader = csv.reader(io.StringIO(resp.text))
        return [to_row(r) for r in reader]

    # ----------------------------
    # Authenticated Sheets API
    # ----------------------------
    def _get_service(self):
        if self._service is not None:
            return self._service
        try:
            info = json.loads(self._service_account_key or "")
        except json.JSONDecodeError as e:
            raise SheetAccessError("GOOGLE_SERVICE_ACCOUNT_KEY is not valid JSON") from e

        creds = service_account.Credentials.from_service_account_info(
            info,
            scopes=[SCOPE],
            subject=self._admin_email,
        )
        self._service = build("sheets", "v4", credentials=creds, cache_discovery=False)
        return self._service

    def _resolve_tab_title(self, service, sheet_id: str, gid: str) -> str:
        meta = (
            service.spreadsheets()
            .get(spreadsheetId=sheet_id, fields="sheets.properties")
            .execute()
        )
        for sheet in meta.get("sheets", []):
            props = sheet.get("properties", {})
            if str(props.get("sheetId")) == gid:
                return props.get("title", "")
        raise SheetNotFoundError(f"No tab with gid={gid} in sheet {sheet_id}")

    def _fetch_authenticated(self, sheet_id: str, tab_name: str | None) -> list[Row]:
        service = self._get_service()
        try:
            title = tab_name
            if _is_gid(tab_name):
                title = self._resolve_tab_title(service, sheet_id, tab_name)

            cell_range = settings.SHEETS_DEFAULT_RANGE
            if title:
                escaped = title.replace("'", "''")
                cell_range = f"'{escaped}'!{cell_range}"

            resp = (
                service.spreadsheets()
                .values()
                .get(spreadsheetId=sheet_id, range=cell_range)
                .execute()
            )
        except HttpError as e:
            status = getattr(getattr(e, "resp", None), "status", None)
            if status == 404:
                raise SheetNotFoundError(f"Sheet {sheet_id} not found") from e
            if status in (401, 403):
                raise SheetAccessError(f"Service account cannot read sheet {sheet_id}") from e
            raise SheetFetchError(f"Sheets API error: {e}") from e

        return [to_row(r) for r in resp.get("values", [])]
