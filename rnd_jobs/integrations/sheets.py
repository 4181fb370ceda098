"""
Google Sheets mirror of the task list.

After every task mutation the whole task list is written over the first
worksheet of the configured spreadsheet: header row first, then one row per
task in board order. The sheet is a read-only view for the office; the
database stays the source of truth.

Uses native gspread API with the user OAuth tokens stored by the Google
connect flow (not a service account).
"""

import asyncio
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Sequence

import gspread
from google.oauth2.credentials import Credentials

from config.settings import settings
from ..database.models import TaskDB
from ..database.repositories.settings import (
    SettingsRepository,
    get_settings_repository,
    SPREADSHEET_ID,
    GOOGLE_TOKENS,
    LAST_SYNC,
)
from ..database.repositories.tasks import TaskRepository, get_task_repository
from ..services.notifier import NotificationHub, get_notification_hub
from ..utils.background_tasks import create_safe_task
from ..utils.google_api import execute_with_timeout

logger = logging.getLogger(__name__)

TOKEN_URI = "https://oauth2.googleapis.com/token"
SCOPES = ["https://www.googleapis.com/auth/spreadsheets"]

# Columns: ID, Kode SPK/SPD, Klien, Proyek, Deskripsi, Status, Prioritas,
#          Kategori, Stage, Penanggung Jawab, Deadline, Dibuat Pada
SHEET_HEADER = [
    "ID",
    "Kode SPK/SPD",
    "Klien",
    "Proyek",
    "Deskripsi",
    "Status",
    "Prioritas",
    "Kategori",
    "Stage",
    "Penanggung Jawab",
    "Deadline",
    "Dibuat Pada",
]
LAST_COLUMN = chr(ord("A") + len(SHEET_HEADER) - 1)


def _cell(value: Any) -> Any:
    if value is None:
        return ""
    if isinstance(value, datetime):
        return value.strftime("%Y-%m-%d %H:%M:%S")
    return value


def build_rows(tasks: Sequence[TaskDB]) -> List[List[Any]]:
    """Header plus one row per task, in the given order."""
    rows: List[List[Any]] = [list(SHEET_HEADER)]
    for task in tasks:
        rows.append([
            _cell(task.id),
            _cell(task.title),
            _cell(task.client_name),
            _cell(task.project_name),
            _cell(task.description),
            _cell(task.status),
            _cell(task.priority),
            _cell(task.category),
            _cell(task.stage),
            _cell(task.assignee),
            _cell(task.deadline),
            _cell(task.created_at),
        ])
    return rows


def credentials_from_tokens(tokens: Dict[str, Any]) -> Credentials:
    """Build refreshable user credentials from the stored token JSON."""
    expiry = None
    if tokens.get("expiry"):
        # google-auth compares against naive UTC
        expiry = datetime.fromisoformat(tokens["expiry"]).replace(tzinfo=None)

    return Credentials(
        token=tokens.get("access_token"),
        refresh_token=tokens.get("refresh_token"),
        token_uri=TOKEN_URI,
        client_id=settings.google_client_id or None,
        client_secret=settings.google_client_secret or None,
        scopes=SCOPES,
        expiry=expiry,
    )


class SpreadsheetMirror:
    """
    Best-effort task mirror to Google Sheets.

    Runs are serialized by a lock and each run reads the task list inside it,
    so the last run to finish always reflects the latest committed state.
    """

    def __init__(
        self,
        settings_repo: Optional[SettingsRepository] = None,
        task_repo: Optional[TaskRepository] = None,
        hub: Optional[NotificationHub] = None,
        timeout: Optional[float] = None,
    ):
        self.settings_repo = settings_repo or get_settings_repository()
        self.task_repo = task_repo or get_task_repository()
        self.hub = hub or get_notification_hub()
        self.timeout = timeout if timeout is not None else settings.sheets_sync_timeout
        self._lock = asyncio.Lock()

    async def is_connected(self) -> bool:
        return bool(await self.settings_repo.get_json(GOOGLE_TOKENS))

    async def sync(self) -> bool:
        """
        Overwrite the first worksheet with the current task list.

        Returns True when the sheet was written. Missing tokens or spreadsheet
        id make this a silent no-op; any Google or store error is logged and
        reported as False.
        """
        async with self._lock:
            tokens = await self.settings_repo.get_json(GOOGLE_TOKENS)
            spreadsheet_id = await self.settings_repo.get(SPREADSHEET_ID)
            if not tokens or not spreadsheet_id:
                logger.debug("Sheets mirror skipped: not connected or no spreadsheet configured")
                return False

            try:
                tasks = await self.task_repo.get_all()
                rows = build_rows(tasks)
                credentials = credentials_from_tokens(tokens)

                await execute_with_timeout(
                    lambda: self._write_rows(credentials, spreadsheet_id, rows),
                    timeout=self.timeout,
                    operation="Sheets mirror write",
                )

                last_sync = datetime.now(timezone.utc).isoformat()
                await self.settings_repo.set(LAST_SYNC, last_sync)
                logger.info(f"Mirrored {len(rows) - 1} task(s) to spreadsheet {spreadsheet_id}")

            except Exception as e:
                logger.error(f"Failed to sync to Google Sheets: {e}")
                return False

        await self.hub.broadcast_sync_status(last_sync)
        return True

    async def request_sync(self) -> asyncio.Task:
        """Post-commit hook: run sync() in the background."""
        return create_safe_task(self.sync(), "sheets-mirror")

    def _write_rows(self, credentials: Credentials, spreadsheet_id: str, rows: List[List[Any]]) -> None:
        # Blocking; runs in a worker thread. Each HTTP call is bounded by timeout.
        client = gspread.authorize(credentials)
        client.set_timeout(self.timeout)
        worksheet = client.open_by_key(spreadsheet_id).sheet1
        # Overwrite in place, then blank the rows left over from a longer list.
        # A failed update leaves the previous contents untouched.
        worksheet.update(values=rows, range_name="A1", value_input_option="RAW")
        worksheet.batch_clear([f"A{len(rows) + 1}:{LAST_COLUMN}"])


# Singleton
_mirror: Optional[SpreadsheetMirror] = None


def get_spreadsheet_mirror() -> SpreadsheetMirror:
    """Get the spreadsheet mirror singleton."""
    global _mirror
    if _mirror is None:
        _mirror = SpreadsheetMirror()
    return _mirror
