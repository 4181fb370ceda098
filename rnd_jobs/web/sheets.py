"""
Google Sheets connection: OAuth connect flow and spreadsheet settings.
"""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse, PlainTextResponse

from ..database.repositories.settings import (
    SettingsRepository,
    get_settings_repository,
    SPREADSHEET_ID,
    LAST_SYNC,
)
from ..integrations.google_oauth import GoogleOAuthClient, get_google_oauth_client
from ..integrations.sheets import SpreadsheetMirror, get_spreadsheet_mirror
from ..models.api_validation import SpreadsheetSettingsUpdate

logger = logging.getLogger(__name__)

router = APIRouter()

# Posted back to the settings panel that opened the popup
CONNECTED_PAGE = """
<html>
  <body>
    <script>
      if (window.opener) {
        window.opener.postMessage({ type: 'OAUTH_AUTH_SUCCESS' }, '*');
        window.close();
      } else {
        window.location.href = '/';
      }
    </script>
    <p>Koneksi Google Sheets berhasil! Jendela ini akan tertutup otomatis.</p>
  </body>
</html>
"""


# ============================================================================
# OAuth
# ============================================================================

@router.get("/api/auth/google/url")
async def google_auth_url(oauth: GoogleOAuthClient = Depends(get_google_oauth_client)):
    """Consent URL for the connect popup."""
    return {"url": oauth.get_auth_url()}


@router.get("/auth/google/callback")
async def google_auth_callback(
    code: str = "",
    oauth: GoogleOAuthClient = Depends(get_google_oauth_client),
):
    """Exchange the code and tell the opener window we are connected."""
    try:
        await oauth.exchange_code(code)
    except Exception as e:
        logger.error(f"OAuth callback error: {e}")
        return PlainTextResponse("Authentication failed", status_code=500)

    return HTMLResponse(content=CONNECTED_PAGE)


# ============================================================================
# Spreadsheet settings
# ============================================================================

@router.get("/api/settings/spreadsheet")
async def get_spreadsheet_settings(
    settings_repo: SettingsRepository = Depends(get_settings_repository),
    mirror: SpreadsheetMirror = Depends(get_spreadsheet_mirror),
):
    return {
        "spreadsheetId": await settings_repo.get(SPREADSHEET_ID) or "",
        "lastSync": await settings_repo.get(LAST_SYNC),
        "isConnected": await mirror.is_connected(),
    }


@router.post("/api/settings/spreadsheet")
async def update_spreadsheet_settings(
    payload: SpreadsheetSettingsUpdate,
    settings_repo: SettingsRepository = Depends(get_settings_repository),
    mirror: SpreadsheetMirror = Depends(get_spreadsheet_mirror),
):
    """Point the mirror at another spreadsheet and resync in the background."""
    await settings_repo.set(SPREADSHEET_ID, payload.spreadsheet_id)
    logger.info(f"Spreadsheet set to {payload.spreadsheet_id}")
    await mirror.request_sync()
    return {"success": True}


@router.post("/api/settings/spreadsheet/sync")
async def sync_spreadsheet(mirror: SpreadsheetMirror = Depends(get_spreadsheet_mirror)):
    """Run the mirror now and report whether the sheet was written."""
    return {"success": await mirror.sync()}
