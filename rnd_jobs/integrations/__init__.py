from .sheets import SpreadsheetMirror, get_spreadsheet_mirror, build_rows, SHEET_HEADER
from .google_oauth import GoogleOAuthClient, OAuthExchangeError, get_google_oauth_client

__all__ = [
    "SpreadsheetMirror",
    "get_spreadsheet_mirror",
    "build_rows",
    "SHEET_HEADER",
    "GoogleOAuthClient",
    "OAuthExchangeError",
    "get_google_oauth_client",
]
