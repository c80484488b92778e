from __future__ import annotations

from pathlib import Path
from typing import Optional

from google.auth.transport.requests import Request
from google.oauth2.credentials import Credentials
from google_auth_oauthlib.flow import InstalledAppFlow
from googleapiclient.discovery import build

from .config import Settings

SCOPES = [
    "https://www.googleapis.com/auth/presentations",
    "https://www.googleapis.com/auth/drive",
]
TOKEN_URI = "https://oauth2.googleapis.com/token"
_DEFAULT_CLIENT_SECRET_NAME = "client_secret.json"
_DEFAULT_TOKEN_NAME = "token.json"


def _repo_root() -> Path:
    return Path(__file__).resolve().parents[2]


def _default_token_path(settings: Settings) -> Path:
    if settings.token_file:
        return Path(settings.token_file)
    return _repo_root() / _DEFAULT_TOKEN_NAME


def _find_client_secret(settings: Settings) -> Optional[Path]:
    if settings.client_secret_file and Path(settings.client_secret_file).exists():
        return Path(settings.client_secret_file)
    for pattern in ("client_secret_*.json", _DEFAULT_CLIENT_SECRET_NAME, "credentials.json"):
        for candidate in _repo_root().glob(pattern):
            if candidate.exists():
                return candidate
    return None


def _refresh_if_needed(creds: Credentials, token_path: Path | None = None) -> Credentials:
    if (creds.expired or not creds.token) and creds.refresh_token:
        creds.refresh(Request())
        if token_path:
            token_path.write_text(creds.to_json(), encoding="utf-8")
    return creds


def _load_token_file_credentials(token_path: Path, client_secret_path: Path) -> Credentials:
    creds: Optional[Credentials] = None
    if token_path.exists():
        creds = Credentials.from_authorized_user_file(str(token_path), SCOPES)
    if creds and creds.valid:
        return creds
    if creds and creds.expired and creds.refresh_token:
        return _refresh_if_needed(creds, token_path)
    flow = InstalledAppFlow.from_client_secrets_file(str(client_secret_path), SCOPES)
    fresh = flow.run_local_server(port=0)
    token_path.write_text(fresh.to_json(), encoding="utf-8")
    return fresh


def build_credentials(settings: Settings) -> Credentials:
    """Refresh-token credentials from the environment, else the token-file flow."""
    if settings.has_refresh_token:
        creds = Credentials(
            token=None,
            refresh_token=settings.refresh_token,
            token_uri=TOKEN_URI,
            client_id=settings.client_id,
            client_secret=settings.client_secret,
            scopes=SCOPES,
        )
        return _refresh_if_needed(creds)

    client_secret = _find_client_secret(settings)
    if not client_secret or not client_secret.exists():
        raise FileNotFoundError(
            "Google credentials not configured. Set GOOGLE_CLIENT_ID, GOOGLE_CLIENT_SECRET and "
            "GOOGLE_REFRESH_TOKEN, or GOOGLE_CLIENT_SECRET_FILE."
        )
    token_path = _default_token_path(settings)
    creds = _load_token_file_credentials(token_path, client_secret)
    return _refresh_if_needed(creds, token_path)


def build_slides_service(credentials: Credentials) -> object:
    return build("slides", "v1", credentials=credentials, cache_discovery=False)


def build_drive_service(credentials: Credentials) -> object:
    return build("drive", "v3", credentials=credentials, cache_discovery=False)
