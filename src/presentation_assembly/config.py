from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import List, Optional

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

REFRESH_TOKEN_VARS = ("GOOGLE_CLIENT_ID", "GOOGLE_CLIENT_SECRET", "GOOGLE_REFRESH_TOKEN")


def _get_env(name: str, default: Optional[str] = None) -> Optional[str]:
    val = os.environ.get(name, default)
    if val is not None and not val.strip():
        return default
    return val


@dataclass(frozen=True)
class Settings:
    client_id: Optional[str] = None
    client_secret: Optional[str] = None
    refresh_token: Optional[str] = None
    token_file: Optional[str] = None
    client_secret_file: Optional[str] = None
    default_template_id: Optional[str] = None
    host: str = "127.0.0.1"
    port: int = 3000
    log_level: str = "INFO"

    @property
    def has_refresh_token(self) -> bool:
        return bool(self.client_id and self.client_secret and self.refresh_token)


def load_settings() -> Settings:
    """Read settings from the environment (and a ``.env`` file if present)."""
    load_dotenv()
    port = _get_env("PORT") or _get_env("FLASK_PORT", "3000")
    return Settings(
        client_id=_get_env("GOOGLE_CLIENT_ID"),
        client_secret=_get_env("GOOGLE_CLIENT_SECRET"),
        refresh_token=_get_env("GOOGLE_REFRESH_TOKEN"),
        token_file=_get_env("GOOGLE_SLIDES_TOKEN_FILE"),
        client_secret_file=_get_env("GOOGLE_CLIENT_SECRET_FILE"),
        default_template_id=_get_env("GOOGLE_SLIDES_TEMPLATE_ID"),
        host=_get_env("FLASK_HOST", "127.0.0.1") or "127.0.0.1",
        port=int(port or "3000"),
        log_level=(_get_env("LOG_LEVEL", "INFO") or "INFO").upper(),
    )


def check_environment(settings: Settings) -> List[str]:
    """Return the names of missing credential variables and warn about them."""
    if settings.has_refresh_token or settings.token_file or settings.client_secret_file:
        return []
    missing = [
        name
        for name, value in zip(
            REFRESH_TOKEN_VARS,
            (settings.client_id, settings.client_secret, settings.refresh_token),
        )
        if not value
    ]
    if missing:
        logger.warning("Missing Google credential settings: %s", ", ".join(missing))
    return missing
