"""Access to presentations held in Google Slides and Google Drive."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator, List, Optional, Protocol, Sequence

from googleapiclient.errors import HttpError

from .config import Settings
from .errors import RemoteOperationError
from .models import Page
from .operations import EditOperation, to_requests
from .placeholders import PAGES_FIELD_MASK, parse_pages
from .slides_api import build_credentials, build_drive_service, build_slides_service

logger = logging.getLogger(__name__)

_STATUS_REASONS = {
    400: RemoteOperationError.INVALID_OPERATION,
    401: RemoteOperationError.PERMISSION_DENIED,
    403: RemoteOperationError.PERMISSION_DENIED,
    404: RemoteOperationError.NOT_FOUND,
    409: RemoteOperationError.VERSION_CONFLICT,
    429: RemoteOperationError.QUOTA_EXCEEDED,
}


class DocumentStore(Protocol):
    """The four calls the assembly engine makes against the remote store."""

    @property
    def can_copy(self) -> bool: ...

    def copy_document(self, source_id: str, new_title: str) -> Optional[str]: ...

    def create_document(self, title: str) -> Optional[str]: ...

    def get_pages(self, document_id: str, field_mask: str = PAGES_FIELD_MASK) -> List[Page]: ...

    def apply_batch(self, document_id: str, operations: Sequence[EditOperation]) -> dict: ...


def _http_status(exc: HttpError) -> Optional[int]:
    resp = getattr(exc, "resp", None)
    status = getattr(resp, "status", None)
    try:
        return int(status) if status is not None else None
    except (TypeError, ValueError):
        return None


def translate_http_error(exc: HttpError, *, phase: str, document_id: Optional[str]) -> RemoteOperationError:
    status = _http_status(exc)
    reason = _STATUS_REASONS.get(status, RemoteOperationError.UNKNOWN)
    detail = getattr(exc, "reason", None) or str(exc)
    return RemoteOperationError(
        f"Google API call failed: {detail}",
        reason=reason,
        status=status,
        phase=phase,
        document_id=document_id,
    )


@contextmanager
def remote_call(phase: str, document_id: Optional[str] = None) -> Iterator[None]:
    try:
        yield
    except HttpError as exc:
        error = translate_http_error(exc, phase=phase, document_id=document_id)
        logger.error("Remote call failed: %s", error)
        raise error from exc


class GoogleSlidesStore:
    """Slides v1 for reading and editing decks, Drive v3 for copying them."""

    def __init__(self, slides_service: object, drive_service: Optional[object] = None) -> None:
        self.slides = slides_service
        self.drive = drive_service

    @classmethod
    def from_credentials(cls, creds) -> "GoogleSlidesStore":
        return cls(build_slides_service(creds), build_drive_service(creds))

    @classmethod
    def from_settings(cls, settings: Settings) -> "GoogleSlidesStore":
        return cls.from_credentials(build_credentials(settings))

    @property
    def can_copy(self) -> bool:
        return self.drive is not None

    def copy_document(self, source_id: str, new_title: str) -> Optional[str]:
        if self.drive is None:
            raise RemoteOperationError(
                "Drive access is not configured; cannot copy template",
                reason=RemoteOperationError.PERMISSION_DENIED,
                phase="provision",
                document_id=source_id,
            )
        with remote_call("provision", source_id):
            response = (
                self.drive.files()
                .copy(fileId=source_id, body={"name": new_title}, fields="id", supportsAllDrives=True)
                .execute()
            )
        return (response or {}).get("id")

    def create_document(self, title: str) -> Optional[str]:
        with remote_call("provision"):
            response = self.slides.presentations().create(body={"title": title}).execute()
        return (response or {}).get("presentationId")

    def get_presentation(self, document_id: str, fields: Optional[str] = None) -> dict:
        kwargs = {"presentationId": document_id}
        if fields:
            kwargs["fields"] = fields
        with remote_call("read", document_id):
            return self.slides.presentations().get(**kwargs).execute()

    def get_pages(self, document_id: str, field_mask: str = PAGES_FIELD_MASK) -> List[Page]:
        return parse_pages(self.get_presentation(document_id, field_mask))

    def get_page(self, document_id: str, page_id: str) -> dict:
        with remote_call("read", document_id):
            return (
                self.slides.presentations()
                .pages()
                .get(presentationId=document_id, pageObjectId=page_id)
                .execute()
            )

    def batch_update(self, document_id: str, requests: Sequence[dict], write_control: Optional[dict] = None) -> dict:
        if not document_id:
            raise ValueError("document_id is required")
        if not requests:
            raise ValueError("requests must be a non-empty sequence")
        body: dict = {"requests": list(requests)}
        if write_control:
            body["writeControl"] = write_control
        with remote_call("batch", document_id):
            return self.slides.presentations().batchUpdate(presentationId=document_id, body=body).execute()

    def apply_batch(self, document_id: str, operations: Sequence[EditOperation]) -> dict:
        return self.batch_update(document_id, to_requests(operations))
