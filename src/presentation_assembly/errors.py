"""Exceptions raised while assembling a presentation."""

from __future__ import annotations

from typing import Iterable, Optional

from pydantic import ValidationError as PydanticValidationError


class AssemblyError(Exception):
    """Base error; carries the phase that failed and the document involved."""

    def __init__(self, message: str, *, phase: Optional[str] = None, document_id: Optional[str] = None):
        self.message = message
        self.phase = phase
        self.document_id = document_id
        super().__init__(self._format())

    def _format(self) -> str:
        context = []
        if self.phase:
            context.append(f"phase={self.phase}")
        if self.document_id:
            context.append(f"documentId={self.document_id}")
        if not context:
            return self.message
        return f"{self.message} ({', '.join(context)})"

    def to_dict(self) -> dict:
        return {
            "type": type(self).__name__,
            "message": self.message,
            "phase": self.phase,
            "documentId": self.document_id,
        }


class ProvisionError(AssemblyError):
    """Document create/copy yielded no id, or the template is too small."""


class StructureError(AssemblyError):
    """The document does not have the page shape the structural phase expects."""


class RemoteOperationError(AssemblyError):
    """A call to the remote document store failed."""

    NOT_FOUND = "NOT_FOUND"
    PERMISSION_DENIED = "PERMISSION_DENIED"
    QUOTA_EXCEEDED = "QUOTA_EXCEEDED"
    INVALID_OPERATION = "INVALID_OPERATION"
    VERSION_CONFLICT = "VERSION_CONFLICT"
    UNKNOWN = "UNKNOWN"

    def __init__(
        self,
        message: str,
        *,
        reason: str = UNKNOWN,
        status: Optional[int] = None,
        phase: Optional[str] = None,
        document_id: Optional[str] = None,
    ):
        self.reason = reason
        self.status = status
        super().__init__(message, phase=phase, document_id=document_id)

    def to_dict(self) -> dict:
        payload = super().to_dict()
        payload["reason"] = self.reason
        return payload


class ValidationError(AssemblyError):
    """The incoming request payload is malformed."""

    def __init__(self, issues: Iterable[dict]):
        self.issues = [i for i in issues if i.get("message")]
        if not self.issues:
            self.issues = [{"path": "", "message": "Invalid request"}]
        summary = "; ".join(
            f"{i['path']}: {i['message']}" if i.get("path") else i["message"] for i in self.issues
        )
        super().__init__(summary, phase="validation")

    @classmethod
    def from_pydantic(cls, exc: PydanticValidationError) -> "ValidationError":
        issues = [
            {"path": ".".join(str(p) for p in err.get("loc", ())), "message": err.get("msg", "Invalid value")}
            for err in exc.errors()
        ]
        return cls(issues)
