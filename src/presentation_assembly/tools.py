"""Presentation tools exposed over HTTP and MCP."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from .engine import assemble
from .errors import AssemblyError, ValidationError
from .models import AssemblyResult, DeckRequest
from .store import GoogleSlidesStore
from .summary import format_summary, summarize_presentation

logger = logging.getLogger(__name__)


class CreatePresentationArgs(BaseModel):
    title: str = Field(min_length=1)


class GetPresentationArgs(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    presentation_id: str = Field(min_length=1, alias="presentationId")
    fields: Optional[str] = None


class BatchUpdatePresentationArgs(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    presentation_id: str = Field(min_length=1, alias="presentationId")
    requests: List[Dict[str, Any]] = Field(min_length=1)
    write_control: Optional[Dict[str, Any]] = Field(default=None, alias="writeControl")


class GetPageArgs(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    presentation_id: str = Field(min_length=1, alias="presentationId")
    page_object_id: str = Field(min_length=1, alias="pageObjectId")


class SummarizePresentationArgs(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    presentation_id: str = Field(min_length=1, alias="presentationId")
    include_notes: bool = False


TOOLS: List[Dict[str, Any]] = [
    {
        "name": "create_presentation",
        "description": "Create a new Google Slides presentation. Returns presentationId and editUrl.",
        "inputSchema": {
            "type": "object",
            "properties": {"title": {"type": "string", "description": "The title of the presentation."}},
            "required": ["title"],
        },
    },
    {
        "name": "create_presentation_from_content",
        "description": (
            "Create a full presentation from structured slide content (title + slides array). "
            "Returns presentationId and editUrl. Optional templatePresentationId: copy a Google Slides "
            "template (preserves theme/layout) and fill placeholders."
        ),
        "inputSchema": {
            "type": "object",
            "properties": {
                "title": {"type": "string", "description": "Deck title."},
                "slides": {
                    "type": "array",
                    "description": "At least one slide. Each can have title, subtitle, body, bullets, notes.",
                    "items": {
                        "type": "object",
                        "properties": {
                            "slideNumber": {"type": "integer", "minimum": 1},
                            "title": {"type": "string"},
                            "subtitle": {"type": "string"},
                            "body": {"type": "string"},
                            "bullets": {"type": "array", "items": {"type": "string"}},
                            "notes": {"type": "string"},
                        },
                    },
                },
                "templatePresentationId": {
                    "type": "string",
                    "description": (
                        "Optional. Presentation ID to use as template. It must have at least 3 slides: "
                        "title, content layout, closing."
                    ),
                },
            },
            "required": ["title", "slides"],
        },
    },
    {
        "name": "get_presentation",
        "description": "Get details about a Google Slides presentation.",
        "inputSchema": {
            "type": "object",
            "properties": {
                "presentationId": {"type": "string", "description": "The ID of the presentation to retrieve."},
                "fields": {"type": "string", "description": "Optional. Field mask (e.g. \"slides,pageSize\")."},
            },
            "required": ["presentationId"],
        },
    },
    {
        "name": "batch_update_presentation",
        "description": "Apply a batch of updates to a Google Slides presentation (add slides, insert text, etc.).",
        "inputSchema": {
            "type": "object",
            "properties": {
                "presentationId": {"type": "string", "description": "The ID of the presentation to update."},
                "requests": {
                    "type": "array",
                    "description": "Array of Google Slides API batchUpdate request objects.",
                    "items": {"type": "object"},
                },
                "writeControl": {"type": "object", "description": "Optional. requiredRevisionId / targetRevisionId."},
            },
            "required": ["presentationId", "requests"],
        },
    },
    {
        "name": "get_page",
        "description": "Get details about a specific page (slide) in a presentation.",
        "inputSchema": {
            "type": "object",
            "properties": {
                "presentationId": {"type": "string", "description": "The ID of the presentation."},
                "pageObjectId": {"type": "string", "description": "The object ID of the page (slide) to retrieve."},
            },
            "required": ["presentationId", "pageObjectId"],
        },
    },
    {
        "name": "summarize_presentation",
        "description": "Extract text content from all slides for summarization. Optionally include speaker notes.",
        "inputSchema": {
            "type": "object",
            "properties": {
                "presentationId": {"type": "string", "description": "The ID of the presentation to summarize."},
                "include_notes": {"type": "boolean", "description": "Whether to include speaker notes (default: false)."},
            },
            "required": ["presentationId"],
        },
    },
]


@dataclass
class ToolResult:
    content: List[Dict[str, str]] = field(default_factory=list)
    is_error: bool = False
    error_code: Optional[str] = None

    @classmethod
    def text(cls, text: str) -> "ToolResult":
        return cls(content=[{"type": "text", "text": text}])

    @classmethod
    def json(cls, payload: Any) -> "ToolResult":
        return cls.text(json.dumps(payload, indent=2))

    @classmethod
    def error(cls, message: str, error_code: Optional[str] = None) -> "ToolResult":
        return cls(content=[{"type": "text", "text": message}], is_error=True, error_code=error_code)

    @property
    def first_text(self) -> str:
        if self.content and self.content[0].get("type") == "text":
            return self.content[0]["text"]
        return json.dumps(self.content)


def parse_deck_request(payload: Any, default_template_id: Optional[str] = None) -> DeckRequest:
    """Validate an incoming payload, applying the default template if none is given."""
    try:
        request = DeckRequest.model_validate(payload if payload is not None else {})
    except PydanticValidationError as exc:
        raise ValidationError.from_pydantic(exc) from exc
    if not request.template_document_id and default_template_id:
        request = request.model_copy(update={"template_document_id": default_template_id})
    return request


def create_from_content(
    store: GoogleSlidesStore,
    payload: Any,
    default_template_id: Optional[str] = None,
) -> AssemblyResult:
    request = parse_deck_request(payload, default_template_id)
    return assemble(store, request, template_available=store.can_copy)


def _parse(schema: type[BaseModel], args: Any) -> BaseModel:
    try:
        return schema.model_validate(args if args is not None else {})
    except PydanticValidationError as exc:
        raise ValidationError.from_pydantic(exc) from exc


def _create_presentation(store: GoogleSlidesStore, args: Any, **_) -> ToolResult:
    parsed = _parse(CreatePresentationArgs, args)
    document_id = store.create_document(parsed.title)
    if not document_id:
        return ToolResult.error("Google API did not return presentationId", "PROVISION_ERROR")
    return ToolResult.json(AssemblyResult.for_document(document_id, parsed.title).to_dict())


def _create_from_content(store: GoogleSlidesStore, args: Any, default_template_id: Optional[str] = None) -> ToolResult:
    result = create_from_content(store, args, default_template_id)
    return ToolResult.json(result.to_dict())


def _get_presentation(store: GoogleSlidesStore, args: Any, **_) -> ToolResult:
    parsed = _parse(GetPresentationArgs, args)
    return ToolResult.json(store.get_presentation(parsed.presentation_id, parsed.fields))


def _batch_update(store: GoogleSlidesStore, args: Any, **_) -> ToolResult:
    parsed = _parse(BatchUpdatePresentationArgs, args)
    response = store.batch_update(parsed.presentation_id, parsed.requests, parsed.write_control)
    return ToolResult.json(response)


def _get_page(store: GoogleSlidesStore, args: Any, **_) -> ToolResult:
    parsed = _parse(GetPageArgs, args)
    return ToolResult.json(store.get_page(parsed.presentation_id, parsed.page_object_id))


def _summarize(store: GoogleSlidesStore, args: Any, **_) -> ToolResult:
    parsed = _parse(SummarizePresentationArgs, args)
    pres = store.get_presentation(parsed.presentation_id)
    return ToolResult.text(format_summary(summarize_presentation(pres, parsed.include_notes)))


_HANDLERS: Dict[str, Callable[..., ToolResult]] = {
    "create_presentation": _create_presentation,
    "create_presentation_from_content": _create_from_content,
    "get_presentation": _get_presentation,
    "batch_update_presentation": _batch_update,
    "get_page": _get_page,
    "summarize_presentation": _summarize,
}


def call_tool(
    store: GoogleSlidesStore,
    name: str,
    args: Any,
    default_template_id: Optional[str] = None,
) -> ToolResult:
    """Run a tool by name. Validation and remote failures come back as error results."""
    handler = _HANDLERS.get(name)
    if handler is None:
        return ToolResult.error(f"Unknown tool: {name}", "UNKNOWN_TOOL")
    try:
        return handler(store, args, default_template_id=default_template_id)
    except ValidationError as exc:
        return ToolResult.error(exc.message, "INVALID_ARGUMENTS")
    except AssemblyError as exc:
        logger.warning("Tool %s failed: %s", name, exc)
        code = getattr(exc, "reason", None) or type(exc).__name__
        return ToolResult.error(str(exc), code)
