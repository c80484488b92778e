from .models import (
    AssemblyResult,
    DeckRequest,
    Page,
    PageElement,
    PlaceholderAssignment,
    PlaceholderType,
    SlideContent,
    edit_url_for,
)
from .errors import AssemblyError, ProvisionError, RemoteOperationError, StructureError, ValidationError
from .placeholders import parse_pages, resolve_placeholders
from .planner import BlankGeometry, plan_template_structure, verify_structure
from .filler import compose_body_text, plan_template_fill
from .provisioner import provision
from .engine import AssemblyState, PresentationAssembler, assemble
from .store import DocumentStore, GoogleSlidesStore

__all__ = [
    "AssemblyResult",
    "DeckRequest",
    "Page",
    "PageElement",
    "PlaceholderAssignment",
    "PlaceholderType",
    "SlideContent",
    "edit_url_for",
    "AssemblyError",
    "ProvisionError",
    "RemoteOperationError",
    "StructureError",
    "ValidationError",
    "parse_pages",
    "resolve_placeholders",
    "BlankGeometry",
    "plan_template_structure",
    "verify_structure",
    "compose_body_text",
    "plan_template_fill",
    "provision",
    "AssemblyState",
    "PresentationAssembler",
    "assemble",
    "DocumentStore",
    "GoogleSlidesStore",
]
