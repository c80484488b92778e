from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

EDIT_URL_TEMPLATE = "https://docs.google.com/presentation/d/{document_id}/edit"


class PlaceholderType(str, Enum):
    TITLE = "TITLE"
    CENTERED_TITLE = "CENTERED_TITLE"
    SUBTITLE = "SUBTITLE"
    BODY = "BODY"
    PICTURE = "PICTURE"
    SLIDE_NUMBER = "SLIDE_NUMBER"
    OTHER = "OTHER"


TITLE_ROLES = frozenset({PlaceholderType.TITLE})
BODY_ROLES = frozenset({PlaceholderType.BODY, PlaceholderType.SUBTITLE})


class SlideContent(BaseModel):
    """Content for one slide, as supplied by the caller."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    slide_number: Optional[int] = Field(default=None, ge=1, alias="slideNumber")
    title: Optional[str] = None
    subtitle: Optional[str] = None
    body: Optional[str] = None
    bullets: Optional[List[str]] = None
    notes: Optional[str] = None


class DeckRequest(BaseModel):
    """A request to assemble one presentation; slide order is list order."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    title: str = Field(min_length=1)
    slides: List[SlideContent] = Field(min_length=1)
    template_document_id: Optional[str] = Field(
        default=None,
        min_length=1,
        alias="templatePresentationId",
    )


@dataclass(frozen=True)
class PageElement:
    element_id: str
    role_hint: Optional[PlaceholderType] = None


@dataclass(frozen=True)
class Page:
    page_id: str
    elements: Tuple[PageElement, ...] = ()


@dataclass(frozen=True)
class PlaceholderAssignment:
    title_element_id: Optional[str] = None
    body_element_id: Optional[str] = None


@dataclass(frozen=True)
class AssemblyResult:
    document_id: str
    edit_url: str
    title: str

    @classmethod
    def for_document(cls, document_id: str, title: str) -> "AssemblyResult":
        return cls(document_id=document_id, edit_url=edit_url_for(document_id), title=title)

    def to_dict(self) -> dict:
        return {"presentationId": self.document_id, "editUrl": self.edit_url, "title": self.title}


def edit_url_for(document_id: str) -> str:
    return EDIT_URL_TEMPLATE.format(document_id=document_id)
