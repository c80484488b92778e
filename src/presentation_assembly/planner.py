from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

from .errors import StructureError
from .models import Page
from .operations import CreateShape, CreateSlide, DeleteObject, DuplicateObject, EditOperation, Geometry
from .placeholders import page_ids

logger = logging.getLogger(__name__)

# Template decks are: title page, content layout page, ..., closing page.
TITLE_PAGE_INDEX = 0
CONTENT_LAYOUT_INDEX = 1
MIN_TEMPLATE_PAGES = 3


@dataclass(frozen=True)
class BlankGeometry:
    """Fixed text-box placement for decks built without a template (points)."""

    page_width: float = 720
    page_height: float = 540
    margin: float = 40
    title_height: float = 60
    body_top: float = 120

    @property
    def content_width(self) -> float:
        return self.page_width - 2 * self.margin

    def title_box(self) -> Geometry:
        return Geometry(x=self.margin, y=self.margin, width=self.content_width, height=self.title_height)

    def body_box(self) -> Geometry:
        return Geometry(
            x=self.margin,
            y=self.body_top,
            width=self.content_width,
            height=self.page_height - self.body_top - self.margin,
        )


DEFAULT_GEOMETRY = BlankGeometry()


@dataclass(frozen=True)
class CreatedSlide:
    """Ids chosen for a slide created in blank mode."""

    content_index: int
    page_id: str
    title_box_id: str
    body_box_id: str


def expected_page_count(slide_count: int) -> int:
    return 1 + slide_count + 1


def plan_template_structure(pages: Sequence[Page], slide_count: int) -> List[EditOperation]:
    """Duplicate the content layout page and drop unused template pages.

    All duplicates come before any deletion so that every duplicate source
    still exists when it is copied.
    """
    if len(pages) < MIN_TEMPLATE_PAGES:
        raise StructureError(
            f"Template must have at least {MIN_TEMPLATE_PAGES} slides "
            f"(title, content layout, closing); found {len(pages)}",
            phase="structure",
        )
    if slide_count < 1:
        raise StructureError("At least one content slide is required", phase="structure")

    layout_id = pages[CONTENT_LAYOUT_INDEX].page_id
    if not layout_id:
        raise StructureError("Template content layout slide has no objectId", phase="structure")

    operations: List[EditOperation] = [DuplicateObject(layout_id) for _ in range(slide_count - 1)]
    for page in pages[CONTENT_LAYOUT_INDEX + 1 : len(pages) - 1]:
        if page.page_id:
            operations.append(DeleteObject(page.page_id))

    logger.debug(
        "Planned %d duplicate(s) of %s and %d deletion(s) from %s",
        slide_count - 1,
        layout_id,
        len(operations) - (slide_count - 1),
        page_ids(pages),
    )
    return operations


def verify_structure(pages: Sequence[Page], slide_count: int, document_id: Optional[str] = None) -> None:
    expected = expected_page_count(slide_count)
    if len(pages) < expected:
        raise StructureError(
            f"Template restructuring produced {len(pages)} slides; expected {expected}",
            phase="structure",
            document_id=document_id,
        )


def _object_id(kind: str, prefix: str, seq: int) -> str:
    return f"{kind}_{prefix}_{seq}"


def plan_blank_slides(slide_count: int, id_prefix: Optional[str] = None) -> List[CreatedSlide]:
    """Choose ids for slides 1..N-1; slide 0 reuses the document's first page."""
    prefix = id_prefix or uuid.uuid4().hex[:8]
    created: List[CreatedSlide] = []
    for i in range(1, slide_count):
        seq = i + 1
        created.append(
            CreatedSlide(
                content_index=i,
                page_id=_object_id("slide", prefix, seq),
                title_box_id=_object_id("title", prefix, seq),
                body_box_id=_object_id("body", prefix, seq),
            )
        )
    return created


def plan_blank_structure(
    created: Sequence[CreatedSlide],
    geometry: BlankGeometry = DEFAULT_GEOMETRY,
) -> Dict[int, List[EditOperation]]:
    """Creation operations per content index, in emission order."""
    plan: Dict[int, List[EditOperation]] = {}
    for slide in created:
        plan[slide.content_index] = [
            CreateSlide(slide.page_id, slide.content_index, "BLANK"),
            CreateShape(slide.title_box_id, slide.page_id, geometry.title_box()),
            CreateShape(slide.body_box_id, slide.page_id, geometry.body_box()),
        ]
    return plan
