from __future__ import annotations

from typing import Dict, List, Optional, Sequence

from .models import DeckRequest, Page, SlideContent
from .operations import EditOperation, InsertText, replace_text
from .placeholders import resolve_page
from .planner import TITLE_PAGE_INDEX, CreatedSlide

BULLET_GLYPH = "•"
PARAGRAPH_SEPARATOR = "\n\n"


def compose_body_text(slide: SlideContent) -> str:
    """Subtitle, body and bullets, in that order, separated by a blank line."""
    parts: List[str] = []
    subtitle = (slide.subtitle or "").strip()
    if subtitle:
        parts.append(subtitle)
    body = (slide.body or "").strip()
    if body:
        parts.append(body)
    if slide.bullets:
        parts.append("\n".join(f"{BULLET_GLYPH} {b.strip()}" for b in slide.bullets))
    return PARAGRAPH_SEPARATOR.join(parts)


def slide_title(slide: SlideContent) -> str:
    return (slide.title or "").strip()


def fill_content_page(page: Optional[Page], slide: SlideContent) -> List[EditOperation]:
    """Replace title text always, body text only when there is something to write."""
    assignment = resolve_page(page)
    operations: List[EditOperation] = []
    if assignment.title_element_id:
        operations.extend(replace_text(assignment.title_element_id, slide_title(slide)))
    body_text = compose_body_text(slide)
    if assignment.body_element_id and body_text:
        operations.extend(replace_text(assignment.body_element_id, body_text))
    return operations


def fill_title_page(page: Optional[Page], deck_title: str) -> List[EditOperation]:
    # the title page only ever receives the deck title
    assignment = resolve_page(page)
    if not assignment.title_element_id:
        return []
    return replace_text(assignment.title_element_id, deck_title)


def plan_template_fill(pages: Sequence[Page], request: DeckRequest) -> List[EditOperation]:
    """Fill batch for a restructured template deck.

    Page 0 gets the deck title, pages 1..N get ``request.slides``. The last
    (closing) page is left as the template had it.
    """
    operations = fill_title_page(pages[TITLE_PAGE_INDEX] if pages else None, request.title)
    for i, slide in enumerate(request.slides):
        page_index = TITLE_PAGE_INDEX + 1 + i
        page = pages[page_index] if page_index < len(pages) else None
        operations.extend(fill_content_page(page, slide))
    return operations


def plan_blank_first_page(first_page: Optional[Page], request: DeckRequest) -> List[EditOperation]:
    """Page 0 of a blank deck doubles as the first content slide.

    A freshly created deck has empty placeholders, so text is inserted
    without a preceding delete.
    """
    assignment = resolve_page(first_page)
    first = request.slides[0]
    operations: List[EditOperation] = []
    title = request.title if first.title is None else slide_title(first)
    if assignment.title_element_id and title:
        operations.append(InsertText(assignment.title_element_id, title, 0))
    body_text = compose_body_text(first)
    if assignment.body_element_id and body_text:
        operations.append(InsertText(assignment.body_element_id, body_text, 0))
    return operations


def plan_blank_fill(created: Sequence[CreatedSlide], request: DeckRequest) -> Dict[int, List[EditOperation]]:
    """Insertions into the text boxes created for slides 1..N-1."""
    plan: Dict[int, List[EditOperation]] = {}
    for shape_ids in created:
        slide = request.slides[shape_ids.content_index]
        operations: List[EditOperation] = []
        title = slide_title(slide)
        if title:
            operations.append(InsertText(shape_ids.title_box_id, title, 0))
        body_text = compose_body_text(slide)
        if body_text:
            operations.append(InsertText(shape_ids.body_box_id, body_text, 0))
        plan[shape_ids.content_index] = operations
    return plan
