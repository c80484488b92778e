"""Find which elements of a slide act as its title and body.

Classification is an ordered pass over the page's elements:

1. The first element hinted ``TITLE`` is the title. Other hints, including
   ``CENTERED_TITLE``, never mark a title.
2. The first element hinted ``BODY`` or ``SUBTITLE`` is the body.
3. If no element is hinted as a body and the page has at least two elements,
   the element at index 1 is the body.

Hints always win over position. There is no positional rule for the title: a
page without a title hint has no title target. Third-party templates often
leave placeholders untagged, which is what rule 3 is for.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional, Sequence

from .models import BODY_ROLES, TITLE_ROLES, Page, PageElement, PlaceholderAssignment, PlaceholderType

PAGES_FIELD_MASK = "slides(objectId,pageElements(objectId,shape(placeholder(type))))"
FALLBACK_BODY_INDEX = 1


def _coerce_placeholder_type(raw_type: Optional[str]) -> Optional[PlaceholderType]:
    if not raw_type:
        return None
    try:
        return PlaceholderType(raw_type)
    except ValueError:
        return PlaceholderType.OTHER


def _role_hint(element: Dict[str, Any]) -> Optional[PlaceholderType]:
    placeholder = None
    if isinstance(element.get("shape"), dict):
        placeholder = element["shape"].get("placeholder")
    elif isinstance(element.get("image"), dict):
        placeholder = element["image"].get("placeholder")
    if not isinstance(placeholder, dict):
        return None
    return _coerce_placeholder_type(placeholder.get("type"))


def parse_page(slide: Dict[str, Any]) -> Page:
    elements = [
        PageElement(element_id=el.get("objectId") or "", role_hint=_role_hint(el))
        for el in slide.get("pageElements") or []
    ]
    return Page(page_id=slide.get("objectId") or "", elements=tuple(elements))


def parse_pages(presentation: Dict[str, Any]) -> List[Page]:
    """Convert a ``presentations.get`` payload into ordered pages."""
    return [parse_page(slide) for slide in (presentation or {}).get("slides") or []]


def resolve_placeholders(elements: Sequence[PageElement]) -> PlaceholderAssignment:
    title_id: Optional[str] = None
    body_id: Optional[str] = None
    for element in elements:
        if not element.element_id:
            continue
        if title_id is None and element.role_hint in TITLE_ROLES:
            title_id = element.element_id
        elif body_id is None and element.role_hint in BODY_ROLES:
            body_id = element.element_id

    if body_id is None and len(elements) > FALLBACK_BODY_INDEX:
        body_id = elements[FALLBACK_BODY_INDEX].element_id or None

    return PlaceholderAssignment(title_element_id=title_id, body_element_id=body_id)


def resolve_page(page: Optional[Page]) -> PlaceholderAssignment:
    if page is None:
        return PlaceholderAssignment()
    return resolve_placeholders(page.elements)


def page_ids(pages: Iterable[Page]) -> List[str]:
    return [p.page_id for p in pages]
