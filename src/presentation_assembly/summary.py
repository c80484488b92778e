from __future__ import annotations

from typing import Any, Dict, List, Optional, TypedDict


class SlideSummary(TypedDict, total=False):
    slideNumber: int
    objectId: str
    text: str
    notes: Optional[str]


class PresentationSummary(TypedDict, total=False):
    presentationId: str
    title: Optional[str]
    slideCount: int
    slides: List[SlideSummary]


def _get(obj: Dict[str, Any], path: List[str], default=None):
    cur: Any = obj
    for p in path:
        if not isinstance(cur, dict) or p not in cur:
            return default
        cur = cur[p]
    return cur


def _shape_text(element: Dict[str, Any]) -> str:
    buf: List[str] = []
    for t in _get(element, ["shape", "text", "textElements"], []) or []:
        s = _get(t, ["textRun", "content"])
        if s:
            buf.append(s)
    return "".join(buf).strip()


def _elements_text(elements: List[Dict[str, Any]]) -> str:
    texts = []
    for el in elements or []:
        if "elementGroup" in el:
            nested = _elements_text(_get(el, ["elementGroup", "children"], []))
            if nested:
                texts.append(nested)
            continue
        text = _shape_text(el)
        if text:
            texts.append(text)
    return "\n".join(texts)


def _notes_text(slide: Dict[str, Any]) -> Optional[str]:
    notes_page = _get(slide, ["slideProperties", "notesPage"], {}) or {}
    speaker_id = _get(notes_page, ["notesProperties", "speakerNotesObjectId"])
    for el in notes_page.get("pageElements", []) or []:
        if speaker_id and el.get("objectId") != speaker_id:
            continue
        text = _shape_text(el)
        if text:
            return text
    return None


def summarize_presentation(pres: Dict[str, Any], include_notes: bool = False) -> PresentationSummary:
    """Extract the text of every slide of a ``presentations.get`` payload."""
    slides: List[SlideSummary] = []
    for number, slide in enumerate(pres.get("slides") or [], start=1):
        entry: SlideSummary = {
            "slideNumber": number,
            "objectId": slide.get("objectId", ""),
            "text": _elements_text(slide.get("pageElements", [])),
        }
        if include_notes:
            entry["notes"] = _notes_text(slide)
        slides.append(entry)
    return {
        "presentationId": pres.get("presentationId", ""),
        "title": pres.get("title"),
        "slideCount": len(slides),
        "slides": slides,
    }


def format_summary(summary: PresentationSummary) -> str:
    lines = [f"Title: {summary.get('title') or '(untitled)'}", f"Slides: {summary.get('slideCount', 0)}"]
    for slide in summary.get("slides", []):
        lines.append("")
        lines.append(f"--- Slide {slide['slideNumber']} ---")
        lines.append(slide.get("text") or "(no text)")
        if slide.get("notes"):
            lines.append(f"Notes: {slide['notes']}")
    return "\n".join(lines)
