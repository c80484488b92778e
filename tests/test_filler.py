from src.presentation_assembly.filler import (
    compose_body_text,
    plan_blank_fill,
    plan_blank_first_page,
    plan_template_fill,
)
from src.presentation_assembly.models import DeckRequest, Page, PageElement, PlaceholderType, SlideContent
from src.presentation_assembly.operations import DeleteAllText, InsertText
from src.presentation_assembly.planner import plan_blank_slides


def _page(page_id, title=True, body=True):
    elements = []
    if title:
        elements.append(PageElement(f"{page_id}_t", PlaceholderType.TITLE))
    if body:
        elements.append(PageElement(f"{page_id}_b", PlaceholderType.BODY))
    return Page(page_id, tuple(elements))


def _request(*slides, title="Deck"):
    return DeckRequest(title=title, slides=[SlideContent(**s) for s in slides])


def test_body_text_order_and_separators():
    slide = SlideContent(subtitle="s", body="x", bullets=["a", "b"])
    assert compose_body_text(slide) == "s\n\nx\n\n• a\n• b"


def test_body_text_trims_and_skips_empty_parts():
    assert compose_body_text(SlideContent(subtitle="  ", body="  hello  ")) == "hello"
    assert compose_body_text(SlideContent(bullets=[" one "])) == "• one"
    assert compose_body_text(SlideContent(bullets=[])) == ""
    assert compose_body_text(SlideContent()) == ""


def test_title_page_gets_deck_title_only():
    pages = [_page("p0"), _page("p1"), _page("end")]
    ops = plan_template_fill(pages, _request({"title": "Intro", "body": "text"}, title="My Deck"))
    title_page_ops = [op for op in ops if op.element_id.startswith("p0")]
    assert title_page_ops == [DeleteAllText("p0_t"), InsertText("p0_t", "My Deck", 0)]


def test_content_pages_are_filled_in_order_and_closing_untouched():
    pages = [_page("p0"), _page("p1"), _page("p2"), _page("end")]
    ops = plan_template_fill(pages, _request({"title": " One "}, {"title": "Two", "body": "b"}))
    assert ops == [
        DeleteAllText("p0_t"),
        InsertText("p0_t", "Deck", 0),
        DeleteAllText("p1_t"),
        InsertText("p1_t", "One", 0),
        DeleteAllText("p2_t"),
        InsertText("p2_t", "Two", 0),
        DeleteAllText("p2_b"),
        InsertText("p2_b", "b", 0),
    ]
    assert not any(op.element_id.startswith("end") for op in ops)


def test_empty_body_leaves_placeholder_alone_but_title_is_always_replaced():
    pages = [_page("p0"), _page("p1"), _page("end")]
    ops = plan_template_fill(pages, _request({}))
    content_ops = [op for op in ops if op.element_id.startswith("p1")]
    assert content_ops == [DeleteAllText("p1_t"), InsertText("p1_t", "", 0)]


def test_page_without_title_hint_skips_title_fill():
    untagged = Page("p1", (PageElement("deco"), PageElement("box")))
    pages = [_page("p0"), untagged, _page("end")]
    ops = plan_template_fill(pages, _request({"title": "T", "body": "B"}))
    assert [op for op in ops if op.element_id in ("deco", "box")] == [DeleteAllText("box"), InsertText("box", "B", 0)]


def test_notes_are_not_written():
    pages = [_page("p0"), _page("p1"), _page("end")]
    ops = plan_template_fill(pages, _request({"title": "T", "notes": "speaker only"}))
    assert all("speaker only" not in getattr(op, "text", "") for op in ops)


def test_blank_first_page_uses_first_slide_content():
    first = Page("p", (PageElement("i0", PlaceholderType.TITLE), PageElement("i1", PlaceholderType.SUBTITLE)))
    ops = plan_blank_first_page(first, _request({"title": "Hello", "bullets": ["x"]}))
    assert ops == [InsertText("i0", "Hello", 0), InsertText("i1", "• x", 0)]


def test_blank_first_page_falls_back_to_deck_title():
    first = Page("p", (PageElement("i0", PlaceholderType.TITLE),))
    assert plan_blank_first_page(first, _request({}, title="Deck")) == [InsertText("i0", "Deck", 0)]


def test_blank_first_page_keeps_an_empty_title_empty():
    first = Page("p", (PageElement("i0", PlaceholderType.TITLE),))
    assert plan_blank_first_page(first, _request({"title": "   "}, title="Deck")) == []
    assert plan_blank_first_page(first, _request({"title": ""}, title="Deck")) == []


def test_blank_first_page_centered_title_is_not_filled():
    first = Page("p", (PageElement("i0", PlaceholderType.CENTERED_TITLE),))
    assert plan_blank_first_page(first, _request({"title": "Hello"})) == []


def test_blank_fill_skips_empty_text():
    request = _request({"title": "a"}, {"title": "b"}, {"body": "c"})
    created = plan_blank_slides(3, id_prefix="r")
    plan = plan_blank_fill(created, request)
    assert plan[1] == [InsertText("title_r_2", "b", 0)]
    assert plan[2] == [InsertText("body_r_3", "c", 0)]
