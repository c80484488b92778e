import pytest

from src.presentation_assembly.errors import StructureError
from src.presentation_assembly.models import Page
from src.presentation_assembly.operations import CreateShape, CreateSlide, DeleteObject, DuplicateObject, count_kind
from src.presentation_assembly.planner import (
    BlankGeometry,
    expected_page_count,
    plan_blank_slides,
    plan_blank_structure,
    plan_template_structure,
    verify_structure,
)


def _pages(*ids):
    return [Page(page_id) for page_id in ids]


def test_three_page_template_single_slide_needs_no_edits():
    assert plan_template_structure(_pages("title", "layout", "end"), 1) == []


def test_three_slides_duplicate_layout_twice():
    ops = plan_template_structure(_pages("title", "layout", "end"), 3)
    assert ops == [DuplicateObject("layout"), DuplicateObject("layout")]
    assert count_kind(ops, DeleteObject) == 0


def test_unused_template_pages_are_deleted_after_duplicates():
    ops = plan_template_structure(_pages("title", "layout", "x1", "x2", "end"), 2)
    assert ops == [DuplicateObject("layout"), DeleteObject("x1"), DeleteObject("x2")]


def test_too_small_template_is_rejected():
    with pytest.raises(StructureError):
        plan_template_structure(_pages("title", "end"), 1)


def test_layout_page_without_id_is_rejected():
    with pytest.raises(StructureError):
        plan_template_structure(_pages("title", "", "end"), 1)


def test_verify_structure():
    assert expected_page_count(3) == 5
    verify_structure(_pages("a", "b", "c", "d", "e"), 3)
    with pytest.raises(StructureError) as exc:
        verify_structure(_pages("a", "b", "c", "d"), 3, "doc1")
    assert exc.value.document_id == "doc1"
    assert exc.value.phase == "structure"


def test_blank_geometry_defaults():
    geometry = BlankGeometry()
    title = geometry.title_box()
    body = geometry.body_box()
    assert (title.x, title.y, title.width, title.height) == (40, 40, 640, 60)
    assert (body.x, body.y, body.width, body.height) == (40, 120, 640, 380)


def test_blank_structure_creates_slide_then_two_boxes():
    created = plan_blank_slides(3, id_prefix="run")
    assert [c.content_index for c in created] == [1, 2]
    assert created[0].page_id == "slide_run_2"

    plan = plan_blank_structure(created)
    ops = plan[1]
    assert isinstance(ops[0], CreateSlide)
    assert ops[0].insertion_index == 1
    assert ops[0].predefined_layout == "BLANK"
    assert [type(op) for op in ops[1:]] == [CreateShape, CreateShape]
    assert {op.page_id for op in ops[1:]} == {"slide_run_2"}
    assert ops[1].object_id == "title_run_2"
    assert ops[2].object_id == "body_run_2"


def test_blank_single_slide_creates_nothing():
    assert plan_blank_slides(1) == []
