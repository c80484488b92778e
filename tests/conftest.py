import pytest

from src.presentation_assembly.models import DeckRequest

from tests.fakes import FakeDocumentStore, template_slides


@pytest.fixture
def template_store():
    return FakeDocumentStore({"tmpl": template_slides()})


@pytest.fixture
def make_request():
    def _make(*slides, title="Quarterly Review", template="tmpl"):
        payload = {"title": title, "slides": list(slides) or [{"title": "Only slide"}]}
        if template:
            payload["templatePresentationId"] = template
        return DeckRequest.model_validate(payload)

    return _make
