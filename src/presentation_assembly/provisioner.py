from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List

from .errors import ProvisionError
from .models import DeckRequest, Page
from .planner import MIN_TEMPLATE_PAGES
from .store import DocumentStore

logger = logging.getLogger(__name__)


@dataclass
class ProvisionedDocument:
    document_id: str
    from_template: bool
    pages: List[Page] = field(default_factory=list)


def provision(store: DocumentStore, request: DeckRequest, template_available: bool = True) -> ProvisionedDocument:
    """Copy the requested template, or create a blank deck when there is none.

    Each call creates a new document.
    """
    template_id = request.template_document_id
    if not template_id or not template_available or not store.can_copy:
        document_id = store.create_document(request.title)
        if not document_id:
            raise ProvisionError("Google API did not return presentationId", phase="provision")
        logger.info("Created blank presentation %s", document_id)
        return ProvisionedDocument(document_id=document_id, from_template=False)

    document_id = store.copy_document(template_id, request.title)
    if not document_id:
        raise ProvisionError("Drive copy did not return file id", phase="provision")
    logger.info("Copied template %s to %s", template_id, document_id)

    pages = store.get_pages(document_id)
    if len(pages) < MIN_TEMPLATE_PAGES:
        raise ProvisionError(
            f"Template must have at least {MIN_TEMPLATE_PAGES} slides: title, content layout, "
            f"closing (found {len(pages)})",
            phase="provision",
            document_id=document_id,
        )
    return ProvisionedDocument(document_id=document_id, from_template=True, pages=pages)
