"""Assemble a presentation from structured slide content.

A template deck is built in two batches. The structural batch duplicates the
content layout page and removes unused template pages; the deck is then read
again, because the ids of duplicated shapes are only known once the remote
store has assigned them, and the fill batch writes text into those shapes.

A blank deck needs only one batch: every id it references is chosen here.

Failures are not retried and applied edits are not rolled back. If the fill
batch fails, the deck is left with the right slides but without content; the
error carries the document id so the caller can decide what to do with it.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from enum import Enum
from typing import Iterator, List, Optional, Sequence

from .errors import RemoteOperationError, StructureError
from .filler import plan_blank_fill, plan_blank_first_page, plan_template_fill
from .models import AssemblyResult, DeckRequest, Page
from .operations import DeleteObject, DuplicateObject, EditOperation, count_kind
from .planner import (
    DEFAULT_GEOMETRY,
    BlankGeometry,
    plan_blank_slides,
    plan_blank_structure,
    plan_template_structure,
    verify_structure,
)
from .provisioner import ProvisionedDocument, provision
from .store import DocumentStore

logger = logging.getLogger(__name__)


class AssemblyState(str, Enum):
    NEW = "NEW"
    PROVISIONED = "PROVISIONED"
    STRUCTURALLY_PLANNED = "STRUCTURALLY_PLANNED"
    FILLED = "FILLED"


_NEXT_STATE = {
    AssemblyState.NEW: AssemblyState.PROVISIONED,
    AssemblyState.PROVISIONED: AssemblyState.STRUCTURALLY_PLANNED,
    AssemblyState.STRUCTURALLY_PLANNED: AssemblyState.FILLED,
}


class PresentationAssembler:
    def __init__(
        self,
        store: DocumentStore,
        *,
        geometry: BlankGeometry = DEFAULT_GEOMETRY,
        id_prefix: Optional[str] = None,
    ) -> None:
        self.store = store
        self.geometry = geometry
        self.id_prefix = id_prefix
        self.state = AssemblyState.NEW
        self.document_id: Optional[str] = None

    def _advance(self, target: AssemblyState) -> None:
        expected = _NEXT_STATE.get(self.state)
        if expected is not target:
            raise RuntimeError(f"Invalid assembly transition {self.state.value} -> {target.value}")
        self.state = target
        logger.info("Presentation %s: %s", self.document_id or "-", target.value)

    @contextmanager
    def _phase(self, phase: str) -> Iterator[None]:
        try:
            yield
        except RemoteOperationError as exc:
            raise RemoteOperationError(
                exc.message,
                reason=exc.reason,
                status=exc.status,
                phase=phase,
                document_id=self.document_id or exc.document_id,
            ) from exc

    def _send(self, operations: Sequence[EditOperation]) -> None:
        if not operations:
            logger.debug("Presentation %s: empty batch not sent", self.document_id)
            return
        self.store.apply_batch(self.document_id, list(operations))

    def assemble(self, request: DeckRequest, template_available: bool = True) -> AssemblyResult:
        if self.state is not AssemblyState.NEW:
            raise RuntimeError("PresentationAssembler instances handle a single request")

        with self._phase("provision"):
            provisioned = provision(self.store, request, template_available)
        self.document_id = provisioned.document_id
        self._advance(AssemblyState.PROVISIONED)

        if provisioned.from_template:
            self._assemble_template(provisioned, request)
        else:
            self._assemble_blank(request)
        return AssemblyResult.for_document(self.document_id, request.title)

    def _assemble_template(self, provisioned: ProvisionedDocument, request: DeckRequest) -> None:
        slide_count = len(request.slides)
        structure = plan_template_structure(provisioned.pages, slide_count)
        logger.info(
            "Presentation %s: %d duplicate(s), %d deletion(s)",
            self.document_id,
            count_kind(structure, DuplicateObject),
            count_kind(structure, DeleteObject),
        )
        with self._phase("structure"):
            self._send(structure)
            pages = self.store.get_pages(self.document_id)
        try:
            verify_structure(pages, slide_count, self.document_id)
        except StructureError:
            logger.error("Presentation %s: unexpected slide count %d after restructuring", self.document_id, len(pages))
            raise
        self._advance(AssemblyState.STRUCTURALLY_PLANNED)

        fill = plan_template_fill(pages, request)
        with self._phase("fill"):
            self._send(fill)
        self._advance(AssemblyState.FILLED)

    def _assemble_blank(self, request: DeckRequest) -> None:
        with self._phase("structure"):
            pages: List[Page] = self.store.get_pages(self.document_id)
        created = plan_blank_slides(len(request.slides), self.id_prefix)
        structure = plan_blank_structure(created, self.geometry)
        self._advance(AssemblyState.STRUCTURALLY_PLANNED)

        fill = plan_blank_fill(created, request)
        operations: List[EditOperation] = plan_blank_first_page(pages[0] if pages else None, request)
        for shape_ids in created:
            operations.extend(structure[shape_ids.content_index])
            operations.extend(fill[shape_ids.content_index])
        with self._phase("fill"):
            self._send(operations)
        self._advance(AssemblyState.FILLED)


def assemble(
    store: DocumentStore,
    request: DeckRequest,
    template_available: bool = True,
    **options,
) -> AssemblyResult:
    return PresentationAssembler(store, **options).assemble(request, template_available)
