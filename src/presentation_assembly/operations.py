"""Edit operations and their Google Slides ``batchUpdate`` request form."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Sequence, Union


@dataclass(frozen=True)
class Geometry:
    x: float
    y: float
    width: float
    height: float
    unit: str = "PT"


@dataclass(frozen=True)
class DuplicateObject:
    source_id: str

    def to_request(self) -> dict:
        return {"duplicateObject": {"objectId": self.source_id}}


@dataclass(frozen=True)
class DeleteObject:
    target_id: str

    def to_request(self) -> dict:
        return {"deleteObject": {"objectId": self.target_id}}


@dataclass(frozen=True)
class CreateSlide:
    object_id: str
    insertion_index: int
    predefined_layout: str = "BLANK"

    def to_request(self) -> dict:
        return {
            "createSlide": {
                "objectId": self.object_id,
                "insertionIndex": self.insertion_index,
                "slideLayoutReference": {"predefinedLayout": self.predefined_layout},
            }
        }


@dataclass(frozen=True)
class CreateShape:
    object_id: str
    page_id: str
    geometry: Geometry
    shape_type: str = "TEXT_BOX"

    def to_request(self) -> dict:
        g = self.geometry
        return {
            "createShape": {
                "objectId": self.object_id,
                "shapeType": self.shape_type,
                "elementProperties": {
                    "pageObjectId": self.page_id,
                    "size": {
                        "width": {"magnitude": g.width, "unit": g.unit},
                        "height": {"magnitude": g.height, "unit": g.unit},
                    },
                    "transform": {
                        "scaleX": 1,
                        "scaleY": 1,
                        "translateX": g.x,
                        "translateY": g.y,
                        "unit": g.unit,
                    },
                },
            }
        }


@dataclass(frozen=True)
class DeleteAllText:
    element_id: str

    def to_request(self) -> dict:
        return {"deleteText": {"objectId": self.element_id, "textRange": {"type": "ALL"}}}


@dataclass(frozen=True)
class InsertText:
    element_id: str
    text: str
    insertion_index: int = 0

    def to_request(self) -> dict:
        return {
            "insertText": {
                "objectId": self.element_id,
                "insertionIndex": self.insertion_index,
                "text": self.text,
            }
        }


EditOperation = Union[DuplicateObject, DeleteObject, CreateSlide, CreateShape, DeleteAllText, InsertText]


def replace_text(element_id: str, text: str) -> List[EditOperation]:
    """Clear a shape and write ``text`` at the start."""
    return [DeleteAllText(element_id), InsertText(element_id, text, 0)]


def to_requests(operations: Iterable[EditOperation]) -> List[dict]:
    return [op.to_request() for op in operations]


def count_kind(operations: Sequence[EditOperation], kind: type) -> int:
    return sum(1 for op in operations if isinstance(op, kind))
