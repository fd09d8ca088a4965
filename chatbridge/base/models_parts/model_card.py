"""
Model listing DTOs for ``GET /v1/models``.

`ModelCard` describes one advertised model; `ModelList` wraps the ordered
catalog in the ``{"object": "list", "data": [...]}`` envelope.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterable, Tuple


@dataclass(frozen=True)
class ModelCard:
    """One entry of the model catalog."""

    id: str
    created: int
    owned_by: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "object": "model",
            "created": self.created,
            "owned_by": self.owned_by,
        }


@dataclass(frozen=True)
class ModelList:
    """Ordered model catalog."""

    data: Tuple[ModelCard, ...]

    @classmethod
    def from_ids(cls, model_ids: Iterable[str], *, created: int, owned_by: str) -> "ModelList":
        """Build a catalog preserving the order of ``model_ids``."""
        return cls(
            data=tuple(ModelCard(id=m, created=created, owned_by=owned_by) for m in model_ids)
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"object": "list", "data": [card.to_dict() for card in self.data]}


__all__ = ["ModelCard", "ModelList"]
