"""Hyperedge annotation and the result record of an instantiation."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Optional


@dataclass
class EdgeAnnotation:
    """Why a hyperedge exists, and whether it is in use."""

    justification: str = ""
    active: bool = True

    def is_active(self) -> bool:
        return bool(self.active)


@dataclass
class EdgeAggregator:
    """Antecedent node ids, the resulting molecule and the edge annotation."""

    antecedent: List[int] = field(default_factory=list)
    consequent: Any = None
    annotation: Optional[EdgeAnnotation] = None