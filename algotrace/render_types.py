"""RenderState — the derived snapshot a renderer draws (pure data)."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class RenderState:
    data: list[Any] = field(default_factory=list)
    active: list[int] = field(default_factory=list)
    comparing: list[int] = field(default_factory=list)
    done: list[int] = field(default_factory=list)  # ordered, no duplicates
    aux: dict[str, Any] = field(default_factory=dict)
    result: Any = None
    description: str = ""
    step_kind: str | None = None

    def mark_done(self, indices) -> None:
        for idx in indices:
            if idx not in self.done:
                self.done.append(idx)

    def highlight(self, active=(), comparing=()) -> None:
        self.active = list(active)
        self.comparing = list(comparing)

    def to_dict(self) -> dict:
        d: dict[str, Any] = {
            "data": self.data,
            "active": self.active,
            "comparing": self.comparing,
            "done": self.done,
            "description": self.description,
        }
        if self.aux:
            d["aux"] = self.aux
        if self.result is not None:
            d["result"] = self.result
        if self.step_kind:
            d["step_kind"] = self.step_kind
        return d
