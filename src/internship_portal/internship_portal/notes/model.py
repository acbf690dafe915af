from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Note:
    id: int
    uid: str
    title: str
    description: str
