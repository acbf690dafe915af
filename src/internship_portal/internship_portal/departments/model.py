from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Department:
    """A department is keyed by its coordinator's user id."""

    uid: str
    name: str
    institute_id: int
