from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Literal

NoticeKind = Literal["info", "success", "error"]

_SEVERITY = {
    "info": "information",
    "success": "information",
    "error": "error",
}


@dataclass(frozen=True)
class Notice:
    """Transient user-facing message produced by a catalog or budget operation."""

    kind: NoticeKind
    text: str

    @property
    def severity(self) -> str:
        """Textual ``notify`` severity for this notice."""
        return _SEVERITY[self.kind]


Notifier = Callable[[Notice], None]
