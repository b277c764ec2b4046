from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional


PAGES_TABLE = "pages"
CONTENT_TABLE = "tt_content"


class SourceKind(str, Enum):
    PAGE = "page"
    CONTENT = "content"


class TransitionKind(str, Enum):
    START = "start"
    END = "end"
    NONE = "none"


@dataclass(frozen=True)
class TemporalRecord:
    """Snapshot of one content item's temporal attributes.

    Instants are Unix epoch seconds. ``visible_from`` is inclusive,
    ``visible_until`` exclusive; either may be absent. The two bounds are
    evaluated independently and may be out of order.
    """

    uid: int
    table_name: str
    label: str = ""
    container_id: int = 0
    visible_from: Optional[int] = None
    visible_until: Optional[int] = None
    locale_id: int = 0
    variant_id: int = 0
    hidden: bool = False
    deleted: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "uid": self.uid,
            "table_name": self.table_name,
            "label": self.label,
            "container_id": self.container_id,
            "visible_from": self.visible_from,
            "visible_until": self.visible_until,
            "locale_id": self.locale_id,
            "variant_id": self.variant_id,
            "hidden": self.hidden,
            "deleted": self.deleted,
        }


@dataclass(frozen=True)
class TransitionEvent:
    instant: int
    uid: int
    table_name: str
    kind: TransitionKind

    def to_dict(self) -> Dict[str, Any]:
        return {
            "instant": self.instant,
            "uid": self.uid,
            "table_name": self.table_name,
            "kind": self.kind.value,
        }
