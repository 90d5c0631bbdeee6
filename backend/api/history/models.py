from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

@dataclass(frozen=True)
class Entry:
    id: int
    content: str
    created_at: datetime
    origin_address: str

@dataclass(frozen=True)
class EntryView:
    content: str
    timestamp: str
    edit_target: int
    current_index: int
    total_count: int
    previous_position: Optional[int] = None
    next_position: Optional[int] = None

    @property
    def prev_link(self) -> Optional[str]:
        if self.previous_position is None:
            return None
        return f"/entry/{self.previous_position}"

    @property
    def next_link(self) -> Optional[str]:
        if self.next_position is None:
            return None
        return f"/entry/{self.next_position}"

    @property
    def edit_link(self) -> str:
        return f"/entry/{self.edit_target}?edit=true"
