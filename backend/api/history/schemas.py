from typing import Optional

from pydantic import BaseModel, ConfigDict


class EntryViewOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    content: str
    timestamp: str
    editing: bool = False
    prev_link: Optional[str] = None
    next_link: Optional[str] = None
    edit_link: str
    current_index: int
    total_count: int


class HealthOut(BaseModel):
    status: str


class ReadyOut(BaseModel):
    status: str
    db: str
