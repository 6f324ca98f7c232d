"""Board Schemas — name and membership payloads.

Invariants:
    - name: 1-200 chars after strip
    - member_ids: a list of UUIDs; duplicates are collapsed by the registry
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field, field_validator


class BoardCreate(BaseModel):
    name: str = Field(max_length=200)

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Board name is required.")
        return v


class BoardUpdate(BoardCreate):
    """Rename — same rules as creation."""


class BoardMembersUpdate(BaseModel):
    member_ids: list[UUID]


class BoardResponse(BaseModel):
    id: UUID
    name: str
    members: list[UUID]
    created_by: UUID | None
    created_at: datetime

    @classmethod
    def from_board(cls, board) -> "BoardResponse":
        return cls(
            id=board.id,
            name=board.name,
            members=sorted(board.member_ids, key=str),
            created_by=board.created_by,
            created_at=board.created_at,
        )
