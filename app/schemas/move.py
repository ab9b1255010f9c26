# app/schemas/move.py
from pydantic import BaseModel
from datetime import datetime
from typing import List, Literal, Optional


class MoveCreate(BaseModel):
    title: str
    description: str


class MoveInterest(BaseModel):
    interest: Literal["interested", "not_interested"]


class MoveCommentCreate(BaseModel):
    text: str


class MoveCommentOut(BaseModel):
    id: int
    text: str
    author: str
    created_at: datetime

    class Config:
        from_attributes = True


class MoveOut(BaseModel):
    id: int
    remote_id: Optional[str] = None
    title: str
    description: str
    interested: List[str]
    not_interested: List[str]
    interested_count: int = 0
    comments: List[MoveCommentOut] = []
    created_at: datetime

    class Config:
        from_attributes = True
