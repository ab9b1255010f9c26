# app/models/move.py
"""
Community moves — short-lived visitor posts ("pickup game at 6?") that others
mark interested / not interested and comment on. Expire after MOVE_VISIBILITY_HOURS.
remote_id holds the id assigned by the remote store once the move is replicated.
"""

import json
from sqlalchemy import Column, Integer, String, DateTime, Text, ForeignKey
from sqlalchemy.orm import relationship
from app.database import Base


class Move(Base):
    __tablename__ = "moves"

    id = Column(Integer, primary_key=True, autoincrement=True)
    remote_id = Column(String(64), unique=True, index=True)
    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=False)
    interested_json = Column(Text, default="[]", nullable=False)
    not_interested_json = Column(Text, default="[]", nullable=False)
    created_at = Column(DateTime, nullable=False, index=True)

    comments = relationship("MoveComment", back_populates="move", cascade="all, delete-orphan",
                            order_by="MoveComment.created_at")

    @property
    def interested(self) -> list:
        return json.loads(self.interested_json or "[]")

    @interested.setter
    def interested(self, user_ids):
        self.interested_json = json.dumps(list(user_ids))

    @property
    def not_interested(self) -> list:
        return json.loads(self.not_interested_json or "[]")

    @not_interested.setter
    def not_interested(self, user_ids):
        self.not_interested_json = json.dumps(list(user_ids))

    def __repr__(self):
        return f"<Move {self.id} '{self.title}'>"


class MoveComment(Base):
    __tablename__ = "move_comments"

    id = Column(Integer, primary_key=True, autoincrement=True)
    move_id = Column(Integer, ForeignKey("moves.id", ondelete="CASCADE"), nullable=False, index=True)
    text = Column(Text, nullable=False)
    author = Column(String(100), default="You", nullable=False)
    created_at = Column(DateTime, nullable=False)

    move = relationship("Move", back_populates="comments")
