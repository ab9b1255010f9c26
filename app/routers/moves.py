# app/routers/moves.py
"""Community moves feed — post, join/skip, comment."""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from app.database import get_db
from app.models.move import Move
from app.schemas.move import MoveCreate, MoveInterest, MoveCommentCreate, MoveCommentOut, MoveOut
from app.services.move_service import (
    add_move_comment, create_move, get_move, list_active_moves, update_move_interest,
)

router = APIRouter()


def _with_counts(move: Move) -> Move:
    move.interested_count = len(move.interested)
    return move


@router.get("/moves", response_model=list[MoveOut], summary="Moves from the last day")
def get_moves(db: Session = Depends(get_db)):
    return [_with_counts(m) for m in list_active_moves(db)]


@router.post("/moves", response_model=MoveOut, status_code=status.HTTP_201_CREATED)
async def post_move(body: MoveCreate, db: Session = Depends(get_db)):
    return _with_counts(await create_move(db, body.title, body.description))


@router.get("/moves/{move_id}", response_model=MoveOut)
def get_one_move(move_id: int, db: Session = Depends(get_db)):
    return _with_counts(get_move(db, move_id))


@router.post("/moves/{move_id}/interest", response_model=MoveOut,
             summary="Mark interested / not interested")
async def post_interest(move_id: int, body: MoveInterest, db: Session = Depends(get_db)):
    move = await update_move_interest(db, move_id, body.interest == "interested")
    return _with_counts(move)


@router.post("/moves/{move_id}/comments", response_model=MoveCommentOut,
             status_code=status.HTTP_201_CREATED)
async def post_move_comment(move_id: int, body: MoveCommentCreate, db: Session = Depends(get_db)):
    return await add_move_comment(db, move_id, body.text)
