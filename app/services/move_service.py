# app/services/move_service.py
"""
Community moves — visitor posts others can join, skip or comment on.

Local DB is authoritative for the API. When a remote store is configured:
  create   → inserted remotely and awaited, so the local row learns its remote id
  interest → rpc add_move_interest   (background)
  comment  → rpc add_move_comment    (background)
  startup  → rpc get_recent_moves is merged into the local feed by remote id;
             on failure the local rows are kept and the expired ones pruned.
Moves expire MOVE_VISIBILITY_HOURS after creation.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional
from sqlalchemy.orm import Session
from app.config import settings
from app.errors import InvalidMove, RemoteSyncFailure, UnknownMove
from app.models.move import Move, MoveComment
from app.services.remote_sync import RemoteStoreClient, fire_and_forget, get_remote_client
from app.utils.clock import ms_to_datetime
from app.utils.logger import get_logger

logger = get_logger(__name__)

MOVES_TABLE = "moves"


def _cutoff(now: Optional[datetime] = None) -> datetime:
    return (now or datetime.utcnow()) - timedelta(hours=settings.MOVE_VISIBILITY_HOURS)


def parse_remote_time(value) -> datetime:
    """ISO-8601 or epoch ms from the remote store → naive UTC, the way rows are stored locally."""
    if not value:
        return datetime.utcnow()
    if isinstance(value, (int, float)):
        return ms_to_datetime(int(value)).replace(tzinfo=None)
    parsed = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def get_move(db: Session, move_id: int) -> Move:
    move = db.query(Move).filter(Move.id == move_id).first()
    if not move:
        raise UnknownMove(move_id)
    return move


def list_active_moves(db: Session, now: Optional[datetime] = None) -> list:
    """Moves newer than the visibility window, newest first."""
    return (db.query(Move)
            .filter(Move.created_at > _cutoff(now))
            .order_by(Move.created_at.desc())
            .all())


def prune_expired_moves(db: Session, now: Optional[datetime] = None) -> int:
    expired = db.query(Move).filter(Move.created_at <= _cutoff(now)).all()
    for move in expired:
        db.delete(move)
    db.commit()
    if expired:
        logger.info(f"[MOVES] Pruned {len(expired)} expired move(s)")
    return len(expired)


async def create_move(db: Session, title: str, description: str) -> Move:
    title = (title or "").strip()
    description = (description or "").strip()
    if not title or not description:
        raise InvalidMove("A move needs a title and a description")

    move = Move(title=title, description=description, created_at=datetime.utcnow())
    move.interested = []
    move.not_interested = []
    db.add(move)
    db.commit()
    logger.info(f"[MOVES] New move {move.id}: {title}")

    remote = get_remote_client()
    if remote is not None:
        try:
            row = await remote.insert_returning(MOVES_TABLE, {
                "title": title, "description": description,
                "interested": [], "not_interested": [], "comments": [],
            })
        except RemoteSyncFailure as e:
            logger.warning(f"[SYNC] Remote store unavailable, move {move.id} kept locally only: {e}")
        else:
            move.remote_id = str(row["id"])
            move.created_at = parse_remote_time(row.get("created_at"))
            db.commit()
    return move


async def update_move_interest(db: Session, move_id: int, interested: bool,
                               user_id: Optional[str] = None) -> Move:
    """A voter is in at most one list: the vote moves them, it never duplicates."""
    user_id = user_id or settings.MOVE_USER_ID
    move = get_move(db, move_id)
    joined = [u for u in move.interested if u != user_id]
    skipped = [u for u in move.not_interested if u != user_id]
    (joined if interested else skipped).append(user_id)
    move.interested = joined
    move.not_interested = skipped
    db.commit()
    logger.info(f"[MOVES] {move.id}: {len(joined)} interested, {len(skipped)} not interested")

    remote = get_remote_client()
    if remote is not None and move.remote_id:
        fire_and_forget(remote.rpc("add_move_interest", {
            "move_id_param": move.remote_id,
            "user_id_param": user_id,
            "is_interested": interested,
        }), f"interest on move {move.id}")
    return move


async def add_move_comment(db: Session, move_id: int, text: str,
                           author: Optional[str] = None) -> MoveComment:
    text = (text or "").strip()
    if not text:
        raise InvalidMove("Comment text is required")
    author = author or settings.MOVE_COMMENT_AUTHOR
    move = get_move(db, move_id)
    comment = MoveComment(move_id=move.id, text=text, author=author, created_at=datetime.utcnow())
    db.add(comment)
    db.commit()

    remote = get_remote_client()
    if remote is not None and move.remote_id:
        fire_and_forget(remote.rpc("add_move_comment", {
            "move_id_param": move.remote_id,
            "comment_text": text,
            "author_name": author,
        }), f"comment on move {move.id}")
    return comment


def _apply_remote_move(db: Session, data: dict) -> Move:
    remote_id = str(data["id"])
    move = db.query(Move).filter(Move.remote_id == remote_id).first()
    if not move:
        move = Move(remote_id=remote_id)
        db.add(move)
    move.title = data.get("title") or ""
    move.description = data.get("description") or ""
    move.interested = data.get("interested") or []
    move.not_interested = data.get("not_interested") or []
    move.created_at = parse_remote_time(data.get("created_at"))
    move.comments = [
        MoveComment(text=c.get("text", ""), author=c.get("author") or settings.MOVE_COMMENT_AUTHOR,
                    created_at=parse_remote_time(c.get("created_at") or c.get("timestamp")))
        for c in (data.get("comments") or [])
    ]
    return move


async def load_moves(db: Session, remote: Optional[RemoteStoreClient] = None) -> list:
    """Refresh the feed from the remote store, falling back to the local rows."""
    if remote is not None:
        try:
            rows = await remote.rpc("get_recent_moves")
        except RemoteSyncFailure as e:
            logger.warning(f"[SYNC] Remote moves unavailable, using local feed: {e}")
            rows = None
        if rows:
            for data in rows:
                _apply_remote_move(db, data)
            db.commit()
            logger.info(f"[MOVES] Loaded {len(rows)} move(s) from remote store")
            return list_active_moves(db)

    prune_expired_moves(db)
    return list_active_moves(db)
