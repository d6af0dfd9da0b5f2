# taskhub/services/lookups.py
import logging
from typing import Optional, Type, TypeVar
from fastapi import HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from taskhub.utils.errors import NotFoundError

logger = logging.getLogger(__name__)

M = TypeVar("M")


def parse_id(entity_id) -> Optional[int]:
    """Wire ids are strings; only positive integers can resolve to a row"""
    text = str(entity_id).strip() if entity_id is not None else ""
    if not text.isdigit():
        return None
    return int(text)


def get_or_404(db: Session, model: Type[M], entity_id, label: str) -> M:
    pk = parse_id(entity_id)
    instance = db.get(model, pk) if pk is not None else None
    if instance is None:
        raise NotFoundError(label, str(entity_id))
    return instance


def commit_or_500(db: Session, action: str) -> None:
    """Commit, or roll back and surface a 500 naming the failed action"""
    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Database error while trying to {action}: {e}")
        raise HTTPException(status_code=500, detail=f"Could not {action}")
