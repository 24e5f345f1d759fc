# puzzle_backend/api/generate.py

import logging
from fastapi import APIRouter, Depends
from sqlalchemy import func, literal_column, select, table
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from puzzle_backend.api.auth import get_current_user
from puzzle_backend.core.errors import InternalError, NotFound
from puzzle_backend.core.security import TokenClaims
from puzzle_backend.database import get_db


logger = logging.getLogger(__name__)

router = APIRouter()

# The questions table is owned elsewhere; return whatever columns it has.
RANDOM_QUESTION = (
    select(literal_column("*"))
    .select_from(table("questions"))
    .order_by(func.random())
    .limit(1)
)


@router.get("/generate")
def generate(
    user: TokenClaims = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """
    Returns one question or puzzle picked uniformly at random.
    """
    try:
        row = db.execute(RANDOM_QUESTION).mappings().first()
    except SQLAlchemyError:
        logger.exception("Error in /generate")
        raise InternalError("Server error during question/puzzle generation.")

    if row is None:
        raise NotFound("No questions or puzzles available.")

    logger.debug("Served question %s to %s", row.get("id"), user.username)
    return dict(row)
