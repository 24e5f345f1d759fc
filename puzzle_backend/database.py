# puzzle_backend/database.py

from typing import Iterable
from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool
from puzzle_backend.config import Settings
from puzzle_backend.models import Base, Question


def create_db_engine(settings: Settings):
    url = make_url(settings.database_url())

    if url.get_backend_name() != "sqlite":
        return create_engine(url, pool_pre_ping=True)

    # In-memory SQLite must share one connection across threads.
    if url.database in (None, "", ":memory:"):
        return create_engine(
            url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    return create_engine(url, connect_args={"check_same_thread": False})


def create_session_factory(engine):
    return sessionmaker(
        autocommit=False,
        autoflush=False,
        bind=engine
    )


def init_db(engine):
    Base.metadata.create_all(bind=engine)


def get_db(request: Request):
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()


def seed_questions(db: Session, rows: Iterable[dict]) -> list[Question]:
    """
    Inserts question rows. Population is normally handled outside this
    service; this is for development databases and tests.
    """
    questions = [Question(**row) for row in rows]
    db.add_all(questions)
    db.commit()
    return questions
