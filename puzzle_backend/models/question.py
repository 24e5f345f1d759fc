# puzzle_backend/models/question.py

from sqlalchemy import Column, Integer, String, Text
from . import Base


class Question(Base):
    """
    Default layout used when the questions table does not exist yet.
    /generate reads rows without relying on these columns.
    """
    __tablename__ = "questions"

    id = Column(Integer, primary_key=True, index=True)
    kind = Column(String, nullable=True)
    content = Column(Text, nullable=False)
    answer = Column(Text, nullable=True)
