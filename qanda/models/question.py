"""
Q&A Backend: Question SQLAlchemy Model
=======================================

What:  ORM model for the `questions` table.
Who:   Used by QuestionService and the existence guards.

Lifecycle:
    1. Created by POST /questions
    2. Updated in place by PUT /questions/{id} (last write wins)
    3. Deleted by DELETE /questions/{id}; answers and votes referencing it
       are deleted first by the service, not by a database cascade
"""

from sqlalchemy import Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from qanda.database import Base


class Question(Base):
    __tablename__ = "questions"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    category: Mapped[str] = mapped_column(Text, nullable=False)

    def __repr__(self) -> str:
        return f"<Question(id={self.id}, title='{self.title}', category='{self.category}')>"
