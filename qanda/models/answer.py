"""
Q&A Backend: Answer SQLAlchemy Model
=====================================

What:  ORM model for the `answers` table.

`question_id` is foreign-key shaped but carries no database constraint:
the question's existence is checked by `ensure_question_exists` when the
answer is created. The 300-character cap on `content` is enforced by the
validators, so the column stays TEXT.
"""

from sqlalchemy import Index, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from qanda.database import Base


class Answer(Base):
    __tablename__ = "answers"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    question_id: Mapped[int] = mapped_column(Integer, nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)

    # Listing and bulk-deleting answers filter on question_id
    __table_args__ = (
        Index("idx_answers_question_id", "question_id"),
    )

    def __repr__(self) -> str:
        return f"<Answer(id={self.id}, question_id={self.question_id})>"
