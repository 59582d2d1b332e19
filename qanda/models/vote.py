"""
Q&A Backend: Vote SQLAlchemy Models
====================================

What:  Append-only vote logs for questions and answers.

Each row is one independent +1/-1 vote. Rows are never updated, and no
running tally is stored or computed, so concurrent voters only ever insert.
"""

from sqlalchemy import CheckConstraint, Index, Integer, SmallInteger
from sqlalchemy.orm import Mapped, mapped_column

from qanda.database import Base


class QuestionVote(Base):
    __tablename__ = "question_votes"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    question_id: Mapped[int] = mapped_column(Integer, nullable=False)
    vote: Mapped[int] = mapped_column(SmallInteger, nullable=False)

    __table_args__ = (
        CheckConstraint("vote IN (1, -1)", name="ck_question_votes_vote"),
        Index("idx_question_votes_question_id", "question_id"),
    )


class AnswerVote(Base):
    __tablename__ = "answer_votes"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    answer_id: Mapped[int] = mapped_column(Integer, nullable=False)
    vote: Mapped[int] = mapped_column(SmallInteger, nullable=False)

    __table_args__ = (
        CheckConstraint("vote IN (1, -1)", name="ck_answer_votes_vote"),
        Index("idx_answer_votes_answer_id", "answer_id"),
    )
