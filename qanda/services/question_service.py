"""
Q&A Backend: Question Service
==============================

What:  Statements behind the /questions routes: list, create, search, get,
       update, delete.
How:   Each method receives the request's AsyncSession, runs one or more
       parameterized statements, and returns response schemas. Any
       SQLAlchemyError becomes DatabaseError (500); zero affected rows on a
       keyed update/delete becomes NotFoundError (404).
Who:   Called by routes/questions.py after the payload has been validated.

Delete cascade:
    The store has no foreign keys, so delete_question removes dependents
    explicitly, in one session transaction:
        answer_votes of the question's answers → answers → question_votes → question
    If the final DELETE matches nothing the request fails with 404 and the
    session rolls back.
"""

import logging
from typing import List

from sqlalchemy import delete, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from qanda.exceptions import DatabaseError, NotFoundError
from qanda.models import Answer, AnswerVote, Question, QuestionVote
from qanda.schemas.question import (
    QuestionPayload,
    QuestionResponse,
    QuestionSearchParams,
)

logger = logging.getLogger(__name__)

LIKE_ESCAPE = "\\"


def contains_pattern(term: str) -> str:
    """
    ILIKE pattern matching `term` anywhere, with the client's own `%` and `_`
    treated as literal characters.
    """
    escaped = (
        term.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )
    return f"%{escaped}%"


class QuestionService:
    """Stateless; every call gets its own session."""

    async def list_questions(self, db: AsyncSession) -> List[QuestionResponse]:
        try:
            result = await db.execute(select(Question).order_by(Question.id))
            questions = result.scalars().all()
        except SQLAlchemyError as e:
            logger.error("Database error listing questions: %s", str(e), exc_info=True)
            raise DatabaseError.from_store_error("Unable to fetch questions.", e)

        return [QuestionResponse.model_validate(q) for q in questions]

    async def create_question(self, db: AsyncSession, payload: QuestionPayload) -> QuestionResponse:
        try:
            question = Question(
                title=payload.title,
                description=payload.description,
                category=payload.category,
            )
            db.add(question)
            await db.flush()  # assigns the generated id
            await db.commit()
        except SQLAlchemyError as e:
            logger.error("Database error creating question: %s", str(e), exc_info=True)
            raise DatabaseError.from_store_error("Unable to create question.", e)

        logger.info("Question %s created (category=%s)", question.id, question.category)
        return QuestionResponse.model_validate(question)

    async def search_questions(
        self,
        db: AsyncSession,
        params: QuestionSearchParams,
    ) -> List[QuestionResponse]:
        """
        Case-insensitive partial match on the supplied fields, AND-combined.

        Query plan (both terms):
            SELECT * FROM questions
            WHERE title ILIKE :title AND category ILIKE :category
        """
        query = select(Question)
        if params.title:
            query = query.where(Question.title.ilike(contains_pattern(params.title), escape=LIKE_ESCAPE))
        if params.category:
            query = query.where(Question.category.ilike(contains_pattern(params.category), escape=LIKE_ESCAPE))

        try:
            result = await db.execute(query.order_by(Question.id))
            questions = result.scalars().all()
        except SQLAlchemyError as e:
            logger.error("Database error searching questions: %s", str(e), exc_info=True)
            raise DatabaseError.from_store_error("Unable to fetch a question.", e)

        return [QuestionResponse.model_validate(q) for q in questions]

    async def get_question(self, db: AsyncSession, question_id: int) -> QuestionResponse:
        try:
            result = await db.execute(select(Question).where(Question.id == question_id))
            question = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Database error fetching question %s: %s", question_id, str(e))
            raise DatabaseError.from_store_error("Unable to fetch question.", e, question_id=question_id)

        if question is None:
            raise NotFoundError(resource="question", resource_id=question_id)

        return QuestionResponse.model_validate(question)

    async def update_question(
        self,
        db: AsyncSession,
        question_id: int,
        payload: QuestionPayload,
    ) -> QuestionResponse:
        """Single UPDATE keyed by id; concurrent updates are last-write-wins."""
        stmt = (
            update(Question)
            .where(Question.id == question_id)
            .values(
                title=payload.title,
                description=payload.description,
                category=payload.category,
            )
            .execution_options(synchronize_session=False)
        )
        try:
            result = await db.execute(stmt)
            if result.rowcount == 0:
                raise NotFoundError(resource="question", resource_id=question_id)
            await db.commit()
        except SQLAlchemyError as e:
            logger.error("Database error updating question %s: %s", question_id, str(e))
            raise DatabaseError.from_store_error("Unable to update question.", e, question_id=question_id)

        return QuestionResponse(id=question_id, **payload.model_dump())

    async def delete_question(self, db: AsyncSession, question_id: int) -> None:
        answer_ids = select(Answer.id).where(Answer.question_id == question_id)
        try:
            await db.execute(
                delete(AnswerVote)
                .where(AnswerVote.answer_id.in_(answer_ids))
                .execution_options(synchronize_session=False)
            )
            await db.execute(
                delete(Answer)
                .where(Answer.question_id == question_id)
                .execution_options(synchronize_session=False)
            )
            await db.execute(
                delete(QuestionVote)
                .where(QuestionVote.question_id == question_id)
                .execution_options(synchronize_session=False)
            )
            result = await db.execute(
                delete(Question)
                .where(Question.id == question_id)
                .execution_options(synchronize_session=False)
            )
            if result.rowcount == 0:
                raise NotFoundError(resource="question", resource_id=question_id)
            await db.commit()
        except SQLAlchemyError as e:
            logger.error("Database error deleting question %s: %s", question_id, str(e))
            raise DatabaseError.from_store_error("Unable to delete question.", e, question_id=question_id)

        logger.info("Question %s deleted with its answers and votes", question_id)


question_service = QuestionService()
