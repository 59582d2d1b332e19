"""
Q&A Backend: Answer Service
============================

What:  Answers scoped to one question: list, create, delete all.
How:   Every method runs the question existence guard first, then its
       statements. A missing question is always 404; an existing question
       with no answers lists as an empty array.
Who:   Called by routes/questions.py (the /questions/{id}/answers routes).
"""

import logging
from typing import List

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from qanda.exceptions import DatabaseError
from qanda.models import Answer, AnswerVote
from qanda.schemas.answer import AnswerPayload, AnswerResponse
from qanda.services.guards import ensure_question_exists

logger = logging.getLogger(__name__)


class AnswerService:

    async def list_answers(self, db: AsyncSession, question_id: int) -> List[AnswerResponse]:
        await ensure_question_exists(db, question_id)

        try:
            result = await db.execute(
                select(Answer)
                .where(Answer.question_id == question_id)
                .order_by(Answer.id)
            )
            answers = result.scalars().all()
        except SQLAlchemyError as e:
            logger.error("Database error listing answers for question %s: %s", question_id, str(e))
            raise DatabaseError.from_store_error("Unable to fetch answers.", e, question_id=question_id)

        return [AnswerResponse.model_validate(a) for a in answers]

    async def create_answer(
        self,
        db: AsyncSession,
        question_id: int,
        payload: AnswerPayload,
    ) -> AnswerResponse:
        await ensure_question_exists(db, question_id)

        try:
            answer = Answer(question_id=question_id, content=payload.content)
            db.add(answer)
            await db.flush()
            await db.commit()
        except SQLAlchemyError as e:
            logger.error("Database error creating answer for question %s: %s", question_id, str(e))
            raise DatabaseError.from_store_error("Unable to create answers.", e, question_id=question_id)

        logger.info("Answer %s created for question %s", answer.id, question_id)
        return AnswerResponse.model_validate(answer)

    async def delete_answers(self, db: AsyncSession, question_id: int) -> int:
        """
        Delete every answer of the question, and their votes.

        Succeeds with zero rows when the question has no answers, so repeating
        the call is harmless. Returns the number of answers removed.
        """
        await ensure_question_exists(db, question_id)

        answer_ids = select(Answer.id).where(Answer.question_id == question_id)
        try:
            await db.execute(
                delete(AnswerVote)
                .where(AnswerVote.answer_id.in_(answer_ids))
                .execution_options(synchronize_session=False)
            )
            result = await db.execute(
                delete(Answer)
                .where(Answer.question_id == question_id)
                .execution_options(synchronize_session=False)
            )
            await db.commit()
        except SQLAlchemyError as e:
            logger.error("Database error deleting answers for question %s: %s", question_id, str(e))
            raise DatabaseError.from_store_error("Unable to delete answers.", e, question_id=question_id)

        deleted = result.rowcount
        logger.info("Deleted %d answers for question %s", deleted, question_id)
        return deleted


answer_service = AnswerService()
