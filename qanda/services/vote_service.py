"""
Q&A Backend: Vote Service
==========================

What:  Appends one vote row per call.
How:   Existence guard for the target, then a single INSERT. Votes are never
       read back or aggregated here, so concurrent voters on the same target
       cannot lose each other's rows.
"""

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from qanda.exceptions import DatabaseError
from qanda.models import AnswerVote, QuestionVote
from qanda.schemas.vote import VotePayload
from qanda.services.guards import ensure_answer_exists, ensure_question_exists

logger = logging.getLogger(__name__)


class VoteService:

    async def vote_question(self, db: AsyncSession, question_id: int, payload: VotePayload) -> None:
        await ensure_question_exists(db, question_id)

        try:
            db.add(QuestionVote(question_id=question_id, vote=payload.vote))
            await db.flush()
            await db.commit()
        except SQLAlchemyError as e:
            logger.error("Database error voting on question %s: %s", question_id, str(e))
            raise DatabaseError.from_store_error("Unable to vote question.", e, question_id=question_id)

        logger.debug("Vote %+d recorded for question %s", payload.vote, question_id)

    async def vote_answer(self, db: AsyncSession, answer_id: int, payload: VotePayload) -> None:
        # Only the answer is checked; its question is not looked up
        await ensure_answer_exists(db, answer_id)

        try:
            db.add(AnswerVote(answer_id=answer_id, vote=payload.vote))
            await db.flush()
            await db.commit()
        except SQLAlchemyError as e:
            logger.error("Database error voting on answer %s: %s", answer_id, str(e))
            raise DatabaseError.from_store_error("Unable to vote answer.", e, answer_id=answer_id)

        logger.debug("Vote %+d recorded for answer %s", payload.vote, answer_id)


vote_service = VoteService()
