"""
Q&A Backend: Existence Guards
==============================

What:  Checks that a referenced row exists before a dependent operation.
How:   SELECT id ... WHERE id = :id; zero rows raises NotFoundError (404).
Who:   Services, before creating/listing/deleting answers and before votes.

    create / list / delete answers for a question → ensure_question_exists
    vote on a question                            → ensure_question_exists
    vote on an answer                             → ensure_answer_exists
"""

import logging

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from qanda.exceptions import DatabaseError, NotFoundError
from qanda.models import Answer, Question

logger = logging.getLogger(__name__)


async def _ensure_exists(db: AsyncSession, model, resource: str, row_id: int) -> None:
    try:
        result = await db.execute(select(model.id).where(model.id == row_id))
        found = result.scalar_one_or_none()
    except SQLAlchemyError as e:
        logger.error("Database error checking %s %s: %s", resource, row_id, str(e))
        raise DatabaseError.from_store_error(
            f"Error checking {resource} existence.", e, resource_id=row_id
        )

    if found is None:
        raise NotFoundError(resource=resource, resource_id=row_id)


async def ensure_question_exists(db: AsyncSession, question_id: int) -> None:
    await _ensure_exists(db, Question, "question", question_id)


async def ensure_answer_exists(db: AsyncSession, answer_id: int) -> None:
    await _ensure_exists(db, Answer, "answer", answer_id)
