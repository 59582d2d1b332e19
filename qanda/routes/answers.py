"""
Q&A Backend: Answer Route Handlers
===================================

What:  POST /answers/{answer_id}/vote.
How:   Validate the vote, check the answer exists (the answer's question is
       not looked up), append the vote row.
"""

from typing import Any

from fastapi import APIRouter, Body, Depends, Path
from sqlalchemy.ext.asyncio import AsyncSession

from qanda.database import get_db_session
from qanda.routes import MAX_ROW_ID, error_responses
from qanda.schemas import request_body
from qanda.schemas.common import MessageResponse
from qanda.schemas.vote import VotePayload
from qanda.services.vote_service import vote_service
from qanda.validators import validate_vote

router = APIRouter(prefix="/answers", tags=["Answers"])


@router.post(
    "/{answer_id}/vote",
    response_model=MessageResponse,
    responses=error_responses(400, 404, 500),
    summary="Vote on an answer",
    description="Cast a vote (1 for upvote, -1 for downvote) on an answer.",
    openapi_extra=request_body(VotePayload),
)
async def vote_answer(
    answer_id: int = Path(..., ge=1, le=MAX_ROW_ID, description="ID of the answer to vote on"),
    body: Any = Body(None),
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    payload = validate_vote(body)
    await vote_service.vote_answer(db, answer_id, payload)
    return MessageResponse(message="Vote on the answer has been recorded successfully.")
