"""
Q&A Backend: Question Route Handlers
=====================================

What:  Every route under /questions, including the answers and votes that
       hang off a single question.
How:   Each handler runs the same fixed sequence:
           1. validate   path id (FastAPI), then body/query (validators.py)
           2. check      existence guards, inside the service
           3. execute    SQL via the service, then build the JSON body
       A failing step raises; the global handlers in main.py turn it into a
       400/404/500 and later steps never run.
Who:   Mounted by main.create_app().

Bodies are taken as raw JSON (`Body(None)`) so the validators, not FastAPI,
decide what a bad payload looks like. `openapi_extra` documents them.
"""

from typing import Any

from fastapi import APIRouter, Body, Depends, Path, Request
from sqlalchemy.ext.asyncio import AsyncSession

from qanda.database import get_db_session
from qanda.routes import MAX_ROW_ID, error_responses
from qanda.schemas import request_body
from qanda.schemas.answer import AnswerListResponse, AnswerPayload, AnswerWriteResponse
from qanda.schemas.common import MessageResponse
from qanda.schemas.question import (
    QuestionDetailResponse,
    QuestionListResponse,
    QuestionPayload,
    QuestionWriteResponse,
)
from qanda.schemas.vote import VotePayload
from qanda.services.answer_service import answer_service
from qanda.services.question_service import question_service
from qanda.services.vote_service import vote_service
from qanda.validators import (
    validate_answer_content,
    validate_question_payload,
    validate_search_params,
    validate_vote,
)

router = APIRouter(prefix="/questions", tags=["Questions"])

QuestionId = Path(..., ge=1, le=MAX_ROW_ID, description="ID of the question")


# ══════════════════════════════════════════════════════════════════════════
# Questions
# ══════════════════════════════════════════════════════════════════════════

@router.get(
    "",
    response_model=QuestionListResponse,
    responses=error_responses(500),
    summary="Get all questions",
    description="Retrieve a list of all questions.",
)
async def list_questions(db: AsyncSession = Depends(get_db_session)) -> QuestionListResponse:
    questions = await question_service.list_questions(db)
    return QuestionListResponse(data=questions)


@router.post(
    "",
    status_code=201,
    response_model=QuestionWriteResponse,
    responses=error_responses(400, 500),
    summary="Create a new question",
    description="Create a new question with title, description, and category.",
    openapi_extra=request_body(QuestionPayload),
)
async def create_question(
    body: Any = Body(None),
    db: AsyncSession = Depends(get_db_session),
) -> QuestionWriteResponse:
    payload = validate_question_payload(body)
    question = await question_service.create_question(db, payload)
    return QuestionWriteResponse(message="Question created successfully.", data=question)


@router.get(
    "/search",
    response_model=QuestionListResponse,
    responses=error_responses(400, 500),
    summary="Search questions",
    description=(
        "Search questions by title and/or category. Matching is case-insensitive "
        "and partial; when both are given a question must match both."
    ),
    openapi_extra={
        "parameters": [
            {"in": "query", "name": "title", "schema": {"type": "string"}, "description": "Title to search for"},
            {"in": "query", "name": "category", "schema": {"type": "string"}, "description": "Category to search for"},
        ]
    },
)
async def search_questions(
    request: Request,
    db: AsyncSession = Depends(get_db_session),
) -> QuestionListResponse:
    params = validate_search_params(request.query_params)
    questions = await question_service.search_questions(db, params)
    return QuestionListResponse(data=questions)


@router.get(
    "/{question_id}",
    response_model=QuestionDetailResponse,
    responses=error_responses(400, 404, 500),
    summary="Get question by ID",
)
async def get_question(
    question_id: int = QuestionId,
    db: AsyncSession = Depends(get_db_session),
) -> QuestionDetailResponse:
    question = await question_service.get_question(db, question_id)
    return QuestionDetailResponse(data=question)


@router.put(
    "/{question_id}",
    response_model=QuestionWriteResponse,
    responses=error_responses(400, 404, 500),
    summary="Update question",
    description="Replace the title, description, and category of a question.",
    openapi_extra=request_body(QuestionPayload),
)
async def update_question(
    question_id: int = QuestionId,
    body: Any = Body(None),
    db: AsyncSession = Depends(get_db_session),
) -> QuestionWriteResponse:
    payload = validate_question_payload(body)
    question = await question_service.update_question(db, question_id, payload)
    return QuestionWriteResponse(message="Question updated successfully.", data=question)


@router.delete(
    "/{question_id}",
    response_model=MessageResponse,
    responses=error_responses(400, 404, 500),
    summary="Delete question",
    description="Delete a question together with its answers and all their votes.",
)
async def delete_question(
    question_id: int = QuestionId,
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    await question_service.delete_question(db, question_id)
    return MessageResponse(message="Question post has been deleted successfully.")


# ══════════════════════════════════════════════════════════════════════════
# Answers of a question
# ══════════════════════════════════════════════════════════════════════════

@router.get(
    "/{question_id}/answers",
    response_model=AnswerListResponse,
    responses=error_responses(400, 404, 500),
    summary="Get answers for a question",
    description=(
        "Retrieve all answers for a question. An existing question without "
        "answers returns an empty list; 404 means the question does not exist."
    ),
)
async def list_answers(
    question_id: int = QuestionId,
    db: AsyncSession = Depends(get_db_session),
) -> AnswerListResponse:
    answers = await answer_service.list_answers(db, question_id)
    return AnswerListResponse(data=answers)


@router.post(
    "/{question_id}/answers",
    response_model=AnswerWriteResponse,
    responses=error_responses(400, 404, 500),
    summary="Create answer for a question",
    openapi_extra=request_body(AnswerPayload),
)
async def create_answer(
    question_id: int = QuestionId,
    body: Any = Body(None),
    db: AsyncSession = Depends(get_db_session),
) -> AnswerWriteResponse:
    payload = validate_answer_content(body)
    answer = await answer_service.create_answer(db, question_id, payload)
    return AnswerWriteResponse(message="Answer created successfully.", data=answer)


@router.delete(
    "/{question_id}/answers",
    response_model=MessageResponse,
    responses=error_responses(400, 404, 500),
    summary="Delete all answers for a question",
    description="Succeeds even when the question has no answers.",
)
async def delete_answers(
    question_id: int = QuestionId,
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    await answer_service.delete_answers(db, question_id)
    return MessageResponse(message="All answers for the question have been deleted successfully.")


# ══════════════════════════════════════════════════════════════════════════
# Votes on a question
# ══════════════════════════════════════════════════════════════════════════

@router.post(
    "/{question_id}/vote",
    response_model=MessageResponse,
    responses=error_responses(400, 404, 500),
    summary="Vote on a question",
    description="Cast a vote (1 for upvote, -1 for downvote) on a question.",
    openapi_extra=request_body(VotePayload),
)
async def vote_question(
    question_id: int = QuestionId,
    body: Any = Body(None),
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    payload = validate_vote(body)
    await vote_service.vote_question(db, question_id, payload)
    return MessageResponse(message="Vote on the question has been recorded successfully.")
