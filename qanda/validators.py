"""
Q&A Backend: Request Validators
================================

What:  Pure functions that turn a raw request body (or query string) into a
       typed payload, or reject it with ValidationError (HTTP 400).
How:   Presence is checked first so each failure gets its own message, then
       the payload model parses the data. Nothing here touches the database,
       so a rejected request never reaches a persistence call.
Who:   Called by route handlers before any existence guard or service.

Rules:
    question   title, description, category: present, strings, non-empty
    answer     content: present, string, non-empty, at most 300 characters
    vote       vote: present and exactly 1 or -1 (booleans are not numbers here)
    search     at least one of title/category, each a single string
"""

from typing import Any, Dict

from pydantic import ValidationError as PydanticValidationError
from starlette.datastructures import QueryParams

from qanda.exceptions import ValidationError
from qanda.schemas.answer import MAX_ANSWER_LENGTH, AnswerPayload
from qanda.schemas.question import QuestionPayload, QuestionSearchParams
from qanda.schemas.vote import VotePayload

INVALID_QUESTION_MESSAGE = "Invalid request data."
CONTENT_REQUIRED_MESSAGE = "Content is required."
CONTENT_TOO_LONG_MESSAGE = f"Content must not exceed {MAX_ANSWER_LENGTH} characters."
CONTENT_NOT_STRING_MESSAGE = "Content must be a string."
VOTE_REQUIRED_MESSAGE = "Vote is required."
INVALID_VOTE_MESSAGE = "Invalid vote value. Vote must be either 1 or -1."
INVALID_SEARCH_MESSAGE = "Invalid search parameters."

SEARCH_FIELDS = ("title", "category")


def _require_object(body: Any, message: str) -> Dict[str, Any]:
    if not isinstance(body, dict):
        raise ValidationError(message=message, context={"reason": "body must be a JSON object"})
    return body


def _failed_fields(exc: PydanticValidationError) -> list:
    return sorted({str(err["loc"][0]) for err in exc.errors() if err.get("loc")})


def validate_question_payload(body: Any) -> QuestionPayload:
    """Shared by create and update: all three fields or nothing."""
    data = _require_object(body, INVALID_QUESTION_MESSAGE)
    try:
        return QuestionPayload.model_validate(data)
    except PydanticValidationError as e:
        raise ValidationError(
            message=INVALID_QUESTION_MESSAGE,
            context={"fields": _failed_fields(e)},
        ) from None


def validate_answer_content(body: Any) -> AnswerPayload:
    data = _require_object(body, CONTENT_REQUIRED_MESSAGE)
    content = data.get("content")

    if content is None or content == "":
        raise ValidationError(message=CONTENT_REQUIRED_MESSAGE, field="content")
    if not isinstance(content, str):
        raise ValidationError(message=CONTENT_NOT_STRING_MESSAGE, field="content")
    if len(content) > MAX_ANSWER_LENGTH:
        raise ValidationError(
            message=CONTENT_TOO_LONG_MESSAGE,
            field="content",
            context={"max_length": MAX_ANSWER_LENGTH, "length": len(content)},
        )

    return AnswerPayload(content=content)


def validate_vote(body: Any) -> VotePayload:
    """
    Accepts exactly the numbers 1 and -1.

    JSON has a single number type, so `1.0` is the same value as `1` and is
    accepted; `true`, `"1"` and `0` are rejected.
    """
    data = _require_object(body, VOTE_REQUIRED_MESSAGE)
    if "vote" not in data or data["vote"] is None:
        raise ValidationError(message=VOTE_REQUIRED_MESSAGE, field="vote")

    vote = data["vote"]
    if isinstance(vote, bool) or not isinstance(vote, (int, float)) or vote not in (1, -1):
        raise ValidationError(message=INVALID_VOTE_MESSAGE, field="vote", context={"allowed": [1, -1]})

    return VotePayload(vote=int(vote))


def validate_search_params(query: QueryParams) -> QuestionSearchParams:
    """
    An empty value counts as absent. A key given more than once is the wrong
    type (a list, not a string) and is rejected rather than picking one.
    """
    terms: Dict[str, str] = {}
    for name in SEARCH_FIELDS:
        values = query.getlist(name)
        if len(values) > 1:
            raise ValidationError(message=INVALID_SEARCH_MESSAGE, field=name, context={"reason": "must be a string"})
        if values and values[0]:
            terms[name] = values[0]

    if not terms:
        raise ValidationError(
            message=INVALID_SEARCH_MESSAGE,
            context={"reason": "provide title and/or category"},
        )

    return QuestionSearchParams(**terms)
