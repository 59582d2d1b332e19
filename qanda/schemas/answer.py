"""
Q&A Backend: Answer Schemas
============================
"""

from typing import List

from pydantic import BaseModel, Field

MAX_ANSWER_LENGTH = 300


class AnswerPayload(BaseModel):
    """Body of POST /questions/{id}/answers."""
    content: str = Field(
        min_length=1,
        max_length=MAX_ANSWER_LENGTH,
        description=f"The content of the answer (at most {MAX_ANSWER_LENGTH} characters)",
    )


class AnswerResponse(BaseModel):
    id: int = Field(description="The answer ID")
    question_id: int = Field(description="The ID of the question this answer belongs to")
    content: str = Field(description="The answer content")

    model_config = {"from_attributes": True}


class AnswerListResponse(BaseModel):
    data: List[AnswerResponse]


class AnswerWriteResponse(BaseModel):
    message: str
    data: AnswerResponse
