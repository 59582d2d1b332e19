"""
Q&A Backend: Question Schemas
==============================

What:  Request payload and response envelopes for the /questions routes.

QuestionPayload is produced by `validate_question_payload`, not by FastAPI's
body parsing, so a bad body yields our 400 message instead of a 422.
"""

from typing import List, Optional

from pydantic import BaseModel, Field


class QuestionPayload(BaseModel):
    """Body of POST /questions and PUT /questions/{id}."""
    title: str = Field(min_length=1, description="The title of the question")
    description: str = Field(min_length=1, description="The detailed description of the question")
    category: str = Field(min_length=1, description="The category of the question")


class QuestionResponse(BaseModel):
    id: int = Field(description="The question ID")
    title: str = Field(description="The question title")
    description: str = Field(description="The question description")
    category: str = Field(description="The question category")

    model_config = {"from_attributes": True}


class QuestionListResponse(BaseModel):
    data: List[QuestionResponse]


class QuestionDetailResponse(BaseModel):
    data: QuestionResponse


class QuestionWriteResponse(BaseModel):
    """Returned by create and update; `data` carries the stored row."""
    message: str
    data: QuestionResponse


class QuestionSearchParams(BaseModel):
    """At least one field is set; produced by `validate_search_params`."""
    title: Optional[str] = None
    category: Optional[str] = None
