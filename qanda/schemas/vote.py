"""
Q&A Backend: Vote Schemas
==========================

One body shape serves both vote routes.
"""

from typing import Literal

from pydantic import BaseModel, Field


class VotePayload(BaseModel):
    """Body of POST /questions/{id}/vote and POST /answers/{id}/vote."""
    vote: Literal[1, -1] = Field(description="1 for upvote, -1 for downvote")
