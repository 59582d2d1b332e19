"""
Q&A Backend: API Routes Package
================================

Route Inventory:
    - questions.py:  GET/POST   /questions
                     GET        /questions/search
                     GET/PUT/DELETE /questions/{id}
                     GET/POST/DELETE /questions/{id}/answers
                     POST       /questions/{id}/vote
    - answers.py:    POST       /answers/{id}/vote
    - health.py:     GET        /health, GET /test

Routes stay thin: parse and validate input, call a service, wrap the result.
"""

from typing import Any, Dict

from qanda.schemas.common import ErrorResponse

# Ids are stored as 32-bit INTEGER; larger values can never name a row
MAX_ROW_ID = 2**31 - 1

_ERROR_DESCRIPTIONS = {
    400: "Invalid input",
    404: "Question or answer not found",
    500: "Server error",
}


def error_responses(*status_codes: int) -> Dict[int, Dict[str, Any]]:
    """OpenAPI `responses` entries for the error statuses a route can return."""
    return {
        code: {"description": _ERROR_DESCRIPTIONS[code], "model": ErrorResponse}
        for code in status_codes
    }
