"""
Q&A Backend: Pydantic Request/Response Schemas
===============================================

What:  The API contract. Payload models are what the validators return;
       response models are what the routes serialize and what OpenAPI
       documents.

Schemas are separate from the SQLAlchemy models so the stored columns and
the exposed fields can change independently.
"""

from typing import Any, Dict, Type

from pydantic import BaseModel


def request_body(model: Type[BaseModel]) -> Dict[str, Any]:
    """
    Builds an `openapi_extra` block documenting a JSON request body.

    Routes read the body as raw JSON and hand it to a validator, so FastAPI
    cannot infer the schema on its own.
    """
    return {
        "requestBody": {
            "required": True,
            "content": {
                "application/json": {"schema": model.model_json_schema()},
            },
        }
    }
