"""
Q&A Backend: Validator Unit Tests
==================================

What:  Tests for the pure request validators.
How:   Plain function calls; no database, no HTTP.

What we test:
    ✅ Question payload: all three fields required, non-empty strings
    ✅ Answer content: required, string, at most 300 characters
    ✅ Vote: exactly 1 or -1, booleans and strings rejected
    ✅ Search: at least one term, repeated keys rejected, empty means absent
"""

import pytest
from starlette.datastructures import QueryParams

from qanda.exceptions import ValidationError
from qanda.validators import (
    CONTENT_NOT_STRING_MESSAGE,
    CONTENT_REQUIRED_MESSAGE,
    CONTENT_TOO_LONG_MESSAGE,
    INVALID_QUESTION_MESSAGE,
    INVALID_SEARCH_MESSAGE,
    INVALID_VOTE_MESSAGE,
    VOTE_REQUIRED_MESSAGE,
    validate_answer_content,
    validate_question_payload,
    validate_search_params,
    validate_vote,
)


class TestValidateQuestionPayload:

    def test_valid_payload(self, question_payload):
        payload = validate_question_payload(question_payload)
        assert payload.title == question_payload["title"]
        assert payload.category == "Programming"

    @pytest.mark.parametrize("missing", ["title", "description", "category"])
    def test_missing_field_rejected(self, question_payload, missing):
        del question_payload[missing]
        with pytest.raises(ValidationError) as exc_info:
            validate_question_payload(question_payload)
        assert exc_info.value.message == INVALID_QUESTION_MESSAGE
        assert missing in exc_info.value.context["fields"]

    def test_empty_string_rejected(self, question_payload):
        question_payload["title"] = ""
        with pytest.raises(ValidationError):
            validate_question_payload(question_payload)

    def test_non_string_rejected(self, question_payload):
        question_payload["category"] = 42
        with pytest.raises(ValidationError) as exc_info:
            validate_question_payload(question_payload)
        assert exc_info.value.context["fields"] == ["category"]

    @pytest.mark.parametrize("body", [None, [], "title", 7])
    def test_non_object_body_rejected(self, body):
        with pytest.raises(ValidationError) as exc_info:
            validate_question_payload(body)
        assert exc_info.value.message == INVALID_QUESTION_MESSAGE


class TestValidateAnswerContent:

    def test_valid_content(self):
        assert validate_answer_content({"content": "Try a list comprehension."}).content == (
            "Try a list comprehension."
        )

    def test_exactly_300_characters_accepted(self):
        assert len(validate_answer_content({"content": "x" * 300}).content) == 300

    def test_301_characters_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_answer_content({"content": "x" * 301})
        assert exc_info.value.message == CONTENT_TOO_LONG_MESSAGE
        assert exc_info.value.context["length"] == 301

    @pytest.mark.parametrize("body", [{}, {"content": ""}, {"content": None}, None])
    def test_missing_content_rejected(self, body):
        with pytest.raises(ValidationError) as exc_info:
            validate_answer_content(body)
        assert exc_info.value.message == CONTENT_REQUIRED_MESSAGE

    def test_non_string_content_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_answer_content({"content": 12345})
        assert exc_info.value.message == CONTENT_NOT_STRING_MESSAGE


class TestValidateVote:

    @pytest.mark.parametrize("value", [1, -1])
    def test_valid_votes(self, value):
        assert validate_vote({"vote": value}).vote == value

    def test_integral_float_accepted_as_int(self):
        payload = validate_vote({"vote": -1.0})
        assert payload.vote == -1
        assert isinstance(payload.vote, int)

    @pytest.mark.parametrize("value", [0, 2, -2, 0.5, "1", True, False, [1]])
    def test_invalid_votes_rejected(self, value):
        with pytest.raises(ValidationError) as exc_info:
            validate_vote({"vote": value})
        assert exc_info.value.message == INVALID_VOTE_MESSAGE
        assert exc_info.value.field == "vote"

    @pytest.mark.parametrize("body", [{}, {"vote": None}, None])
    def test_missing_vote_rejected(self, body):
        with pytest.raises(ValidationError) as exc_info:
            validate_vote(body)
        assert exc_info.value.message == VOTE_REQUIRED_MESSAGE


class TestValidateSearchParams:

    def test_title_only(self):
        params = validate_search_params(QueryParams("title=python"))
        assert params.title == "python"
        assert params.category is None

    def test_both_terms(self):
        params = validate_search_params(QueryParams("title=list&category=Programming"))
        assert (params.title, params.category) == ("list", "Programming")

    def test_no_terms_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_search_params(QueryParams(""))
        assert exc_info.value.message == INVALID_SEARCH_MESSAGE

    def test_empty_value_treated_as_absent(self):
        with pytest.raises(ValidationError):
            validate_search_params(QueryParams("title="))

        params = validate_search_params(QueryParams("title=&category=Math"))
        assert params.title is None
        assert params.category == "Math"

    def test_repeated_key_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_search_params(QueryParams("title=a&title=b"))
        assert exc_info.value.field == "title"

    def test_unrelated_keys_ignored(self):
        with pytest.raises(ValidationError):
            validate_search_params(QueryParams("page=2"))
