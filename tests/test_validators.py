import pytest

from chat_relay.core.exceptions import ValidationError
from chat_relay.core.validators import validate_chat_payload, validate_message, validate_model
from chat_relay.llm.catalog import DEFAULT_MODEL


def test_validate_message_trims():
    assert validate_message("  hello \n") == (True, "hello", None)


@pytest.mark.parametrize("value", [None, "", "   ", 0, 1.5, True, [], {}])
def test_validate_message_rejects(value):
    is_valid, message, error = validate_message(value)

    assert is_valid is False
    assert message == ""
    assert error


def test_validate_model_defaults():
    assert validate_model(None) == (True, DEFAULT_MODEL, None)
    assert validate_model("llama-3.1-70b-instruct") == (True, "llama-3.1-70b-instruct", None)


def test_validate_model_rejects_non_string():
    is_valid, _, error = validate_model(["a"])

    assert is_valid is False
    assert "string" in error


def test_validate_chat_payload_builds_request():
    request = validate_chat_payload({"message": " hi ", "extra": 1})

    assert request.message == "hi"
    assert request.model == DEFAULT_MODEL


def test_validate_chat_payload_reports_bad_model():
    with pytest.raises(ValidationError) as exc_info:
        validate_chat_payload({"message": "hi", "model": 3})

    assert "model must be a string" in exc_info.value.details
    assert exc_info.value.status_code == 400
