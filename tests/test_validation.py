import pytest

from newsdesk.api.v1.contents.schemas import ContentRequest
from newsdesk.api.v1.users.schemas import UpdatePasswordRequest
from newsdesk.core.exceptions import InvalidParameter, ValidationFailed
from newsdesk.core.validation import validate_payload

VALID = {
    "title": "Go basics",
    "excerpt": "Intro",
    "description": "Body",
    "status": "PUBLISH",
    "category_id": 1,
}


def test_missing_fields_are_reported_together():
    with pytest.raises(ValidationFailed) as exc:
        validate_payload(ContentRequest, b"{}", stage="[TEST] 1")
    assert exc.value.status_code == 400
    assert exc.value.detail == (
        "validation error: title is required; excerpt is required; description is required; "
        "status is required; category_id is required"
    )


def test_empty_strings_count_as_missing():
    with pytest.raises(ValidationFailed) as exc:
        validate_payload(ContentRequest, {**VALID, "title": ""}, stage="[TEST] 1")
    assert exc.value.messages == ["title is required"]


def test_category_must_be_positive():
    with pytest.raises(ValidationFailed) as exc:
        validate_payload(ContentRequest, {**VALID, "category_id": 0}, stage="[TEST] 1")
    assert exc.value.messages == ["category_id must be greater than 0"]


def test_min_length_message():
    payload = {"current_password": "x", "new_password": "short", "confirm_password": "short"}
    with pytest.raises(ValidationFailed) as exc:
        validate_payload(UpdatePasswordRequest, payload, stage="[TEST] 1")
    assert exc.value.messages == [
        "new_password must be at least 8 characters long",
        "confirm_password must be at least 8 characters long",
    ]


@pytest.mark.parametrize("raw", [b"{not json", b"[1, 2]", "\"text\""])
def test_malformed_body_is_invalid_parameter(raw):
    with pytest.raises(InvalidParameter) as exc:
        validate_payload(ContentRequest, raw, stage="[TEST] 1")
    assert exc.value.detail == "Invalid request body"


def test_tags_accept_comma_separated_string():
    data = validate_payload(ContentRequest, {**VALID, "tags": "go,backend"}, stage="[TEST] 1")
    assert data.tags == ["go", "backend"]


def test_tags_default_to_empty_list():
    data = validate_payload(ContentRequest, VALID, stage="[TEST] 1")
    assert data.tags == []
    assert data.image == ""
