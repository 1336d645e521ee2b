"""
Unit tests for request schemas (field rules for users and tasks).
"""
import pytest

from taskmanager.core.errors import ValidationError
from taskmanager.schemas import TaskUpdateIn, UserCreateIn, UserUpdateIn, validate_payload


class TestUserCreate:

    def test_normalizes_fields(self):
        body = validate_payload(UserCreateIn, {
            "name": "  Jonathan ",
            "email": "  Jonathan@Example.COM ",
            "password": " MyPass777 ",
        })
        assert body.name == "Jonathan"
        assert body.email == "jonathan@example.com"
        assert body.password == "MyPass777"
        assert body.age == 0

    @pytest.mark.parametrize("password", ["short", "myPassWord123", "   abc12   "])
    def test_rejects_weak_passwords(self, password):
        with pytest.raises(ValidationError):
            validate_payload(UserCreateIn, {"name": "Jo", "email": "jo@example.com", "password": password})

    def test_password_message_mentions_forbidden_word(self):
        with pytest.raises(ValidationError, match='cannot contain the word "password"'):
            validate_payload(UserCreateIn, {"name": "Jo", "email": "jo@example.com", "password": "password123"})

    def test_rejects_invalid_email(self):
        with pytest.raises(ValidationError, match="email"):
            validate_payload(UserCreateIn, {"name": "Jo", "email": "not-an-email", "password": "MyPass777"})

    def test_rejects_negative_age(self):
        with pytest.raises(ValidationError, match="age"):
            validate_payload(UserCreateIn, {"name": "Jo", "email": "jo@example.com", "password": "MyPass777", "age": -1})

    def test_rejects_blank_name(self):
        with pytest.raises(ValidationError, match="name"):
            validate_payload(UserCreateIn, {"name": "   ", "email": "jo@example.com", "password": "MyPass777"})

    def test_rejects_non_object_body(self):
        with pytest.raises(ValidationError):
            validate_payload(UserCreateIn, ["not", "an", "object"])


class TestUserUpdate:

    def test_only_sent_fields_are_set(self):
        body = validate_payload(UserUpdateIn, {"name": "MikeG"})
        assert body.model_fields_set == {"name"}

    def test_null_is_rejected(self):
        with pytest.raises(ValidationError, match="cannot be null"):
            validate_payload(UserUpdateIn, {"name": None})


class TestTaskUpdate:

    def test_description_limit(self):
        validate_payload(TaskUpdateIn, {"description": "x" * 50})
        with pytest.raises(ValidationError):
            validate_payload(TaskUpdateIn, {"description": "x" * 55})

    def test_description_is_trimmed_before_length_check(self):
        body = validate_payload(TaskUpdateIn, {"description": "  " + "x" * 50 + "  "})
        assert body.description == "x" * 50
