"""
Unit tests for the service error hierarchy.
"""

from mindful_heaven.core.errors import NotAuthorized, NotFound, ServiceError, UpstreamError, ValidationFailed


class TestServiceErrors:
    def test_default_status_codes(self):
        assert ServiceError("x").status_code == 500
        assert ValidationFailed("x").status_code == 400
        assert NotAuthorized("x").status_code == 401
        assert NotFound("x").status_code == 404
        assert UpstreamError("x").status_code == 500

    def test_status_code_override(self):
        assert UpstreamError("Rate limited", status_code=429).status_code == 429

    def test_payload_includes_extra_fields(self):
        error = NotFound("no_questions", message="No security questions set up")

        assert error.to_payload() == {"error": "no_questions", "message": "No security questions set up"}
        assert error.message == "no_questions"

    def test_message_is_exception_text(self):
        assert str(ValidationFailed("Email is required")) == "Email is required"
