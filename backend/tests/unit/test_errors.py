"""
Tests for the workflow error family and cause-chain formatting.
"""

from services.errors import (
    AuthError,
    UnexpectedError,
    ValidationError,
    WorkflowError,
    error_chain_fmt,
)


class TestWorkflowErrors:
    """Tests for status codes and client-facing details."""

    def test_validation_error_exposes_its_message(self):
        error = ValidationError("name cannot be empty!")

        assert isinstance(error, WorkflowError)
        assert error.status_code == 400
        assert error.detail == "name cannot be empty!"

    def test_auth_error_hides_its_message(self):
        error = AuthError("unknown username or invalid password")

        assert error.status_code == 401
        assert error.detail == "Authentication failed."
        assert error.challenge == 'Basic realm="publish"'

    def test_auth_error_custom_realm(self):
        assert AuthError("nope", realm="admin").challenge == 'Basic realm="admin"'

    def test_unexpected_error_hides_its_message(self):
        error = UnexpectedError("Failed to insert new subscriber in the database.")

        assert error.status_code == 500
        assert error.detail == "Internal server error"


class TestErrorChainFmt:
    """Tests for error_chain_fmt."""

    def test_single_error(self):
        assert error_chain_fmt(ValueError("boom")) == "boom"

    def test_explicit_cause_chain(self):
        try:
            try:
                try:
                    raise OSError("connection reset")
                except OSError as e:
                    raise RuntimeError("query failed") from e
            except RuntimeError as e:
                raise UnexpectedError("Failed to load confirmed subscribers.") from e
        except UnexpectedError as e:
            error = e

        assert error_chain_fmt(error) == (
            "Failed to load confirmed subscribers.\n"
            "\n"
            "Caused by:\n"
            "\tRuntimeError: query failed\n"
            "Caused by:\n"
            "\tOSError: connection reset"
        )

    def test_implicit_context_is_followed(self):
        try:
            try:
                raise KeyError("user_id")
            except KeyError:
                raise UnexpectedError("lookup failed")
        except UnexpectedError as e:
            error = e

        assert "Caused by:\n\tKeyError: 'user_id'" in error_chain_fmt(error)

    def test_suppressed_context_is_not_followed(self):
        try:
            try:
                raise KeyError("user_id")
            except KeyError:
                raise UnexpectedError("lookup failed") from None
        except UnexpectedError as e:
            error = e

        assert error_chain_fmt(error) == "lookup failed"
