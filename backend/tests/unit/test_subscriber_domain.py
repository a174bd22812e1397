"""
Tests for subscriber name and email parsing.
"""

import pytest

from core.domain.subscriber import (
    FORBIDDEN_NAME_CHARACTERS,
    MAX_NAME_GRAPHEMES,
    DomainValidationError,
    NewSubscriber,
    SubscriberEmail,
    SubscriberName,
    parse_email,
    parse_name,
    parse_new_subscriber,
)


class TestParseName:
    """Tests for subscriber name validation."""

    def test_name_of_max_length_is_valid(self):
        name = "\u0451" * MAX_NAME_GRAPHEMES
        assert str(parse_name(name)) == name

    def test_name_is_returned_unchanged(self):
        raw = "  Phil Nadon  "
        assert parse_name(raw).value == raw

    def test_graphemes_are_counted_not_code_points(self):
        # "e" followed by a combining acute accent is one grapheme
        name = "e\u0301" * MAX_NAME_GRAPHEMES
        assert len(name) == 2 * MAX_NAME_GRAPHEMES
        assert str(parse_name(name)) == name

    def test_name_longer_than_max_is_rejected(self):
        with pytest.raises(DomainValidationError) as exc_info:
            parse_name("a" * (MAX_NAME_GRAPHEMES + 1))

        assert exc_info.value.violations == ["name cannot be more than 256 characters!"]

    @pytest.mark.parametrize("name", ["", " ", "\t\n  "])
    def test_blank_name_is_rejected(self, name):
        with pytest.raises(DomainValidationError) as exc_info:
            parse_name(name)

        assert exc_info.value.violations == ["name cannot be empty!"]

    @pytest.mark.parametrize("char", sorted(FORBIDDEN_NAME_CHARACTERS))
    def test_forbidden_characters_are_rejected(self, char):
        with pytest.raises(DomainValidationError) as exc_info:
            parse_name(f"phil{char}nadon")

        assert exc_info.value.violations == ["name cannot contain special characters!"]

    def test_too_long_and_forbidden_character_reports_both(self):
        with pytest.raises(DomainValidationError) as exc_info:
            parse_name("a" * MAX_NAME_GRAPHEMES + "<")

        assert exc_info.value.violations == [
            "name cannot be more than 256 characters!",
            "name cannot contain special characters!",
        ]
        assert str(exc_info.value) == (
            "name cannot be more than 256 characters!, "
            "name cannot contain special characters!"
        )

    def test_name_cannot_be_built_without_validation(self):
        with pytest.raises(DomainValidationError):
            SubscriberName("{}")


class TestParseEmail:
    """Tests for subscriber email validation."""

    @pytest.mark.parametrize("email", ["", "nadon.io", "@nadon.io"])
    def test_invalid_emails_are_rejected(self, email):
        with pytest.raises(DomainValidationError) as exc_info:
            parse_email(email)

        assert exc_info.value.violations == [f"{email} is not a valid subscriber email"]

    def test_valid_email_is_accepted(self):
        email = parse_email("phil@nadon.io")

        assert isinstance(email, SubscriberEmail)
        assert str(email) == "phil@nadon.io"

    def test_email_is_returned_unchanged(self):
        assert parse_email("Phil.Nadon@Nadon.io").value == "Phil.Nadon@Nadon.io"


class TestParseNewSubscriber:
    """Tests for combined subscriber validation."""

    def test_valid_subscriber(self):
        subscriber = parse_new_subscriber("phil nadon", "phil@nadon.io")

        assert isinstance(subscriber, NewSubscriber)
        assert str(subscriber.name) == "phil nadon"
        assert str(subscriber.email) == "phil@nadon.io"

    def test_name_and_email_violations_are_merged(self):
        with pytest.raises(DomainValidationError) as exc_info:
            parse_new_subscriber("   ", "nadon.io")

        assert exc_info.value.violations == [
            "name cannot be empty!",
            "nadon.io is not a valid subscriber email",
        ]

    def test_only_email_violation(self):
        with pytest.raises(DomainValidationError) as exc_info:
            parse_new_subscriber("phil", "@nadon.io")

        assert exc_info.value.violations == ["@nadon.io is not a valid subscriber email"]
