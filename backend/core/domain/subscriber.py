"""Subscriber domain value objects.

Instances can only be obtained through validation: the constructors check
every rule and raise ``DomainValidationError`` listing each rule that was
broken, so holding a ``SubscriberName`` or ``SubscriberEmail`` is proof that
the wrapped string is valid.
"""
from dataclasses import dataclass

import regex
from email_validator import EmailNotValidError, validate_email

MAX_NAME_GRAPHEMES = 256
FORBIDDEN_NAME_CHARACTERS = frozenset('/()"<>\\{}')

_GRAPHEME = regex.compile(r"\X")


class DomainValidationError(ValueError):
    """Raised when raw input violates one or more domain rules."""

    def __init__(self, violations: list[str]):
        self.violations = list(violations)
        super().__init__(", ".join(self.violations))


def _grapheme_count(value: str) -> int:
    return len(_GRAPHEME.findall(value))


@dataclass(frozen=True)
class SubscriberName:
    """A subscriber's display name."""

    value: str

    def __post_init__(self):
        checks = [
            (self.value.strip() != "", "name cannot be empty!"),
            (
                _grapheme_count(self.value) <= MAX_NAME_GRAPHEMES,
                f"name cannot be more than {MAX_NAME_GRAPHEMES} characters!",
            ),
            (
                not any(c in FORBIDDEN_NAME_CHARACTERS for c in self.value),
                "name cannot contain special characters!",
            ),
        ]
        violations = [message for is_valid, message in checks if not is_valid]
        if violations:
            raise DomainValidationError(violations)

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class SubscriberEmail:
    """A syntactically valid email address."""

    value: str

    def __post_init__(self):
        try:
            validate_email(self.value, check_deliverability=False)
        except EmailNotValidError:
            raise DomainValidationError([f"{self.value} is not a valid subscriber email"]) from None

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class NewSubscriber:
    """A validated subscription request."""

    name: SubscriberName
    email: SubscriberEmail


def parse_name(raw: str) -> SubscriberName:
    """Parse a raw name, reporting every broken rule at once."""
    return SubscriberName(raw)


def parse_email(raw: str) -> SubscriberEmail:
    return SubscriberEmail(raw)


def parse_new_subscriber(raw_name: str, raw_email: str) -> NewSubscriber:
    """
    Parse both fields independently and merge their violations.

    Raises:
        DomainValidationError: with name violations first, then email ones.
    """
    violations: list[str] = []
    name = email = None

    try:
        name = parse_name(raw_name)
    except DomainValidationError as e:
        violations.extend(e.violations)

    try:
        email = parse_email(raw_email)
    except DomainValidationError as e:
        violations.extend(e.violations)

    if violations:
        raise DomainValidationError(violations)
    return NewSubscriber(name=name, email=email)
