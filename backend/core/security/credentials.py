"""
HTTP Basic authentication credential parsing.
"""

import base64
import binascii
from dataclasses import dataclass, field


class CredentialsError(ValueError):
    """Raised when an Authorization header cannot be turned into credentials."""


@dataclass(frozen=True)
class Credentials:
    """Username/password pair supplied by a caller."""

    username: str
    password: str = field(repr=False)


def parse_basic_credentials(authorization: str | None) -> Credentials:
    """
    Parse an ``Authorization: Basic <base64(username:password)>`` header.

    The decoded value is split once on the first colon, so passwords may
    themselves contain colons.

    Raises:
        CredentialsError: describing the first problem found
    """
    if authorization is None:
        raise CredentialsError("The 'Authorization' header is missing.")

    if not authorization.startswith("Basic "):
        raise CredentialsError("The authorization scheme was not 'Basic'.")
    encoded_segment = authorization[len("Basic "):]

    try:
        decoded_bytes = base64.b64decode(encoded_segment, validate=True)
    except (binascii.Error, ValueError) as e:
        raise CredentialsError("Failed to base64-decode 'Basic' credentials.") from e

    try:
        decoded = decoded_bytes.decode("utf-8")
    except UnicodeDecodeError as e:
        raise CredentialsError("The decoded credential string is not valid UTF-8.") from e

    username, sep, password = decoded.partition(":")
    if not sep:
        raise CredentialsError("A password must be provided in 'Basic' auth.")

    return Credentials(username=username, password=password)
