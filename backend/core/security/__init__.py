"""
Security utilities for authentication.
"""

from .credentials import Credentials, CredentialsError, parse_basic_credentials
from .password import DUMMY_PASSWORD_HASH, PasswordHasher

__all__ = [
    "Credentials",
    "CredentialsError",
    "DUMMY_PASSWORD_HASH",
    "PasswordHasher",
    "parse_basic_credentials",
]
