"""
Errors raised by the subscription, confirmation and publishing workflows.

Every workflow failure is one of three kinds, each mapped to a single HTTP
status by the API layer. Lower-level causes are attached with
``raise ... from exc`` and rendered for the logs by ``error_chain_fmt``;
they are never sent to the caller.
"""


class WorkflowError(Exception):
    """Base class for workflow failures."""

    status_code: int = 500
    detail: str = "Internal server error"


class ValidationError(WorkflowError):
    """Client-supplied data broke one or more domain rules."""

    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.detail = message


class AuthError(WorkflowError):
    """Credentials were missing, malformed or wrong."""

    status_code = 401
    detail = "Authentication failed."

    def __init__(self, message: str, realm: str = "publish"):
        super().__init__(message)
        self.realm = realm

    @property
    def challenge(self) -> str:
        """Value for the WWW-Authenticate response header."""
        return f'Basic realm="{self.realm}"'


class UnexpectedError(WorkflowError):
    """Storage, transport or configuration failure."""

    status_code = 500


def error_chain_fmt(exc: BaseException) -> str:
    """
    Render an exception followed by every exception that caused it.

    Explicit causes (``raise ... from``) are preferred; implicit context is
    followed when no explicit cause was given and it was not suppressed.
    """
    lines = [f"{exc}", ""]
    seen = {id(exc)}
    current = _next_in_chain(exc)
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        lines.append("Caused by:")
        lines.append(f"\t{type(current).__name__}: {current}")
        current = _next_in_chain(current)
    return "\n".join(lines).rstrip()


def _next_in_chain(exc: BaseException) -> BaseException | None:
    if exc.__cause__ is not None:
        return exc.__cause__
    if exc.__suppress_context__:
        return None
    return exc.__context__
