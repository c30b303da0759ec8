# lunchbot/core/errors.py

"""Errors raised while handling a slash command.

Each error is terminal for its request. The exception handler registered in
``lunchbot.main`` logs it and mirrors it to Slack as ``status_code`` plus the
message as a plain-text body.
"""


class LunchError(Exception):
    """Base exception for all lunch bot errors."""

    status_code = 500


class MethodNotAllowed(LunchError):
    status_code = 405

    def __init__(self, message: str = "Method Not Allowed.") -> None:
        super().__init__(message)


class BodyReadFailure(LunchError):
    """The request body could not be read or decoded."""


class MalformedForm(LunchError):
    """The request body is not a valid URL-encoded form."""


class Unauthorized(LunchError):
    status_code = 401

    def __init__(self, message: str = "Unauthorized Token.") -> None:
        super().__init__(message)


class InvalidSubCommand(LunchError):
    def __init__(self, message: str = "Invalid SubCommand.") -> None:
        super().__init__(message)


class StoreFailure(LunchError):
    """Datastore rejected a read or write."""

    def __init__(self, message: str = "", *, operation: str = "") -> None:
        super().__init__(message)
        self.operation = operation
