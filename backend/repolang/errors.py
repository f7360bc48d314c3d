"""Errors raised while talking to GitHub and while enriching a batch."""

from typing import Optional


class GitHubError(Exception):
    """Base class for upstream failures.

    ``full_name`` identifies the repository whose call failed, when the
    failure belongs to a single repository.
    """

    def __init__(self, message: str, full_name: Optional[str] = None):
        super().__init__(message)
        self.full_name = full_name


class TransportError(GitHubError):
    """The request could not be built or sent, or no response came back."""


class UpstreamError(GitHubError):
    def __init__(self, message: str, status_code: int, full_name: Optional[str] = None):
        super().__init__(message, full_name=full_name)
        self.status_code = status_code


class DecodeError(GitHubError):
    """The response body does not have the expected structure."""


class BatchError(Exception):
    """First failure seen while enriching a batch; the whole batch is discarded."""

    def __init__(self, cause: BaseException):
        super().__init__(str(cause) or type(cause).__name__)
        self.cause = cause
